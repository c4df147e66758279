# api/v1/meals.py
from __future__ import annotations

import datetime as dt
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.v1.deps import current_user_id, get_store
from api.v1.schemas import (
    DailyProgressOut,
    FoodEnvelope,
    FoodIn,
    MealEnvelope,
    MealIn,
    MealOut,
    MealsOut,
    Message,
)
from api.v1.schemas.meal import FoodOut
from core.progress import goals_for_profile, summarize
from services.store import NutritionStore

router = APIRouter()


@router.get(
    "",
    response_model=MealsOut,
    summary="List a user's meals (with foods) for one day",
)
async def list_meals(
    date: dt.date = Query(..., description="YYYY-MM-DD"),
    user_id: int = Depends(current_user_id),
    store: NutritionStore = Depends(get_store),
) -> MealsOut:
    meals = await store.list_meals(user_id, date)
    return MealsOut(meals=[MealOut.from_meal(m) for m in meals])


@router.get(
    "/summary",
    response_model=DailyProgressOut,
    summary="Consumed vs. goal for one day",
)
async def day_summary(
    date: dt.date = Query(..., description="YYYY-MM-DD"),
    user_id: int = Depends(current_user_id),
    store: NutritionStore = Depends(get_store),
) -> DailyProgressOut:
    foods = await store.foods_for_day(user_id, date)
    goals = goals_for_profile(await store.get_profile(user_id))
    return DailyProgressOut.model_validate(asdict(summarize(foods, goals)))


@router.post(
    "",
    response_model=MealEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_meal(
    body: MealIn,
    user_id: int = Depends(current_user_id),
    store: NutritionStore = Depends(get_store),
) -> MealEnvelope:
    meal = await store.create_meal(user_id, body.name, body.date)
    return MealEnvelope(meal=MealOut.from_meal(meal))


@router.delete(
    "/{meal_id}",
    response_model=Message,
    summary="Delete a meal and every food logged in it",
)
async def delete_meal(
    meal_id: int,
    user_id: int = Depends(current_user_id),
    store: NutritionStore = Depends(get_store),
) -> Message:
    if not await store.delete_meal(meal_id, user_id):
        raise HTTPException(status_code=404, detail="Meal not found")
    return Message(message="Meal deleted successfully")


@router.post(
    "/{meal_id}/foods",
    response_model=FoodEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def add_food(
    meal_id: int,
    body: FoodIn,
    user_id: int = Depends(current_user_id),
    store: NutritionStore = Depends(get_store),
) -> FoodEnvelope:
    entry = await store.add_food(
        meal_id,
        user_id,
        food_id=body.food_id,
        name=body.food_name,
        calories=body.calories,
        protein=body.protein,
        carbs=body.carbs,
        fat=body.fat,
    )
    if entry is None:
        raise HTTPException(status_code=404, detail="Meal not found")
    return FoodEnvelope(food=FoodOut.from_entry(entry))


@router.delete(
    "/{meal_id}/foods/{record_id}",
    response_model=Message,
)
async def delete_food(
    meal_id: int,
    record_id: int,
    user_id: int = Depends(current_user_id),
    store: NutritionStore = Depends(get_store),
) -> Message:
    if await store.get_meal(meal_id, user_id) is None:
        raise HTTPException(status_code=404, detail="Meal not found")
    if not await store.delete_food(meal_id, user_id, record_id):
        raise HTTPException(status_code=404, detail="Food not found")
    return Message(message="Food deleted successfully")
