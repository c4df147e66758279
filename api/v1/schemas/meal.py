from __future__ import annotations

import datetime as dt

from pydantic import Field

from core.models.meal import FoodEntry, Meal

from .base import CamelModel


class FoodIn(CamelModel):
    food_id: int
    food_name: str = Field(..., min_length=1)
    calories: float | None = Field(None, ge=0)
    protein: float | None = Field(None, ge=0)
    carbs: float | None = Field(None, ge=0)
    fat: float | None = Field(None, ge=0)


class FoodOut(CamelModel):
    id: int                     # external (USDA) id
    record_id: int              # row id, used for deletion
    name: str
    calories: float = 0
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None

    @classmethod
    def from_entry(cls, f: FoodEntry) -> "FoodOut":
        return cls(
            id=f.food_id,
            record_id=f.record_id,
            name=f.name,
            calories=f.calories,
            protein=f.protein,
            carbs=f.carbs,
            fat=f.fat,
        )


class FoodEnvelope(CamelModel):
    food: FoodOut


class MealIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    date: dt.date


class MealOut(CamelModel):
    id: int
    name: str
    date: dt.date
    foods: list[FoodOut] = []

    @classmethod
    def from_meal(cls, m: Meal) -> "MealOut":
        return cls(
            id=m.id,
            name=m.name,
            date=m.date,
            foods=[FoodOut.from_entry(f) for f in m.foods],
        )


class MealEnvelope(CamelModel):
    meal: MealOut


class MealsOut(CamelModel):
    meals: list[MealOut]


class Message(CamelModel):
    message: str
