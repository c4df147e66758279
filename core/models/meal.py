from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict


class FoodEntry(BaseModel):
    record_id: int
    food_id: int
    name: str
    calories: float = 0
    # None means "unknown", which is not the same thing as 0 g
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None

    model_config = ConfigDict(from_attributes=True)


class Meal(BaseModel):
    id: int
    user_id: int
    name: str
    date: dt.date
    foods: list[FoodEntry] = []

    model_config = ConfigDict(from_attributes=True)
