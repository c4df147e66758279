from __future__ import annotations

from pydantic import BaseModel

from services.usda import FoodHit


class FoodSearchOut(BaseModel):
    foods: list[FoodHit]
