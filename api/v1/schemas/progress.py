from __future__ import annotations

from .base import CamelModel


class ConsumedOut(CamelModel):
    calories: float
    protein: float
    carbs: float
    fat: float


class GoalsOut(CamelModel):
    calories: int
    protein_grams: int
    carbs_grams: int
    fat_grams: int


class PercentagesOut(CamelModel):
    calories: int | None
    protein: int | None
    carbs: int | None
    fat: int | None


class DailyProgressOut(CamelModel):
    consumed: ConsumedOut
    goals: GoalsOut | None
    percentages: PercentagesOut | None
    remaining_calories: float | None
