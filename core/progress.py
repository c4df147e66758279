"""
core/progress.py
────────────────────────────────────────────────────────────────────────
Daily progress against the profile's budget.

``summarize()`` is a pure projection over one day's logged foods and the
goals derived from a profile.  Nothing is cached or stored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol

from core.models.user import UserProfile
from core.nutrition_calc import compute_macro_grams, round_half_up


class LoggedFood(Protocol):
    calories: float | None
    protein: float | None
    carbs: float | None
    fat: float | None


@dataclass(frozen=True)
class Nutrients:
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0


@dataclass(frozen=True)
class Goals:
    calories: int
    protein_grams: int
    carbs_grams: int
    fat_grams: int


@dataclass(frozen=True)
class Percentages:
    """A field is None when its own goal is 0."""

    calories: int | None
    protein: int | None
    carbs: int | None
    fat: int | None


@dataclass(frozen=True)
class DailyProgress:
    consumed: Nutrients
    goals: Goals | None
    percentages: Percentages | None     # None → no goals at all
    remaining_calories: float | None


def goals_for_profile(profile: UserProfile | None) -> Goals | None:
    if profile is None or not profile.onboarding_completed:
        return None
    pcts = (profile.protein_percentage, profile.carbs_percentage, profile.fat_percentage)
    if profile.maintenance_calories is None or None in pcts:
        return None

    grams = compute_macro_grams(profile.maintenance_calories, *pcts)  # type: ignore[arg-type]
    return Goals(
        calories=profile.maintenance_calories,
        protein_grams=grams.protein_grams,
        carbs_grams=grams.carbs_grams,
        fat_grams=grams.fat_grams,
    )


def total_consumed(foods: Iterable[LoggedFood]) -> Nutrients:
    """Missing values count as 0 here, and only here."""
    calories = protein = carbs = fat = 0.0
    for f in foods:
        calories += f.calories or 0
        protein += f.protein or 0
        carbs += f.carbs or 0
        fat += f.fat or 0
    return Nutrients(calories=calories, protein=protein, carbs=carbs, fat=fat)


def _pct(consumed: float, goal: float) -> int | None:
    if not goal:
        return None
    return round_half_up(consumed / goal * 100)


def summarize(foods: Iterable[LoggedFood], goals: Goals | None) -> DailyProgress:
    consumed = total_consumed(foods)
    if goals is None:
        return DailyProgress(consumed=consumed, goals=None, percentages=None, remaining_calories=None)

    percentages = Percentages(
        calories=_pct(consumed.calories, goals.calories),
        protein=_pct(consumed.protein, goals.protein_grams),
        carbs=_pct(consumed.carbs, goals.carbs_grams),
        fat=_pct(consumed.fat, goals.fat_grams),
    )

    return DailyProgress(
        consumed=consumed,
        goals=goals,
        percentages=percentages,
        remaining_calories=goals.calories - consumed.calories,
    )


def bar_width(percentage: int | None) -> int:
    """Clamp for a bounded progress bar; stored percentages stay unclamped."""
    if percentage is None:
        return 0
    return max(0, min(percentage, 100))
