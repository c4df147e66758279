"""
core/nutrition_calc.py
────────────────────────────────────────────────────────────────────────
Energy model and macro allocator behind every calorie budget:

1. BMR  (Mifflin–St Jeor, imperial inputs converted to metric)
2. TDEE (BMR × activity multiplier, rounded to whole kcal)
3. Macro grams from a percentage split (4 / 4 / 9 kcal per gram)

Everything here is total over its numeric domain: unknown gender or
activity values fall back to documented defaults instead of raising.
Rejecting bad input is the job of the request schemas.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

Logger = logging.getLogger(__name__)

LBS_TO_KG = 0.453592
INCH_TO_CM = 2.54

# BMR offsets per gender branch.  "other" (and anything unrecognised) is the
# arithmetic midpoint of the male/female offsets: a policy constant kept for
# compatibility, not a validated physiological formula.
MALE_OFFSET = 5
FEMALE_OFFSET = -161
OTHER_GENDER_OFFSET = -78

ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "sedentary": 1.2,      # little or no exercise
    "light": 1.375,        # 1-3 days / week
    "moderate": 1.55,      # 3-5 days / week
    "active": 1.725,       # 6-7 days / week
    "very_active": 1.9,    # hard daily exercise or physical job
}
DEFAULT_MULTIPLIER = ACTIVITY_MULTIPLIERS["sedentary"]

KCAL_PER_GRAM = {"protein": 4, "carbs": 4, "fat": 9}


def round_half_up(value: float) -> int:
    """Nearest integer, .5 rounding up (``round()`` would bank to even)."""
    return int(math.floor(value + 0.5))


# ──────────────────────────────────────────────────────────────────────
#  Energy model
# ──────────────────────────────────────────────────────────────────────
def compute_bmr(
    gender: str | None, weight_lbs: float, height_inches: float, age: int
) -> float:
    weight_kg = weight_lbs * LBS_TO_KG
    height_cm = height_inches * INCH_TO_CM
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if gender == "male":
        return base + MALE_OFFSET
    if gender == "female":
        return base + FEMALE_OFFSET
    return base + OTHER_GENDER_OFFSET


def activity_multiplier(activity_level: str | None) -> float:
    return ACTIVITY_MULTIPLIERS.get(activity_level or "", DEFAULT_MULTIPLIER)


def compute_tdee(bmr: float, activity_level: str | None) -> int:
    return round_half_up(bmr * activity_multiplier(activity_level))


def maintenance_calories(
    gender: str | None,
    weight_lbs: float,
    height_inches: float,
    age: int,
    activity_level: str | None,
) -> int:
    """BMR → TDEE in one call; this is what gets stored on a profile."""
    kcal = compute_tdee(compute_bmr(gender, weight_lbs, height_inches, age), activity_level)
    Logger.debug("maintenance calories %s (gender=%s, activity=%s)", kcal, gender, activity_level)
    return kcal


# ──────────────────────────────────────────────────────────────────────
#  Macro allocator
# ──────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class MacroGrams:
    protein_grams: int
    carbs_grams: int
    fat_grams: int

    @property
    def kcal(self) -> int:
        return (
            self.protein_grams * KCAL_PER_GRAM["protein"]
            + self.carbs_grams * KCAL_PER_GRAM["carbs"]
            + self.fat_grams * KCAL_PER_GRAM["fat"]
        )


def _grams(kcal: float, pct: float, nutrient: str) -> int:
    return round_half_up(kcal * pct / 100 / KCAL_PER_GRAM[nutrient])


def compute_macro_grams(
    maintenance_kcal: float,
    protein_pct: float,
    carbs_pct: float,
    fat_pct: float,
) -> MacroGrams:
    """
    Pure unit conversion.  The split is *not* re-validated here so a
    partial split can still be previewed while the user is typing.
    """
    return MacroGrams(
        protein_grams=_grams(maintenance_kcal, protein_pct, "protein"),
        carbs_grams=_grams(maintenance_kcal, carbs_pct, "carbs"),
        fat_grams=_grams(maintenance_kcal, fat_pct, "fat"),
    )


# ──────────────────────────────────────────────────────────────────────
#  Body stats + calculator
# ──────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class BodyStats:
    age: int
    gender: str            # "male" | "female" | "other"
    weight_lbs: float
    height_inches: float
    activity_level: str    # sedentary … very_active


@dataclass(frozen=True)
class Targets:
    bmr: float
    maintenance_calories: int
    macros: MacroGrams


class NutritionalCalculator:
    """Source-of-truth for kcal + macro targets."""

    def bmr(self, s: BodyStats) -> float:
        return compute_bmr(s.gender, s.weight_lbs, s.height_inches, s.age)

    def tdee(self, s: BodyStats) -> int:
        return compute_tdee(self.bmr(s), s.activity_level)

    def targets(
        self,
        s: BodyStats,
        protein_pct: float = 0,
        carbs_pct: float = 0,
        fat_pct: float = 0,
    ) -> Targets:
        bmr = self.bmr(s)
        kcal = compute_tdee(bmr, s.activity_level)
        return Targets(
            bmr=bmr,
            maintenance_calories=kcal,
            macros=compute_macro_grams(kcal, protein_pct, carbs_pct, fat_pct),
        )
