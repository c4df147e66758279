# tests/test_nutrition_calc.py
from __future__ import annotations

import math

import pytest

from core.nutrition_calc import (
    ACTIVITY_MULTIPLIERS,
    BodyStats,
    NutritionalCalculator,
    compute_bmr,
    compute_macro_grams,
    compute_tdee,
    maintenance_calories,
    round_half_up,
)

calc = NutritionalCalculator()

MALE_180LB = BodyStats(
    age=25,
    gender="male",
    weight_lbs=180,
    height_inches=70,
    activity_level="moderate",
)

LEVELS = ["sedentary", "light", "moderate", "active", "very_active"]


# ── BMR / TDEE ───────────────────────────────────────────────────────
def test_bmr_mifflin_male():
    expected = 10 * 81.64656 + 6.25 * 177.8 - 5 * 25 + 5   # 1807.7156
    assert math.isclose(calc.bmr(MALE_180LB), expected, rel_tol=1e-6)


def test_tdee_moderate_male():
    assert calc.tdee(MALE_180LB) == 2802
    assert maintenance_calories("male", 180, 70, 25, "moderate") == 2802


def test_female_and_other_offsets():
    male = compute_bmr("male", 180, 70, 25)
    assert math.isclose(compute_bmr("female", 180, 70, 25), male - 166)
    assert math.isclose(compute_bmr("other", 180, 70, 25), male - 83)


def test_unknown_gender_uses_other_branch():
    assert compute_bmr("robot", 150, 65, 40) == compute_bmr("other", 150, 65, 40)
    assert compute_bmr(None, 150, 65, 40) == compute_bmr("other", 150, 65, 40)


@pytest.mark.parametrize("level", [None, "", "couch_potato", "Moderate"])
def test_unknown_activity_falls_back_to_sedentary(level):
    bmr = compute_bmr("male", 180, 70, 25)
    assert compute_tdee(bmr, level) == compute_tdee(bmr, "sedentary") == 2169


def test_tdee_increases_with_activity():
    bmr = 1650.0
    values = [compute_tdee(bmr, lvl) for lvl in LEVELS]
    assert values == sorted(values)
    assert len(set(values)) == len(values)
    assert list(ACTIVITY_MULTIPLIERS) == LEVELS


@pytest.mark.parametrize("gender", ["male", "female", "other"])
def test_bmr_monotonic_in_weight_and_height(gender):
    weights = [compute_bmr(gender, w, 66, 35) for w in (100, 140, 180, 220, 300)]
    heights = [compute_bmr(gender, 160, h, 35) for h in (55, 60, 66, 72, 80)]
    assert weights == sorted(weights) and len(set(weights)) == 5
    assert heights == sorted(heights) and len(set(heights)) == 5


@pytest.mark.parametrize("gender", ["male", "female"])
def test_bmr_decreases_with_age(gender):
    ages = [compute_bmr(gender, 160, 66, a) for a in (18, 30, 45, 60, 80)]
    assert ages == sorted(ages, reverse=True)


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(2801.96) == 2802
    assert round_half_up(2.4999) == 2


# ── macro allocator ─────────────────────────────────────────────────
def test_macro_grams_30_40_30():
    g = compute_macro_grams(2802, 30, 40, 30)
    assert (g.protein_grams, g.carbs_grams, g.fat_grams) == (210, 280, 93)


@pytest.mark.parametrize("kcal", [1200, 1851, 2802, 3377])
@pytest.mark.parametrize("split", [(30, 40, 30), (25, 50, 25), (40, 30, 30), (0, 100, 0)])
def test_macro_grams_round_trip_energy(kcal, split):
    g = compute_macro_grams(kcal, *split)
    # each gram rounding can be off by ≤ 0.5 g → ≤ 2 + 2 + 4.5 kcal
    assert abs(g.kcal - kcal) <= 8.5


def test_macro_grams_partial_split_is_not_rejected():
    g = compute_macro_grams(2000, 50, 0, 0)
    assert (g.protein_grams, g.carbs_grams, g.fat_grams) == (250, 0, 0)


def test_targets_bundle():
    t = calc.targets(MALE_180LB, 30, 40, 30)
    assert t.maintenance_calories == 2802
    assert t.macros.protein_grams == 210
    assert math.isclose(t.bmr, calc.bmr(MALE_180LB))
