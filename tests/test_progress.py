from __future__ import annotations

from dataclasses import dataclass

from core.models.meal import FoodEntry
from core.models.user import UserProfile
from core.progress import (
    Goals,
    Nutrients,
    Percentages,
    bar_width,
    goals_for_profile,
    summarize,
)

GOALS = Goals(calories=2802, protein_grams=210, carbs_grams=280, fat_grams=93)


@dataclass
class Food:
    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None


def test_no_foods_consumes_nothing():
    s = summarize([], GOALS)
    assert s.consumed == Nutrients(0, 0, 0, 0)
    assert s.remaining_calories == 2802
    assert s.percentages is not None and s.percentages.calories == 0


def test_missing_protein_counts_as_zero():
    s = summarize([Food(calories=500)], GOALS)
    assert s.consumed.protein == 0
    assert s.percentages.calories == 18
    assert s.percentages.protein == 0
    assert s.remaining_calories == 2302


def test_sums_across_foods():
    foods = [
        Food(calories=300, protein=20, carbs=30, fat=10),
        Food(calories=None, protein=5),
        Food(calories=200, carbs=None, fat=3.5),
    ]
    s = summarize(foods, GOALS)
    assert s.consumed == Nutrients(calories=500, protein=25, carbs=30, fat=13.5)


def test_over_budget_is_not_clamped():
    s = summarize([Food(calories=3500, protein=300)], GOALS)
    assert s.percentages.calories == 125
    assert s.percentages.protein == 143
    assert s.remaining_calories == -698
    assert bar_width(s.percentages.calories) == 100


def test_zero_goals_yield_no_percentage_for_that_quantity():
    s = summarize([Food(calories=100)], Goals(calories=0, protein_grams=0, carbs_grams=0, fat_grams=0))
    assert s.percentages == Percentages(calories=None, protein=None, carbs=None, fat=None)
    assert s.remaining_calories == -100


def test_one_zero_goal_keeps_the_other_percentages():
    goals = Goals(calories=2802, protein_grams=350, carbs_grams=350, fat_grams=0)
    s = summarize([Food(calories=500, protein=35, fat=12)], goals)
    assert s.percentages.calories == 18
    assert s.percentages.protein == 10
    assert s.percentages.carbs == 0
    assert s.percentages.fat is None


def test_missing_goals():
    s = summarize([Food(calories=100)], None)
    assert s.percentages is None
    assert s.goals is None
    assert s.remaining_calories is None
    assert s.consumed.calories == 100


def test_food_entries_are_accepted_directly():
    entry = FoodEntry(record_id=1, food_id=99, name="Egg", calories=70, protein=6)
    assert summarize([entry], GOALS).consumed.protein == 6


def test_goals_for_profile():
    p = UserProfile(
        id=1,
        user_id=1,
        maintenance_calories=2802,
        protein_percentage=30,
        carbs_percentage=40,
        fat_percentage=30,
        onboarding_completed=True,
    )
    assert goals_for_profile(p) == GOALS
    assert goals_for_profile(p.model_copy(update={"onboarding_completed": False})) is None
    assert goals_for_profile(None) is None


def test_bar_width():
    assert bar_width(None) == 0
    assert bar_width(42) == 42
    assert bar_width(180) == 100
