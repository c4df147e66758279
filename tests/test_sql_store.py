"""SqlStore against an in-memory SQLite database (aiosqlite driver)."""
from __future__ import annotations

import asyncio
import datetime as dt

import pytest
from sqlalchemy import func, select
from sqlalchemy.pool import StaticPool

from core.profile import ProfilePatch, complete_onboarding
from scripts.recalc_maintenance import refresh
from services import db
from services.db import Database
from services.store import EmailTaken, SqlStore

DAY = dt.date(2024, 1, 15)

SURVEY = ProfilePatch(
    age=25,
    gender="male",
    weight_lbs=180,
    height_inches=70,
    activity_level="moderate",
    protein_percentage=30,
    carbs_percentage=40,
    fat_percentage=30,
)


def _run(body):
    """Run ``body(store, session)`` on a fresh schema and return its result."""

    async def go():
        database = Database("sqlite+aiosqlite://", poolclass=StaticPool)
        try:
            await database.create_all()
            async for session in database.session():
                result = await body(SqlStore(session), session)
        finally:
            await database.dispose()
        return result

    return asyncio.run(go())


async def _food_rows(session) -> int:
    return (await session.execute(select(func.count()).select_from(db.MealFood))).scalar_one()


def test_create_user_creates_empty_profile():
    async def go(s, _):
        user = await s.create_user("a@example.com", "hash")
        with pytest.raises(EmailTaken):
            await s.create_user("a@example.com", "other")
        by_email = await s.get_user_by_email("a@example.com")
        return user, by_email, await s.get_profile(user.id), await s.get_user(999)

    user, by_email, profile, missing = _run(go)
    assert by_email.id == user.id
    assert by_email.password_hash == "hash"
    assert profile.user_id == user.id
    assert profile.onboarding_completed is False
    assert profile.maintenance_calories is None
    assert missing is None


def test_save_profile_round_trips_onboarding():
    async def go(s, _):
        user = await s.create_user("a@example.com", "hash")
        profile = complete_onboarding(await s.get_profile(user.id), SURVEY)
        await s.save_profile(profile)
        return await s.get_profile(user.id), await s.list_profiles(), await s.list_profiles(999)

    profile, everyone, nobody = _run(go)
    assert profile.onboarding_completed is True
    assert profile.maintenance_calories == 2802
    assert profile.weight_lbs == 180
    assert profile.activity_level == "moderate"
    assert [p.user_id for p in everyone] == [profile.user_id]
    assert nobody == []


def test_list_meals_by_owner_and_day_in_creation_order():
    async def go(s, _):
        a = await s.create_user("a@example.com", "hash")
        b = await s.create_user("b@example.com", "hash")
        await s.create_meal(a.id, "Breakfast", DAY)
        await s.create_meal(a.id, "Lunch", DAY)
        await s.create_meal(a.id, "Tomorrow", DAY + dt.timedelta(days=1))
        await s.create_meal(b.id, "Not mine", DAY)
        return await s.list_meals(a.id, DAY)

    assert [m.name for m in _run(go)] == ["Breakfast", "Lunch"]


def test_add_food_keeps_zero_apart_from_unknown():
    async def go(s, _):
        user = await s.create_user("a@example.com", "hash")
        meal = await s.create_meal(user.id, "Lunch", DAY)
        added = await s.add_food(
            meal.id, user.id, food_id=7, name="Lettuce", calories=5, protein=0.0, fat=0.2
        )
        return added, await s.get_meal(meal.id, user.id)

    added, meal = _run(go)
    assert added.record_id is not None
    (food,) = meal.foods
    assert food.name == "Lettuce"
    assert food.protein == 0.0
    assert food.carbs is None
    assert food.fat == 0.2


def test_other_users_meals_are_invisible():
    async def go(s, session):
        owner = await s.create_user("a@example.com", "hash")
        intruder = await s.create_user("b@example.com", "hash")
        meal = await s.create_meal(owner.id, "Lunch", DAY)
        food = await s.add_food(meal.id, owner.id, food_id=1, name="Rice", calories=200)
        return (
            await s.get_meal(meal.id, intruder.id),
            await s.add_food(meal.id, intruder.id, food_id=2, name="Stolen", calories=1),
            await s.delete_food(meal.id, intruder.id, food.record_id),
            await s.delete_meal(meal.id, intruder.id),
            await s.get_meal(meal.id, owner.id),
        )

    seen, added, food_deleted, meal_deleted, still_there = _run(go)
    assert seen is None
    assert added is None
    assert food_deleted is False
    assert meal_deleted is False
    assert [f.name for f in still_there.foods] == ["Rice"]


def test_delete_meal_cascades_to_foods():
    async def go(s, session):
        user = await s.create_user("a@example.com", "hash")
        meal = await s.create_meal(user.id, "Dinner", DAY)
        await s.add_food(meal.id, user.id, food_id=1, name="Salmon", calories=400, protein=40)
        await s.add_food(meal.id, user.id, food_id=2, name="Rice", calories=200)
        before = await _food_rows(session)
        deleted = await s.delete_meal(meal.id, user.id)
        again = await s.delete_meal(meal.id, user.id)
        return before, deleted, again, await _food_rows(session), await s.list_meals(user.id, DAY)

    before, deleted, again, after, meals = _run(go)
    assert before == 2
    assert (deleted, again) == (True, False)
    assert after == 0
    assert meals == []


def test_delete_food_reports_whether_a_row_went():
    async def go(s, _):
        user = await s.create_user("a@example.com", "hash")
        meal = await s.create_meal(user.id, "Snack", DAY)
        other = await s.create_meal(user.id, "Dinner", DAY)
        apple = await s.add_food(meal.id, user.id, food_id=5, name="Apple", calories=95)
        first = await s.delete_food(meal.id, user.id, apple.record_id)
        second = await s.delete_food(meal.id, user.id, apple.record_id)
        pear = await s.add_food(meal.id, user.id, food_id=6, name="Pear", calories=100)
        # right owner, wrong meal
        wrong_meal = await s.delete_food(other.id, user.id, pear.record_id)
        return first, second, wrong_meal, await s.get_meal(meal.id, user.id)

    first, second, wrong_meal, meal = _run(go)
    assert (first, second, wrong_meal) == (True, False, False)
    assert [f.name for f in meal.foods] == ["Pear"]


def test_foods_for_day_spans_meals():
    async def go(s, _):
        user = await s.create_user("a@example.com", "hash")
        m1 = await s.create_meal(user.id, "Breakfast", DAY)
        m2 = await s.create_meal(user.id, "Dinner", DAY)
        await s.add_food(m1.id, user.id, food_id=1, name="Oats", calories=150)
        await s.add_food(m2.id, user.id, food_id=2, name="Salmon", calories=400, protein=40)
        return await s.foods_for_day(user.id, DAY)

    foods = _run(go)
    assert [f.name for f in foods] == ["Oats", "Salmon"]
    assert foods[0].protein is None
    assert foods[1].protein == 40


def test_recalc_repairs_stale_maintenance():
    async def go(s, _):
        user = await s.create_user("a@example.com", "hash")
        await s.create_user("b@example.com", "hash")  # never onboarded
        profile = complete_onboarding(await s.get_profile(user.id), SURVEY)
        await s.save_profile(profile.model_copy(update={"maintenance_calories": 1234}))
        first = await refresh(s)
        second = await refresh(s)
        return first, second, await s.get_profile(user.id)

    first, second, profile = _run(go)
    assert (first, second) == (1, 0)
    assert profile.maintenance_calories == 2802
