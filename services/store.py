"""
services/store.py
────────────────────────────────────────────────────────────────────────
Persistence port used by the routers.

``NutritionStore`` is the interface; ``SqlStore`` implements it on one
``AsyncSession`` per request.  ``services.memory_store.InMemoryStore`` is
the transient twin used for local runs without ``DATABASE_URL`` and in
tests.  Every meal/food method takes the owner's ``user_id`` so another
user's rows are simply invisible.
"""
from __future__ import annotations

import abc
import datetime as dt

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from core.models.meal import FoodEntry, Meal
from core.models.user import User, UserProfile
from services import db


class EmailTaken(Exception):
    pass


class NutritionStore(abc.ABC):
    # ─── users ──────────────────────────────────────────────────────
    @abc.abstractmethod
    async def create_user(self, email: str, password_hash: str) -> User:
        """Insert the user *and* its empty profile; raise ``EmailTaken``."""

    @abc.abstractmethod
    async def get_user(self, user_id: int) -> User | None: ...

    @abc.abstractmethod
    async def get_user_by_email(self, email: str) -> User | None: ...

    # ─── profiles ───────────────────────────────────────────────────
    @abc.abstractmethod
    async def get_profile(self, user_id: int) -> UserProfile | None: ...

    @abc.abstractmethod
    async def save_profile(self, profile: UserProfile) -> UserProfile: ...

    @abc.abstractmethod
    async def list_profiles(self, user_id: int | None = None) -> list[UserProfile]: ...

    # ─── meals / foods ──────────────────────────────────────────────
    @abc.abstractmethod
    async def list_meals(self, user_id: int, day: dt.date) -> list[Meal]: ...

    @abc.abstractmethod
    async def create_meal(self, user_id: int, name: str, day: dt.date) -> Meal: ...

    @abc.abstractmethod
    async def get_meal(self, meal_id: int, user_id: int) -> Meal | None: ...

    @abc.abstractmethod
    async def delete_meal(self, meal_id: int, user_id: int) -> bool: ...

    @abc.abstractmethod
    async def add_food(
        self,
        meal_id: int,
        user_id: int,
        *,
        food_id: int,
        name: str,
        calories: float | None = None,
        protein: float | None = None,
        carbs: float | None = None,
        fat: float | None = None,
    ) -> FoodEntry | None: ...

    @abc.abstractmethod
    async def delete_food(self, meal_id: int, user_id: int, record_id: int) -> bool: ...

    async def foods_for_day(self, user_id: int, day: dt.date) -> list[FoodEntry]:
        return [f for m in await self.list_meals(user_id, day) for f in m.foods]


# ───────────────────────── SQL implementation ─────────────────────────
def _food(row: db.MealFood) -> FoodEntry:
    return FoodEntry(
        record_id=row.id,
        food_id=row.food_id,
        name=row.food_name,
        calories=row.calories or 0,
        protein=row.protein,
        carbs=row.carbs,
        fat=row.fat,
    )


def _meal(row: db.Meal) -> Meal:
    return Meal(
        id=row.id,
        user_id=row.user_id,
        name=row.name,
        date=row.meal_date,
        foods=[_food(f) for f in row.foods],
    )


class SqlStore(NutritionStore):
    def __init__(self, session: AsyncSession) -> None:
        self._db = session

    async def create_user(self, email: str, password_hash: str) -> User:
        if await self.get_user_by_email(email):
            raise EmailTaken(email)

        row = db.User(email=email, password_hash=password_hash)
        self._db.add(row)
        await self._db.flush()
        self._db.add(db.UserProfile(user_id=row.id, onboarding_completed=False))
        await self._db.commit()
        await self._db.refresh(row)
        return User.model_validate(row)

    async def get_user(self, user_id: int) -> User | None:
        row = await self._db.get(db.User, user_id)
        return User.model_validate(row) if row else None

    async def get_user_by_email(self, email: str) -> User | None:
        row = (
            await self._db.execute(select(db.User).where(db.User.email == email))
        ).scalar_one_or_none()
        return User.model_validate(row) if row else None

    async def _profile_row(self, user_id: int) -> db.UserProfile | None:
        return (
            await self._db.execute(
                select(db.UserProfile).where(db.UserProfile.user_id == user_id)
            )
        ).scalar_one_or_none()

    async def get_profile(self, user_id: int) -> UserProfile | None:
        row = await self._profile_row(user_id)
        return UserProfile.model_validate(row) if row else None

    async def save_profile(self, profile: UserProfile) -> UserProfile:
        row = await self._profile_row(profile.user_id)
        if row is None:
            row = db.UserProfile(user_id=profile.user_id)
            self._db.add(row)
        for key, value in profile.model_dump(exclude={"id", "user_id"}).items():
            setattr(row, key, value)
        await self._db.commit()
        await self._db.refresh(row)
        return UserProfile.model_validate(row)

    async def list_profiles(self, user_id: int | None = None) -> list[UserProfile]:
        q = select(db.UserProfile).order_by(db.UserProfile.user_id)
        if user_id is not None:
            q = q.where(db.UserProfile.user_id == user_id)
        rows = (await self._db.execute(q)).scalars().all()
        return [UserProfile.model_validate(r) for r in rows]

    async def list_meals(self, user_id: int, day: dt.date) -> list[Meal]:
        rows = (
            await self._db.execute(
                select(db.Meal)
                .where(db.Meal.user_id == user_id, db.Meal.meal_date == day)
                .options(selectinload(db.Meal.foods))
                .order_by(db.Meal.created_at, db.Meal.id)
                .execution_options(populate_existing=True)
            )
        ).scalars().all()
        return [_meal(r) for r in rows]

    async def create_meal(self, user_id: int, name: str, day: dt.date) -> Meal:
        row = db.Meal(user_id=user_id, name=name, meal_date=day)
        self._db.add(row)
        await self._db.commit()
        return Meal(id=row.id, user_id=user_id, name=name, date=day, foods=[])

    async def _owned_meal(self, meal_id: int, user_id: int) -> db.Meal | None:
        return (
            await self._db.execute(
                select(db.Meal)
                .where(db.Meal.id == meal_id, db.Meal.user_id == user_id)
                .options(selectinload(db.Meal.foods))
                # re-read foods added or bulk-deleted earlier in this session
                .execution_options(populate_existing=True)
            )
        ).scalar_one_or_none()

    async def get_meal(self, meal_id: int, user_id: int) -> Meal | None:
        row = await self._owned_meal(meal_id, user_id)
        return _meal(row) if row else None

    async def delete_meal(self, meal_id: int, user_id: int) -> bool:
        row = await self._owned_meal(meal_id, user_id)
        if row is None:
            return False
        await self._db.delete(row)
        await self._db.commit()
        return True

    async def add_food(
        self,
        meal_id: int,
        user_id: int,
        *,
        food_id: int,
        name: str,
        calories: float | None = None,
        protein: float | None = None,
        carbs: float | None = None,
        fat: float | None = None,
    ) -> FoodEntry | None:
        if await self._owned_meal(meal_id, user_id) is None:
            return None
        row = db.MealFood(
            meal_id=meal_id,
            food_id=food_id,
            food_name=name,
            calories=calories or 0,
            protein=protein,
            carbs=carbs,
            fat=fat,
        )
        self._db.add(row)
        await self._db.commit()
        return _food(row)

    async def delete_food(self, meal_id: int, user_id: int, record_id: int) -> bool:
        if await self._owned_meal(meal_id, user_id) is None:
            return False
        res = await self._db.execute(
            delete(db.MealFood).where(
                db.MealFood.id == record_id, db.MealFood.meal_id == meal_id
            )
        )
        await self._db.commit()
        return res.rowcount > 0
