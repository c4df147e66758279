"""In-memory ``NutritionStore`` for local runs without a database and for tests.

Data lives in plain dicts and is lost when the process stops.  Every read
hands back a deep copy so callers cannot mutate stored state.
"""
from __future__ import annotations

import datetime as dt
import itertools

from core.models.meal import FoodEntry, Meal
from core.models.user import User, UserProfile
from services.store import EmailTaken, NutritionStore


class InMemoryStore(NutritionStore):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._profiles: dict[int, UserProfile] = {}   # keyed by user_id
        self._meals: dict[int, Meal] = {}
        self._ids = itertools.count(1)

    def _next_id(self) -> int:
        return next(self._ids)

    # ─── users ──────────────────────────────────────────────────────
    async def create_user(self, email: str, password_hash: str) -> User:
        if await self.get_user_by_email(email):
            raise EmailTaken(email)
        user = User(
            id=self._next_id(),
            email=email,
            password_hash=password_hash,
            created_at=dt.datetime.now(dt.timezone.utc),
        )
        self._users[user.id] = user
        self._profiles[user.id] = UserProfile(id=self._next_id(), user_id=user.id)
        return user.model_copy(deep=True)

    async def get_user(self, user_id: int) -> User | None:
        user = self._users.get(user_id)
        return user.model_copy(deep=True) if user else None

    async def get_user_by_email(self, email: str) -> User | None:
        for user in self._users.values():
            if user.email == email:
                return user.model_copy(deep=True)
        return None

    # ─── profiles ───────────────────────────────────────────────────
    async def get_profile(self, user_id: int) -> UserProfile | None:
        profile = self._profiles.get(user_id)
        return profile.model_copy(deep=True) if profile else None

    async def save_profile(self, profile: UserProfile) -> UserProfile:
        self._profiles[profile.user_id] = profile.model_copy(deep=True)
        return profile.model_copy(deep=True)

    async def list_profiles(self, user_id: int | None = None) -> list[UserProfile]:
        return [
            p.model_copy(deep=True)
            for uid, p in sorted(self._profiles.items())
            if user_id is None or uid == user_id
        ]

    # ─── meals / foods ──────────────────────────────────────────────
    async def list_meals(self, user_id: int, day: dt.date) -> list[Meal]:
        # ids are handed out in creation order
        return [
            m.model_copy(deep=True)
            for _, m in sorted(self._meals.items())
            if m.user_id == user_id and m.date == day
        ]

    async def create_meal(self, user_id: int, name: str, day: dt.date) -> Meal:
        meal = Meal(id=self._next_id(), user_id=user_id, name=name, date=day, foods=[])
        self._meals[meal.id] = meal
        return meal.model_copy(deep=True)

    def _owned(self, meal_id: int, user_id: int) -> Meal | None:
        meal = self._meals.get(meal_id)
        if meal is None or meal.user_id != user_id:
            return None
        return meal

    async def get_meal(self, meal_id: int, user_id: int) -> Meal | None:
        meal = self._owned(meal_id, user_id)
        return meal.model_copy(deep=True) if meal else None

    async def delete_meal(self, meal_id: int, user_id: int) -> bool:
        if self._owned(meal_id, user_id) is None:
            return False
        del self._meals[meal_id]
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
        meal = self._owned(meal_id, user_id)
        if meal is None:
            return None
        entry = FoodEntry(
            record_id=self._next_id(),
            food_id=food_id,
            name=name,
            calories=calories or 0,
            protein=protein,
            carbs=carbs,
            fat=fat,
        )
        meal.foods.append(entry)
        return entry.model_copy(deep=True)

    async def delete_food(self, meal_id: int, user_id: int, record_id: int) -> bool:
        meal = self._owned(meal_id, user_id)
        if meal is None:
            return False
        before = len(meal.foods)
        meal.foods = [f for f in meal.foods if f.record_id != record_id]
        return len(meal.foods) < before
