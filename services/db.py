"""
services/db.py
────────────────────────────────────────────────────────────────────────
* Async SQLAlchemy v2 setup
* Models for users, profiles, meals and meal foods
* ``Database`` – owns one engine; built explicitly and handed to the app
"""
from __future__ import annotations

from datetime import date, datetime
from typing import AsyncGenerator

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
    func,
)
from sqlalchemy.ext.asyncio import (
    AsyncAttrs,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column, relationship

# ───────── declarative base ──────────────────────────────────────────
Base = declarative_base(cls=AsyncAttrs)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())


class UserProfile(Base):
    __tablename__ = "user_profiles"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), unique=True
    )
    age: Mapped[int | None] = mapped_column(Integer)
    gender: Mapped[str | None] = mapped_column(String(10))
    weight_lbs: Mapped[float | None] = mapped_column(Numeric(6, 2, asdecimal=False))
    height_inches: Mapped[float | None] = mapped_column(Numeric(5, 2, asdecimal=False))
    activity_level: Mapped[str | None] = mapped_column(String(20))
    maintenance_calories: Mapped[int | None] = mapped_column(Integer)
    protein_percentage: Mapped[int | None] = mapped_column(Integer)
    carbs_percentage: Mapped[int | None] = mapped_column(Integer)
    fat_percentage: Mapped[int | None] = mapped_column(Integer)
    onboarding_completed: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )


class Meal(Base):
    __tablename__ = "meals"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    name: Mapped[str] = mapped_column(String(255))
    meal_date: Mapped[date] = mapped_column(Date, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    foods: Mapped[list["MealFood"]] = relationship(
        back_populates="meal",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="MealFood.id",
    )


class MealFood(Base):
    __tablename__ = "meal_foods"

    id: Mapped[int] = mapped_column(primary_key=True)
    meal_id: Mapped[int] = mapped_column(
        ForeignKey("meals.id", ondelete="CASCADE"), index=True
    )
    food_id: Mapped[int] = mapped_column(Integer)
    food_name: Mapped[str] = mapped_column(String(255))
    calories: Mapped[float] = mapped_column(Float, default=0)
    # NULL = unknown; never written as 0 on the caller's behalf
    protein: Mapped[float | None] = mapped_column(Float)
    carbs: Mapped[float | None] = mapped_column(Float)
    fat: Mapped[float | None] = mapped_column(Float)

    meal: Mapped[Meal] = relationship(back_populates="foods")


# ───────── engine / session owner ───────────────────────────────────
class Database:
    def __init__(self, url: str, **engine_kwargs) -> None:
        self.url = url
        self.engine: AsyncEngine = create_async_engine(
            url, pool_pre_ping=True, **engine_kwargs
        )
        self._sessions = async_sessionmaker(self.engine, expire_on_commit=False)

    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self._sessions() as session:
            yield session

    async def create_all(self, drop_first: bool = False) -> None:
        async with self.engine.begin() as conn:
            if drop_first:
                await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
