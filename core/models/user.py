from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

Gender = Literal["male", "female", "other"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active", "very_active"]

PHYSICAL_FIELDS = ("age", "gender", "weight_lbs", "height_inches", "activity_level")
MACRO_FIELDS = ("protein_percentage", "carbs_percentage", "fat_percentage")


class User(BaseModel):
    id: int
    email: str
    password_hash: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class UserProfile(BaseModel):
    """Stats are ``None`` until onboarding fills them in."""

    id: int
    user_id: int
    age: int | None = None
    gender: Gender | None = None
    weight_lbs: float | None = None
    height_inches: float | None = None
    activity_level: ActivityLevel | None = None
    maintenance_calories: int | None = None
    protein_percentage: int | None = None
    carbs_percentage: int | None = None
    fat_percentage: int | None = None
    onboarding_completed: bool = False

    model_config = ConfigDict(from_attributes=True)
