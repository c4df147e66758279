from __future__ import annotations

from typing import Annotated

from pydantic import Field, PositiveInt, model_validator

from core.models.user import ActivityLevel, Gender
from core.profile import ProfilePatch

from .base import CamelModel

Percent = Annotated[int, Field(ge=0, le=100)]
# fit the user_profiles NUMERIC(6,2) / NUMERIC(5,2) columns
WeightLbs = Annotated[float, Field(gt=0, le=1500)]
HeightInches = Annotated[float, Field(gt=0, le=120)]


class ProfileOut(CamelModel):
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


class ProfileEnvelope(CamelModel):
    profile: ProfileOut


class ProfilePatchIn(CamelModel):
    """Settings update – every field optional, only sent fields change."""

    age: PositiveInt | None = None
    gender: Gender | None = None
    weight_lbs: WeightLbs | None = None
    height_inches: HeightInches | None = None
    activity_level: ActivityLevel | None = None
    protein_percentage: Percent | None = None
    carbs_percentage: Percent | None = None
    fat_percentage: Percent | None = None

    @model_validator(mode="after")
    def split_sums_to_100(self):
        pcts = (self.protein_percentage, self.carbs_percentage, self.fat_percentage)
        if None not in pcts and sum(pcts) != 100:  # type: ignore[arg-type]
            raise ValueError("Macro percentages must add up to 100")
        return self

    def to_patch(self) -> ProfilePatch:
        return ProfilePatch(**self.model_dump())


class OnboardingIn(ProfilePatchIn):
    age: PositiveInt
    gender: Gender
    weight_lbs: WeightLbs
    height_inches: HeightInches
    activity_level: ActivityLevel
    protein_percentage: Percent
    carbs_percentage: Percent
    fat_percentage: Percent


class PreviewIn(CamelModel):
    """Live calculator input; a partial split is fine here."""

    age: PositiveInt
    gender: Gender
    weight_lbs: WeightLbs
    height_inches: HeightInches
    activity_level: ActivityLevel
    protein_percentage: Percent = 0
    carbs_percentage: Percent = 0
    fat_percentage: Percent = 0


class TargetsOut(CamelModel):
    maintenance_calories: int
    protein_grams: int
    carbs_grams: int
    fat_grams: int


class PreviewOut(TargetsOut):
    bmr: float
