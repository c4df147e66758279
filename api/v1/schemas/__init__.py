"""Re-export individual schema modules for easy imports."""

from .food import FoodSearchOut
from .meal import FoodEnvelope, FoodIn, MealEnvelope, MealIn, MealOut, MealsOut, Message
from .profile import (
    OnboardingIn,
    PreviewIn,
    PreviewOut,
    ProfileEnvelope,
    ProfileOut,
    ProfilePatchIn,
    TargetsOut,
)
from .progress import DailyProgressOut
from .user import AuthOut, LoginIn, SignupIn, SignupOut, UserOut

__all__ = [
    "AuthOut",
    "DailyProgressOut",
    "FoodEnvelope",
    "FoodIn",
    "FoodSearchOut",
    "LoginIn",
    "MealEnvelope",
    "MealIn",
    "MealOut",
    "MealsOut",
    "Message",
    "OnboardingIn",
    "PreviewIn",
    "PreviewOut",
    "ProfileEnvelope",
    "ProfileOut",
    "ProfilePatchIn",
    "SignupIn",
    "SignupOut",
    "TargetsOut",
    "UserOut",
]
