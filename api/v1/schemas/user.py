from __future__ import annotations

from pydantic import Field, field_validator

from .base import CamelModel
from .profile import ProfileOut


class LoginIn(CamelModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("not an email address")
        return v


class SignupIn(LoginIn):
    password: str = Field(..., min_length=8, description="at least 8 characters")


class UserOut(CamelModel):
    id: int
    email: str
    token: str


class SignupOut(CamelModel):
    user: UserOut
    onboarding_completed: bool = False


class AuthOut(CamelModel):
    """Login / verify: the session user plus the profile, if one exists."""
    user: UserOut
    profile: ProfileOut | None = None
