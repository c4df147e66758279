"""
core/profile.py
────────────────────────────────────────────────────────────────────────
Write-path rules for a user's profile.

* ``complete_onboarding()``  – first full survey submission
* ``apply_patch()``          – partial settings update

Both return a *new* ``UserProfile``; the store persists whatever comes
back.  ``maintenance_calories`` is recomputed here, never by callers, so
it cannot drift from the five stats it is derived from.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields

from core.models.user import MACRO_FIELDS, PHYSICAL_FIELDS, UserProfile
from core.nutrition_calc import maintenance_calories

_LOG = logging.getLogger(__name__)


class ProfileValidationError(ValueError):
    """Merged profile state breaks an invariant (e.g. split ≠ 100 %)."""


@dataclass(frozen=True)
class ProfilePatch:
    """Only the non-``None`` attributes are applied."""

    age: int | None = None
    gender: str | None = None
    weight_lbs: float | None = None
    height_inches: float | None = None
    activity_level: str | None = None
    protein_percentage: int | None = None
    carbs_percentage: int | None = None
    fat_percentage: int | None = None

    def present(self) -> dict[str, object]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @property
    def touches_stats(self) -> bool:
        return any(getattr(self, name) is not None for name in PHYSICAL_FIELDS)


def check_macro_split(protein: int | None, carbs: int | None, fat: int | None) -> None:
    if None in (protein, carbs, fat):
        return
    total = protein + carbs + fat  # type: ignore[operator]
    if total != 100:
        raise ProfileValidationError(
            f"Macro percentages must add up to 100 (got {total})"
        )


def recompute_maintenance(profile: UserProfile) -> int | None:
    """TDEE for the stored stats, or ``None`` while any of them is unknown."""
    if any(getattr(profile, name) is None for name in PHYSICAL_FIELDS):
        return None
    return maintenance_calories(
        profile.gender,
        profile.weight_lbs,  # type: ignore[arg-type]
        profile.height_inches,  # type: ignore[arg-type]
        profile.age,  # type: ignore[arg-type]
        profile.activity_level,
    )


def complete_onboarding(profile: UserProfile, patch: ProfilePatch) -> UserProfile:
    missing = [name for name in PHYSICAL_FIELDS + MACRO_FIELDS if getattr(patch, name) is None]
    if missing:
        raise ProfileValidationError(f"All fields are required (missing: {', '.join(missing)})")

    updated = apply_patch(profile, patch)
    return updated.model_copy(update={"onboarding_completed": True})


def apply_patch(profile: UserProfile, patch: ProfilePatch) -> UserProfile:
    changes = patch.present()
    merged = profile.model_copy(update=changes)

    check_macro_split(
        merged.protein_percentage, merged.carbs_percentage, merged.fat_percentage
    )

    if patch.touches_stats:
        kcal = recompute_maintenance(merged)
        _LOG.debug("user %s: maintenance %s → %s", profile.user_id, profile.maintenance_calories, kcal)
        merged = merged.model_copy(update={"maintenance_calories": kcal})

    return merged
