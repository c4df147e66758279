# api/v1/profile.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from api.v1.deps import current_user_id, get_store
from api.v1.schemas import (
    OnboardingIn,
    PreviewIn,
    PreviewOut,
    ProfileEnvelope,
    ProfileOut,
    ProfilePatchIn,
    TargetsOut,
)
from core.models.user import UserProfile
from core.nutrition_calc import BodyStats, NutritionalCalculator
from core.profile import ProfileValidationError, apply_patch, complete_onboarding
from core.progress import goals_for_profile
from services.store import NutritionStore

router = APIRouter()
_calc = NutritionalCalculator()


# ───────────────────────── helpers ──────────────────────────
async def _load(store: NutritionStore, user_id: int) -> UserProfile:
    profile = await store.get_profile(user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


def _envelope(profile: UserProfile) -> ProfileEnvelope:
    return ProfileEnvelope(profile=ProfileOut.model_validate(profile.model_dump()))


# ───────────────────────── onboarding ───────────────────────
@router.post("/onboarding", response_model=ProfileEnvelope)
async def onboarding(
    body: OnboardingIn,
    user_id: int = Depends(current_user_id),
    store: NutritionStore = Depends(get_store),
) -> ProfileEnvelope:
    profile = await _load(store, user_id)
    try:
        updated = complete_onboarding(profile, body.to_patch())
    except ProfileValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return _envelope(await store.save_profile(updated))


# ───────────────────────── read ─────────────────────────────
@router.get("", response_model=ProfileEnvelope)
async def get_profile(
    user_id: int = Depends(current_user_id),
    store: NutritionStore = Depends(get_store),
) -> ProfileEnvelope:
    return _envelope(await _load(store, user_id))


# ───────────────────────── partial update ───────────────────
@router.put("", response_model=ProfileEnvelope)
async def update_profile(
    body: ProfilePatchIn,
    user_id: int = Depends(current_user_id),
    store: NutritionStore = Depends(get_store),
) -> ProfileEnvelope:
    profile = await _load(store, user_id)
    try:
        updated = apply_patch(profile, body.to_patch())
    except ProfileValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return _envelope(await store.save_profile(updated))


# ───────────────────────── derived budget ───────────────────
@router.get("/targets", response_model=TargetsOut)
async def targets(
    user_id: int = Depends(current_user_id),
    store: NutritionStore = Depends(get_store),
) -> TargetsOut:
    goals = goals_for_profile(await _load(store, user_id))
    if goals is None:
        raise HTTPException(status.HTTP_409_CONFLICT, "Onboarding not completed")
    return TargetsOut(
        maintenance_calories=goals.calories,
        protein_grams=goals.protein_grams,
        carbs_grams=goals.carbs_grams,
        fat_grams=goals.fat_grams,
    )


@router.post("/preview", response_model=PreviewOut)
async def preview(body: PreviewIn) -> PreviewOut:
    """Numbers for the onboarding form while it is being filled in; nothing is saved."""
    t = _calc.targets(
        BodyStats(
            age=body.age,
            gender=body.gender,
            weight_lbs=body.weight_lbs,
            height_inches=body.height_inches,
            activity_level=body.activity_level,
        ),
        body.protein_percentage,
        body.carbs_percentage,
        body.fat_percentage,
    )
    return PreviewOut(
        bmr=round(t.bmr, 3),
        maintenance_calories=t.maintenance_calories,
        protein_grams=t.macros.protein_grams,
        carbs_grams=t.macros.carbs_grams,
        fat_grams=t.macros.fat_grams,
    )
