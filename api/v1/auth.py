from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials

from api.v1.deps import _bearer, current_user_id, get_store
from api.v1.schemas import AuthOut, LoginIn, ProfileOut, SignupIn, SignupOut, UserOut
from services.auth import create_token, hash_password, verify_password
from services.store import EmailTaken, NutritionStore

_LOG = logging.getLogger(__name__)

router = APIRouter()


async def _session_payload(store: NutritionStore, user_id: int, email: str, token: str) -> AuthOut:
    profile = await store.get_profile(user_id)
    return AuthOut(
        user=UserOut(id=user_id, email=email, token=token),
        profile=ProfileOut.model_validate(profile.model_dump()) if profile else None,
    )


# ───────────────────────── signup ──────────────────────────
@router.post(
    "/signup",
    response_model=SignupOut,
    status_code=status.HTTP_201_CREATED,
)
async def signup(
    body: SignupIn,
    store: NutritionStore = Depends(get_store),
) -> SignupOut:
    try:
        user = await store.create_user(body.email, hash_password(body.password))
    except EmailTaken:
        raise HTTPException(status_code=409, detail="Email already registered")

    _LOG.info("new user %s", user.id)
    token = create_token(user.id, user.email)
    return SignupOut(
        user=UserOut(id=user.id, email=user.email, token=token),
        onboarding_completed=False,
    )


# ───────────────────────── login ───────────────────────────
@router.post("/login", response_model=AuthOut)
async def login(
    body: LoginIn,
    store: NutritionStore = Depends(get_store),
) -> AuthOut:
    user = await store.get_user_by_email(body.email)
    if user is None or not verify_password(body.password, user.password_hash):
        _LOG.info("failed login")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_token(user.id, user.email)
    return await _session_payload(store, user.id, user.email, token)


# ───────────────────────── verify ──────────────────────────
@router.get("/verify", response_model=AuthOut)
async def verify(
    user_id: int = Depends(current_user_id),
    creds: HTTPAuthorizationCredentials = Depends(_bearer),
    store: NutritionStore = Depends(get_store),
) -> AuthOut:
    user = await store.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid token")
    return await _session_payload(store, user.id, user.email, creds.credentials)
