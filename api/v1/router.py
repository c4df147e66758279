# api/v1/router.py
from fastapi import APIRouter

from . import auth, foods, meals, profile

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(profile.router, prefix="/profile", tags=["Profile"])
api_router.include_router(meals.router, prefix="/meals", tags=["Meals"])
api_router.include_router(foods.router, prefix="/foods", tags=["Foods"])
