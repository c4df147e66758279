# api/v1/foods.py
from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.v1.schemas import FoodSearchOut
from config import settings
from services.usda import FoodLookupError, search_foods, usda_client

router = APIRouter()


@router.get("/search", response_model=FoodSearchOut)
async def search(
    q: str = Query("", description="food name, e.g. 'chicken breast'"),
    http: httpx.AsyncClient = Depends(usda_client),
) -> FoodSearchOut:
    if not q.strip():
        raise HTTPException(status_code=400, detail="Query parameter 'q' is required.")
    if not settings.usda_api_key:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, "USDA API key not configured")

    try:
        foods = await search_foods(http, q.strip(), settings.usda_api_key)
    except FoodLookupError:
        raise HTTPException(status.HTTP_502_BAD_GATEWAY, "Failed to fetch food data")
    return FoodSearchOut(foods=foods)
