"""
Top‑level API router.

Aggregates domain‑specific routers.  When new domains are introduced,
include their routers here.
"""

from fastapi import APIRouter

from .endpoints import parking_spots

router = APIRouter()

router.include_router(parking_spots.router, prefix="/parking-spot", tags=["parking-spot"])
