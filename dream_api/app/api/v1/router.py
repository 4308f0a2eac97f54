"""
Top‑level router for version 1 of the API.

This router aggregates domain‑specific routers.  When new domains are
introduced, update this file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import dreams

router = APIRouter()

router.include_router(dreams.router, prefix="/dreams", tags=["dreams"])
