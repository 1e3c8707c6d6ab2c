"""
API v1 Router

All API endpoints.
"""

from fastapi import APIRouter

from pivot_supertrend.api.v1.endpoints import signals

router = APIRouter()

# Include all endpoint routers
router.include_router(signals.router, prefix="/signals", tags=["Signals"])
