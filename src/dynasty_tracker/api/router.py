"""Main API router aggregation."""

from fastapi import APIRouter

from dynasty_tracker.api.auth import router as auth_router
from dynasty_tracker.api.coaches import router as coaches_router
from dynasty_tracker.api.dynasties import router as dynasties_router
from dynasty_tracker.api.seasons import router as seasons_router

# Main API router
api_router = APIRouter(prefix="/api")

# Include all sub-routers; seasons before coaches so the bulk
# season paths are matched ahead of /{coach_id}
api_router.include_router(auth_router)
api_router.include_router(dynasties_router)
api_router.include_router(seasons_router)
api_router.include_router(coaches_router)
