from fastapi import APIRouter

from astrochart.api.v1.routes.astrology import router as astrology_router
from astrochart.api.v1.routes.health import router as health_router
from astrochart.api.v1.routes.location import router as location_router

api_router = APIRouter()

# ─────────────────────────────────────────────
# Public Routes
# ─────────────────────────────────────────────

api_router.include_router(
    health_router,
    tags=["Health"],
)

api_router.include_router(
    astrology_router,
    tags=["Astrology"],
)

api_router.include_router(
    location_router,
    tags=["Locations"],
)
