from fastapi import APIRouter

from astrochart.config import settings

router = APIRouter()


@router.get("/health", summary="Health check")
async def health_check():
    """
    Basic health check endpoint.
    """
    return {
        "status": "ok",
        "service": settings.APP_NAME,
        "ephemeris": settings.EPHEMERIS_BACKEND,
    }
