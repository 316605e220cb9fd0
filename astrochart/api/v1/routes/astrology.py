import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from astrochart.api.dependencies import get_chart_service
from astrochart.domain.chart.errors import (
    ChartError,
    InvalidInputError,
    NumericInstabilityError,
)
from astrochart.services.chart_service import ChartService

logger = logging.getLogger(__name__)

router = APIRouter()

DEBUG_FLAGS = (True, 1, "1", "true")


# ─────────────────────────────────────────────
# Request Schema (fields are validated by the domain models)
# ─────────────────────────────────────────────

class AstrologyRequest(BaseModel):
    year: Any = Field(None, examples=[1990])
    month: Any = Field(None, examples=[8])
    day: Any = Field(None, examples=[18])
    hour: Any = Field(None, examples=[14])
    minute: Any = Field(None, examples=[32])
    latitude: Any = Field(None, examples=[31.23])
    longitude: Any = Field(None, examples=[121.474])
    lat: Any = None
    lng: Any = None
    tzOffset: Any = Field(None, examples=[-480])
    timezone: Optional[str] = Field(None, examples=["Asia/Shanghai"])
    locale: Optional[str] = Field(None, examples=["en"])
    debug: Any = False
    debug_alias: Any = Field(None, alias="_debug")


def _first_present(*values: Any) -> Any:
    for value in values:
        if value is not None and value != "":
            return value
    return None


def _debug_requested(payload: AstrologyRequest) -> bool:
    return any(flag in DEBUG_FLAGS for flag in (payload.debug, payload.debug_alias))


def _error(status: int, msg: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"code": status, "msg": msg})


# ─────────────────────────────────────────────
# Route
# ─────────────────────────────────────────────

@router.post(
    "/astrology",
    summary="Compute sun, moon, ascendant signs and equal houses",
)
async def compute_astrology(
    payload: AstrologyRequest,
    service: ChartService = Depends(get_chart_service),
):
    """
    Compute a natal chart from local birth time and coordinates.

    tzOffset uses the JavaScript getTimezoneOffset convention (minutes to
    add to local time to get UTC; UTC+8 is -480). When neither tzOffset nor
    timezone is given, the configured default offset applies.
    """
    latitude = _first_present(payload.latitude, payload.lat)
    longitude = _first_present(payload.longitude, payload.lng)
    if latitude is None or longitude is None:
        return _error(400, "Missing coordinates: send latitude/longitude or lat/lng")

    try:
        result = service.create_chart(
            payload={
                "year": payload.year,
                "month": payload.month,
                "day": payload.day,
                "hour": payload.hour,
                "minute": payload.minute,
                "latitude": latitude,
                "longitude": longitude,
                "tz_offset": _first_present(payload.tzOffset),
                "timezone": payload.timezone,
                "locale": payload.locale,
            },
            debug=_debug_requested(payload),
        )
    except InvalidInputError as e:
        return _error(400, str(e))
    except NumericInstabilityError as e:
        return _error(422, str(e))
    except ChartError as e:
        logger.error(f"Chart computation failed: {e}")
        return _error(500, "Chart computation failed")

    return {"code": 200, **result}
