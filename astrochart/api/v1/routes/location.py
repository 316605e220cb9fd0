from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from astrochart.api.dependencies import get_coordinate_resolver, get_location_service
from astrochart.domain.location.errors import GeocodingError, LocationNotFoundError
from astrochart.domain.location.resolver import CoordinateResolver
from astrochart.services.location_service import LocationService

router = APIRouter()


class LocationRequest(BaseModel):
    city: str = Field("", examples=["杭州"])


@router.post(
    "/location",
    summary="Resolve a city name to coordinates",
)
async def resolve_location(
    payload: LocationRequest,
    resolver: CoordinateResolver = Depends(get_coordinate_resolver),
):
    """
    Look the city up in the built-in table first, then in Open-Meteo.
    """
    city = payload.city.strip()
    if not city:
        return JSONResponse(status_code=400, content={"code": 400, "data": None, "msg": "city is required"})

    try:
        coordinate = await resolver.resolve(city)
    except LocationNotFoundError as e:
        return JSONResponse(status_code=404, content={"code": 404, "data": None, "msg": str(e)})
    except GeocodingError as e:
        return JSONResponse(status_code=502, content={"code": 502, "data": None, "msg": str(e)})

    return {
        "code": 200,
        "data": {"lat": coordinate.latitude, "lng": coordinate.longitude},
    }


@router.get(
    "/locations/search",
    response_model=List[Dict[str, Any]],
    summary="Search for cities and get their coordinates",
)
async def search_locations(
    q: str = Query(..., min_length=2, description="Search query for city name (e.g., 'hang', 'new york')"),
    service: LocationService = Depends(get_location_service),
):
    """
    Search for a city by name. Returns a list of matching locations
    with their display name, latitude, longitude, and timezone name.
    """
    try:
        return await service.search_cities(query=q)
    except GeocodingError as e:
        return JSONResponse(status_code=502, content={"code": 502, "msg": str(e)})
