import logging
from typing import Any, Dict, List, Optional

import httpx

from astrochart.domain.chart.errors import InvalidInputError
from astrochart.domain.chart.schemas import GeoCoordinate
from astrochart.domain.location.city_table import CityTableResolver
from astrochart.domain.location.errors import GeocodingError, LocationNotFoundError
from astrochart.domain.location.resolver import ChainedResolver, CoordinateResolver

logger = logging.getLogger(__name__)

OPEN_METEO_URL = "https://geocoding-api.open-meteo.com/v1/search"


class LocationService:
    """
    Service for searching locations using Open-Meteo Geocoding API.
    This API is free for non-commercial use and requires no API key.
    """

    def __init__(
        self,
        api_url: str = OPEN_METEO_URL,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url
        self.timeout = timeout
        self._transport = transport

    async def search_cities(self, query: str, count: int = 10) -> List[Dict[str, Any]]:
        """
        Searches for cities using Open-Meteo API.
        """
        if not query or len(query.strip()) < 2:
            return []

        data = await self._fetch(query.strip(), count)

        results = data.get("results") or []
        if not isinstance(results, list):
            raise GeocodingError(f"Unexpected results for '{query}' from the geocoder")

        mapped_results = []
        for item in results:
            if not isinstance(item, dict):
                continue
            # Construct a display name: Name, Region, Country
            parts = [item.get("name"), item.get("admin1"), item.get("country")]
            display_name = ", ".join([p for p in parts if p])

            mapped_results.append({
                "display_name": display_name,
                "latitude": item.get("latitude"),
                "longitude": item.get("longitude"),
                "timezone": item.get("timezone", "UTC"),
            })

        return mapped_results

    async def resolve(self, city: str) -> GeoCoordinate:
        """
        Coordinates of the best Open-Meteo match for a city name.
        """
        results = await self.search_cities(city, count=1)
        if not results:
            raise LocationNotFoundError(f"Open-Meteo has no match for '{city}'")

        best = results[0]
        try:
            return GeoCoordinate.build(
                latitude=best["latitude"],
                longitude=best["longitude"],
            )
        except InvalidInputError as exc:
            raise GeocodingError(f"Open-Meteo returned invalid coordinates for '{city}'") from exc

    async def _fetch(self, query: str, count: int) -> Dict[str, Any]:
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(
                    self.api_url,
                    params={
                        "name": query,
                        "count": count,
                        "language": "en",
                        "format": "json",
                    },
                    timeout=self.timeout,
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Geocoding request for '{query}' failed: {e}")
            raise GeocodingError(f"Failed to fetch location data for '{query}'") from e
        except ValueError as e:
            logger.error(f"Geocoding response for '{query}' is not JSON: {e}")
            raise GeocodingError(f"Invalid location data for '{query}'") from e

        if not isinstance(data, dict):
            logger.error(f"Geocoding response for '{query}' is not an object: {type(data).__name__}")
            raise GeocodingError(f"Invalid location data for '{query}'")
        return data


def build_resolver(settings) -> CoordinateResolver:
    """
    Local city table first, then Open-Meteo when the geocoder is enabled.
    """
    resolvers: List[CoordinateResolver] = [CityTableResolver()]
    if settings.GEOCODER_ENABLED:
        resolvers.append(
            LocationService(
                api_url=settings.GEOCODER_URL,
                timeout=settings.GEOCODER_TIMEOUT,
            )
        )
    return ChainedResolver(*resolvers)
