from functools import lru_cache

from astrochart.config import settings
from astrochart.domain.location.resolver import CoordinateResolver
from astrochart.services.chart_service import ChartService
from astrochart.services.location_service import LocationService, build_resolver


@lru_cache(maxsize=1)
def get_chart_service() -> ChartService:
    """
    Shared chart service; it holds only immutable configuration.
    """
    return ChartService.from_settings(settings)


def get_location_service() -> LocationService:
    return LocationService(
        api_url=settings.GEOCODER_URL,
        timeout=settings.GEOCODER_TIMEOUT,
    )


def get_coordinate_resolver() -> CoordinateResolver:
    return build_resolver(settings)
