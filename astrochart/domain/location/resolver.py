import logging
from typing import Optional, Protocol

from astrochart.domain.chart.schemas import GeoCoordinate
from astrochart.domain.location.errors import (
    GeocodingError,
    LocationNotFoundError,
    ResolveError,
)

logger = logging.getLogger(__name__)


class CoordinateResolver(Protocol):
    """
    Turns a free-form place name into coordinates.
    """

    async def resolve(self, city: str) -> GeoCoordinate:
        ...


class ChainedResolver:
    """
    Tries each resolver in order; the first match wins.

    When nothing matches, a GeocodingError from any resolver is re-raised
    (the place may exist, the service was unreachable); otherwise
    LocationNotFoundError is raised.
    """

    def __init__(self, *resolvers: CoordinateResolver):
        self.resolvers = resolvers

    async def resolve(self, city: str) -> GeoCoordinate:
        if not city or not city.strip():
            raise LocationNotFoundError("City name is empty")

        failure: Optional[GeocodingError] = None
        for resolver in self.resolvers:
            try:
                return await resolver.resolve(city)
            except GeocodingError as exc:
                logger.warning(f"{type(resolver).__name__} failed for '{city}': {exc}")
                failure = exc
            except ResolveError as exc:
                logger.debug(f"{type(resolver).__name__} could not resolve '{city}': {exc}")

        if failure is not None:
            raise failure
        raise LocationNotFoundError(f"No coordinates found for '{city}'")
