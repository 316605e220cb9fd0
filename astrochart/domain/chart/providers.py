import logging

from astrochart.domain.chart.calculator import ApproximateEphemeris, EphemerisProvider
from astrochart.domain.chart.errors import CalculationError, UnsupportedEphemerisError
from astrochart.domain.chart.horizon import DEFAULT_POLAR_LATITUDE_LIMIT
from astrochart.domain.chart.schemas import (
    ChartConfig,
    EphemerisPositions,
    GeoCoordinate,
    JulianMoment,
)

logger = logging.getLogger(__name__)


class FallbackEphemeris:
    """
    Answers from ``primary`` and degrades to ``fallback`` when the primary
    fails to calculate.

    Only CalculationError triggers the fallback: invalid input and polar
    instability are properties of the request, not of the provider.
    """

    def __init__(self, primary: EphemerisProvider, fallback: EphemerisProvider):
        self.primary = primary
        self.fallback = fallback
        self.name = f"{primary.name}+{fallback.name}"

    def calculate(
        self,
        moment: JulianMoment,
        coordinate: GeoCoordinate,
        polar_latitude_limit: float = DEFAULT_POLAR_LATITUDE_LIMIT,
    ) -> EphemerisPositions:
        try:
            return self.primary.calculate(moment, coordinate, polar_latitude_limit)
        except CalculationError as exc:
            logger.warning(
                f"Ephemeris '{self.primary.name}' failed ({exc}); falling back to '{self.fallback.name}'"
            )
            return self.fallback.calculate(moment, coordinate, polar_latitude_limit)


def build_provider(config: ChartConfig) -> EphemerisProvider:
    """
    Select the ephemeris provider named by the configuration.
    """
    backend = config.ephemeris_backend.lower()

    if backend == ApproximateEphemeris.name:
        return ApproximateEphemeris()

    if backend == "swisseph":
        # Imported lazily so the approximate backend never loads the extension.
        from astrochart.domain.chart.swiss import SwissEphemeris

        primary = SwissEphemeris(
            flavor=config.swisseph_flavor,
            ephe_path=config.swisseph_ephe_path,
        )
        return FallbackEphemeris(primary, ApproximateEphemeris())

    raise UnsupportedEphemerisError(
        f"Unsupported ephemeris backend '{config.ephemeris_backend}'. Use 'approximate' or 'swisseph'."
    )
