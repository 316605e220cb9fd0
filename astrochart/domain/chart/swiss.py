import logging
import math
import os
from typing import Optional

import swisseph as swe

from astrochart.domain.chart.angles import normalize_deg
from astrochart.domain.chart.errors import (
    CalculationError,
    NumericInstabilityError,
    UnsupportedEphemerisError,
)
from astrochart.domain.chart.horizon import DEFAULT_POLAR_LATITUDE_LIMIT
from astrochart.domain.chart.schemas import (
    EphemerisPositions,
    GeoCoordinate,
    JulianMoment,
)

logger = logging.getLogger(__name__)

FLAVOR_FLAGS = {
    "moseph": swe.FLG_MOSEPH,
    "swieph": swe.FLG_SWIEPH,
}

# Equal houses; only the ascendant is read from the result.
EQUAL_HOUSES = b"E"


class SwissEphemeris:
    """
    Adapter to the Swiss Ephemeris (pyswisseph).

    Tropical, geocentric, apparent positions. The Moshier flavour works
    without data files; the Swiss flavour needs ``ephe_path``.
    """

    name = "swisseph"

    def __init__(self, flavor: str = "moseph", ephe_path: Optional[str] = None):
        flavor = flavor.lower()
        if flavor not in FLAVOR_FLAGS:
            raise UnsupportedEphemerisError(
                f"Unknown Swiss Ephemeris flavour '{flavor}'. Use one of: {', '.join(FLAVOR_FLAGS)}"
            )
        self.flavor = flavor
        self._flags = FLAVOR_FLAGS[flavor]

        if ephe_path:
            if os.path.isdir(ephe_path):
                swe.set_ephe_path(ephe_path)
            else:
                logger.warning(f"Swiss Ephemeris path '{ephe_path}' does not exist, using built-in data")

    # ─────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────

    def calculate(
        self,
        moment: JulianMoment,
        coordinate: GeoCoordinate,
        polar_latitude_limit: float = DEFAULT_POLAR_LATITUDE_LIMIT,
    ) -> EphemerisPositions:
        if abs(coordinate.latitude) >= polar_latitude_limit:
            raise NumericInstabilityError(
                f"Ascendant is undefined near the poles: |latitude| {abs(coordinate.latitude)} >= {polar_latitude_limit}"
            )

        try:
            sun = self._longitude(moment.jd, swe.SUN)
            moon = self._longitude(moment.jd, swe.MOON)
            _cusps, ascmc = swe.houses(
                moment.jd, coordinate.latitude, coordinate.longitude, EQUAL_HOUSES
            )
        except swe.Error as exc:
            raise CalculationError(f"Swiss Ephemeris failed at JD {moment.jd}: {exc}") from exc

        asc = ascmc[0]
        if not math.isfinite(asc):
            raise NumericInstabilityError(f"Swiss Ephemeris returned a non-finite ascendant at JD {moment.jd}")

        return EphemerisPositions(
            sun_longitude=sun,
            moon_longitude=moon,
            ascendant=normalize_deg(asc),
        )

    # ─────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────

    def _longitude(self, jd_ut: float, body: int) -> float:
        values, _flags = swe.calc_ut(jd_ut, body, self._flags)
        return normalize_deg(values[0])
