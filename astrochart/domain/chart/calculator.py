import logging
from typing import Protocol

from astrochart.domain.chart.horizon import DEFAULT_POLAR_LATITUDE_LIMIT, ascendant
from astrochart.domain.chart.orbits import moon_longitude, sun_longitude
from astrochart.domain.chart.schemas import (
    EphemerisPositions,
    GeoCoordinate,
    JulianMoment,
)
from astrochart.domain.chart.sidereal import (
    greenwich_sidereal_time,
    local_sidereal_time,
    mean_obliquity,
)

logger = logging.getLogger(__name__)


class EphemerisProvider(Protocol):
    """
    Source of Sun, Moon and ascendant longitudes for a UTC moment and place.
    """

    name: str

    def calculate(
        self,
        moment: JulianMoment,
        coordinate: GeoCoordinate,
        polar_latitude_limit: float = DEFAULT_POLAR_LATITUDE_LIMIT,
    ) -> EphemerisPositions:
        ...


class ApproximateEphemeris:
    """
    Self-contained low-precision ephemeris.

    This class:
    - Needs no data files or native extensions
    - Is accurate to well under a degree for the Sun, about half a degree
      for the Moon
    - Is always available as the fallback provider
    """

    name = "approximate"

    # ─────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────

    def calculate(
        self,
        moment: JulianMoment,
        coordinate: GeoCoordinate,
        polar_latitude_limit: float = DEFAULT_POLAR_LATITUDE_LIMIT,
    ) -> EphemerisPositions:
        t = moment.century

        # Step 1: Orbital approximations
        sun = sun_longitude(t)
        moon = moon_longitude(t)

        # Step 2: Sidereal time and obliquity
        eps = mean_obliquity(t)
        gmst = greenwich_sidereal_time(moment.jd, t)
        lst = local_sidereal_time(gmst, coordinate.longitude)

        # Step 3: Horizon projection
        asc = ascendant(lst, coordinate.latitude, eps, polar_latitude_limit)

        logger.debug(
            f"Approximate ephemeris at JD {moment.jd}: sun={sun:.4f} moon={moon:.4f} "
            f"gmst={gmst:.4f} lst={lst:.4f} asc={asc:.4f}"
        )

        return EphemerisPositions(
            sun_longitude=sun,
            moon_longitude=moon,
            ascendant=asc,
        )
