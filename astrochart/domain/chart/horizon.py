import logging
import math

from astrochart.domain.chart.angles import normalize_deg
from astrochart.domain.chart.errors import NumericInstabilityError

logger = logging.getLogger(__name__)

DEFAULT_POLAR_LATITUDE_LIMIT = 89.9


def ascendant(
    local_sidereal_deg: float,
    latitude_deg: float,
    obliquity_deg: float,
    polar_latitude_limit: float = DEFAULT_POLAR_LATITUDE_LIMIT,
) -> float:
    """
    Ecliptic longitude rising on the eastern horizon, degrees in [0, 360).

    With θ = LST, φ = latitude, ε = obliquity:

        y = -cos θ
        x = sin θ · cos ε + tan φ · sin ε

    atan2(y, x) is the western (setting) intersection of ecliptic and
    horizon; the ascendant is the opposite point, atan2(-y, -x).

    tan φ diverges towards the poles, so |φ| >= polar_latitude_limit raises
    NumericInstabilityError instead of returning a meaningless angle.
    """
    if not all(math.isfinite(v) for v in (local_sidereal_deg, latitude_deg, obliquity_deg)):
        raise NumericInstabilityError("Ascendant inputs must be finite")

    if abs(latitude_deg) >= polar_latitude_limit:
        raise NumericInstabilityError(
            f"Ascendant is undefined near the poles: |latitude| {abs(latitude_deg)} >= {polar_latitude_limit}"
        )

    theta = math.radians(local_sidereal_deg)
    phi = math.radians(latitude_deg)
    eps = math.radians(obliquity_deg)

    y = -math.cos(theta)
    x = math.sin(theta) * math.cos(eps) + math.tan(phi) * math.sin(eps)

    if not (math.isfinite(x) and math.isfinite(y)) or (x == 0.0 and y == 0.0):
        raise NumericInstabilityError(
            f"Ascendant formula degenerated at LST={local_sidereal_deg}, latitude={latitude_deg}"
        )

    lam = math.atan2(-y, -x)
    if lam < 0:
        lam += 2 * math.pi

    result = normalize_deg(math.degrees(lam))
    logger.debug(f"Ascendant {result:.4f}° for LST={local_sidereal_deg:.4f}°, latitude={latitude_deg}°")
    return result
