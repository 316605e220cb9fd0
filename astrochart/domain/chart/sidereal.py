from astrochart.domain.chart.angles import normalize_deg
from astrochart.domain.chart.timekeeping import J2000_JD


def mean_obliquity(t: float) -> float:
    """
    Mean obliquity of the ecliptic in degrees (linear term only).
    """
    return 23.439291 - 0.0130042 * t


def greenwich_sidereal_time(jd: float, t: float) -> float:
    """
    Greenwich Mean Sidereal Time in degrees, [0, 360) (Meeus 12.4).
    """
    theta = (
        280.46061837
        + 360.98564736629 * (jd - J2000_JD)
        + 0.000387933 * t * t
        - (t * t * t) / 38710000.0
    )
    return normalize_deg(theta)


def local_sidereal_time(gmst: float, longitude: float) -> float:
    """
    Local sidereal time in degrees; east longitude positive.
    """
    return normalize_deg(gmst + longitude)
