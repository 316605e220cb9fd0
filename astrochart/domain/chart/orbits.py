"""
Low-precision geocentric longitudes of the Sun and Moon.

Truncated Meeus series: good to a fraction of a degree, which is all a
30° sign bucket needs. Arguments are Julian centuries since J2000.0.
"""

from astrochart.domain.chart.angles import normalize_deg, sin_deg


# ─────────────────────────────────────────────
# Sun
# ─────────────────────────────────────────────

def sun_mean_anomaly(t: float) -> float:
    return normalize_deg(357.52911 + 35999.05029 * t - 0.0001537 * t * t)


def sun_mean_longitude(t: float) -> float:
    return normalize_deg(280.46646 + 36000.76983 * t + 0.0003032 * t * t)


def sun_equation_of_center(t: float) -> float:
    m = sun_mean_anomaly(t)
    return (
        (1.914602 - 0.004817 * t - 0.000014 * t * t) * sin_deg(m)
        + (0.019993 - 0.000101 * t) * sin_deg(2 * m)
        + 0.000289 * sin_deg(3 * m)
    )


def sun_longitude(t: float) -> float:
    """
    True geometric ecliptic longitude of the Sun, degrees in [0, 360).
    """
    return normalize_deg(sun_mean_longitude(t) + sun_equation_of_center(t))


# ─────────────────────────────────────────────
# Moon
# ─────────────────────────────────────────────

# (coefficient in degrees, D, M, M', F) multiples in the argument
MOON_LONGITUDE_TERMS = (
    (6.289, 0, 0, 1, 0),     # equation of the centre
    (1.274, 2, 0, -1, 0),    # evection
    (0.658, 2, 0, 0, 0),     # variation
    (0.214, 0, 0, 2, 0),
    (-0.186, 0, 1, 0, 0),    # annual equation
    (-0.114, 0, 0, 0, 2),    # reduction to the ecliptic
)


def moon_fundamental_arguments(t: float):
    """
    Mean longitude L', solar anomaly M, lunar anomaly M', argument of
    latitude F and mean elongation D, all in degrees.
    """
    t2 = t * t
    lp = normalize_deg(218.3164477 + 481267.88123421 * t - 0.0015786 * t2)
    m = normalize_deg(357.5291092 + 35999.0502909 * t - 0.0001536 * t2)
    mp = normalize_deg(134.9633964 + 477198.8675055 * t + 0.0087414 * t2)
    f = normalize_deg(93.2720950 + 483202.0175233 * t - 0.0036539 * t2)
    d = normalize_deg(297.8501921 + 445267.1114034 * t - 0.0018819 * t2)
    return lp, m, mp, f, d


def moon_longitude(t: float) -> float:
    """
    Approximate ecliptic longitude of the Moon, degrees in [0, 360).
    """
    lp, m, mp, f, d = moon_fundamental_arguments(t)

    correction = 0.0
    for coefficient, k_d, k_m, k_mp, k_f in MOON_LONGITUDE_TERMS:
        correction += coefficient * sin_deg(k_d * d + k_m * m + k_mp * mp + k_f * f)

    return normalize_deg(lp + correction)
