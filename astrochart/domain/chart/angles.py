import math


FULL_CIRCLE = 360.0


def normalize_deg(angle: float) -> float:
    """
    Wrap an angle in degrees into [0, 360).
    """
    x = math.fmod(angle, FULL_CIRCLE)
    if x < 0:
        x += FULL_CIRCLE
    # fmod of a tiny negative number plus 360 rounds up to 360.0
    if x >= FULL_CIRCLE:
        x = 0.0
    return x


def angular_distance(a: float, b: float) -> float:
    """
    Smallest separation between two longitudes, in [0, 180].
    """
    d = normalize_deg(a - b)
    return min(d, FULL_CIRCLE - d)


def sin_deg(angle: float) -> float:
    return math.sin(math.radians(angle))
