class ChartError(Exception):
    """
    Base exception for all chart-related domain errors.
    """
    pass


class InvalidInputError(ChartError):
    """
    Raised when birth or coordinate inputs are non-finite or out of domain.
    """
    pass


class NumericInstabilityError(ChartError):
    """
    Raised when the ascendant formula diverges (latitude close to a pole).
    """
    pass


class SignOutOfRangeError(ChartError):
    """
    Raised when a longitude cannot be mapped to a zodiac sign.

    Only non-finite longitudes end up here.
    """
    pass


class CalculationError(ChartError):
    """
    Raised when an ephemeris provider fails to calculate positions.
    """
    pass


class UnsupportedHouseSystemError(ChartError):
    """
    Raised when an unknown house system is requested.
    """
    pass


class UnsupportedEphemerisError(ChartError):
    """
    Raised when an unknown ephemeris backend is configured.
    """
    pass
