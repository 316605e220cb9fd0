class ResolveError(Exception):
    """
    Base exception for coordinate resolution failures.
    """
    pass


class LocationNotFoundError(ResolveError):
    """
    Raised when no resolver knows the requested place.
    """
    pass


class GeocodingError(ResolveError):
    """
    Raised when a remote geocoding service fails or answers garbage.
    """
    pass
