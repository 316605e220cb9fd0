import calendar
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from astrochart.domain.chart.errors import InvalidInputError
from astrochart.domain.chart.signs import ZodiacSign


class ValueModel(BaseModel):
    """
    Immutable value type. Non-finite floats are rejected at construction.
    """
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    @classmethod
    def build(cls, **fields):
        """
        Construct the value, reporting violations as InvalidInputError.
        """
        try:
            return cls(**fields)
        except ValidationError as exc:
            raise InvalidInputError(f"Invalid {cls.__name__}: {exc}") from exc


# ─────────────────────────────────────────────
# Inputs
# ─────────────────────────────────────────────

class BirthMoment(ValueModel):
    """
    Civil local birth date and time.

    tz_offset_minutes follows the JavaScript getTimezoneOffset convention:
    minutes to ADD to local time to obtain UTC (UTC+8 is -480).
    """
    year: int = Field(..., ge=1, le=9999)
    month: int = Field(..., ge=1, le=12)
    day: int = Field(..., ge=1, le=31)
    hour: int = Field(..., ge=0, le=23)
    minute: int = Field(..., ge=0, le=59)
    tz_offset_minutes: Optional[int] = None

    @model_validator(mode="after")
    def _check_day_in_month(self):
        _, days_in_month = calendar.monthrange(self.year, self.month)
        if self.day > days_in_month:
            raise ValueError(
                f"day {self.day} out of range for {self.year}-{self.month:02d}"
            )
        return self


class GeoCoordinate(ValueModel):
    """
    Geographic position of the observer, in degrees (east longitude positive).
    """
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


# ─────────────────────────────────────────────
# Derived time values
# ─────────────────────────────────────────────

class UtcInstant(ValueModel):
    year: int
    month: int
    day: int
    fractional_hour: float


class JulianMoment(ValueModel):
    """
    Continuous Julian Day and Julian centuries since J2000.0.
    """
    jd: float
    century: float


# ─────────────────────────────────────────────
# Outputs
# ─────────────────────────────────────────────

class EphemerisPositions(ValueModel):
    """
    Ecliptic longitudes (degrees, [0, 360)) produced by an ephemeris provider.
    """
    sun_longitude: float
    moon_longitude: float
    ascendant: float


class HouseCusp(ValueModel):
    index: int = Field(..., ge=1, le=12)
    longitude: float
    sign: ZodiacSign
    meaning: str


class ChartResult(ValueModel):
    """
    Sun, Moon and ascendant signs plus the twelve house cusps.
    """
    sun_sign: ZodiacSign
    moon_sign: ZodiacSign
    ascendant_sign: ZodiacSign
    houses: Tuple[HouseCusp, ...] = Field(..., min_length=12, max_length=12)


class ChartDiagnostics(ValueModel):
    """
    Intermediate values of a chart computation, for debugging.
    """
    tz_offset_minutes: float
    utc: str
    jd: float
    century: float
    sun_longitude: float
    moon_longitude: float
    ascendant_longitude: float
    latitude: float
    longitude: float
    provider: str
    house_system: str


# ─────────────────────────────────────────────
# Engine configuration
# ─────────────────────────────────────────────

class ChartConfig(ValueModel):
    """
    Explicit defaults for the chart engine, so nothing is read from the
    environment inside the computation.
    """
    ephemeris_backend: str = "approximate"
    swisseph_flavor: str = "moseph"
    swisseph_ephe_path: Optional[str] = None
    default_tz_offset_minutes: float = -480.0
    house_system: str = "equal"
    polar_latitude_limit: float = Field(89.9, gt=0.0, le=90.0)
    locale: str = "en"

    @classmethod
    def from_settings(cls, settings) -> "ChartConfig":
        return cls(
            ephemeris_backend=settings.EPHEMERIS_BACKEND,
            swisseph_flavor=settings.SWISSEPH_FLAVOR,
            swisseph_ephe_path=settings.SWISSEPH_EPHE_PATH,
            default_tz_offset_minutes=settings.DEFAULT_TZ_OFFSET_MINUTES,
            house_system=settings.HOUSE_SYSTEM,
            polar_latitude_limit=settings.POLAR_LATITUDE_LIMIT,
            locale=settings.SIGN_LOCALE,
        )
