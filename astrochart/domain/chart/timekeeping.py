"""
Civil time → UTC → Julian Day.

Timezone offsets use the JavaScript ``Date.getTimezoneOffset`` sign
convention throughout: the offset is the number of minutes to ADD to local
civil time to obtain UTC. Shanghai (UTC+8) is ``-480``, New York in winter
(UTC-5) is ``+300``.
"""

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from astrochart.domain.chart.errors import InvalidInputError
from astrochart.domain.chart.schemas import BirthMoment, JulianMoment, UtcInstant

logger = logging.getLogger(__name__)

J2000_JD = 2451545.0
DAYS_PER_CENTURY = 36525.0


# ─────────────────────────────────────────────
# Time Normalizer
# ─────────────────────────────────────────────

def resolve_offset(
    explicit: Optional[float],
    birth: BirthMoment,
    default_offset: float,
) -> float:
    """
    Pick the timezone offset to apply.

    An explicit finite offset wins over the one carried by the birth moment;
    when neither is usable the configured default is returned. The host
    timezone is never consulted.
    """
    for candidate in (explicit, birth.tz_offset_minutes):
        if candidate is None:
            continue
        try:
            value = float(candidate)
        except (TypeError, ValueError):
            continue
        if math.isfinite(value):
            return value

    logger.debug(f"No usable timezone offset, falling back to {default_offset} minutes")
    return default_offset


def to_utc_datetime(birth: BirthMoment, tz_offset_minutes: float) -> datetime:
    """
    Build the UTC instant for a civil local birth moment.

    utc = civil fields read as if they were UTC + tz_offset_minutes
    """
    civil = datetime(
        birth.year, birth.month, birth.day, birth.hour, birth.minute,
        tzinfo=timezone.utc,
    )
    try:
        return civil + timedelta(minutes=tz_offset_minutes)
    except OverflowError as exc:
        raise InvalidInputError(
            f"Offset of {tz_offset_minutes} minutes moves {civil.isoformat()} out of the supported calendar range"
        ) from exc


def normalize_to_utc(birth: BirthMoment, tz_offset_minutes: float) -> UtcInstant:
    utc = to_utc_datetime(birth, tz_offset_minutes)
    fractional_hour = (
        utc.hour
        + utc.minute / 60.0
        + utc.second / 3600.0
        + utc.microsecond / 3_600_000_000.0
    )
    return UtcInstant(
        year=utc.year,
        month=utc.month,
        day=utc.day,
        fractional_hour=fractional_hour,
    )


def offset_for_zone(
    zone_name: str,
    year: int,
    month: int,
    day: int,
    hour: int,
    minute: int,
) -> float:
    """
    Offset (getTimezoneOffset convention) of an IANA zone at a local wall time.

    Daylight saving rules in force at that date are honoured.
    """
    try:
        zone = ZoneInfo(zone_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidInputError(f"Unknown timezone '{zone_name}'") from exc

    try:
        local = datetime(year, month, day, hour, minute, tzinfo=zone)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Invalid local time for timezone '{zone_name}': {exc}") from exc

    utcoffset = local.utcoffset()
    return -utcoffset.total_seconds() / 60.0


# ─────────────────────────────────────────────
# Julian Day Converter
# ─────────────────────────────────────────────

def julian_day(year: int, month: int, day: int, fractional_hour: float) -> float:
    """
    Julian Day for a proleptic Gregorian UTC date (Meeus, ch. 7).
    """
    y = year
    m = month
    if m <= 2:
        y -= 1
        m += 12

    a = math.floor(y / 100)
    b = 2 - a + math.floor(a / 4)
    day_fraction = day + fractional_hour / 24.0

    return (
        math.floor(365.25 * (y + 4716))
        + math.floor(30.6001 * (m + 1))
        + day_fraction
        + b
        - 1524.5
    )


def julian_century(jd: float) -> float:
    return (jd - J2000_JD) / DAYS_PER_CENTURY


def julian_moment(utc: UtcInstant) -> JulianMoment:
    jd = julian_day(utc.year, utc.month, utc.day, utc.fractional_hour)
    return JulianMoment(jd=jd, century=julian_century(jd))
