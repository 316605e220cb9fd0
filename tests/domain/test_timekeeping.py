import math
import unittest

from astrochart.domain.chart.errors import InvalidInputError
from astrochart.domain.chart.schemas import BirthMoment
from astrochart.domain.chart.timekeeping import (
    julian_century,
    julian_day,
    julian_moment,
    normalize_to_utc,
    offset_for_zone,
    resolve_offset,
)


def birth(year, month, day, hour, minute, tz=None):
    return BirthMoment(year=year, month=month, day=day, hour=hour, minute=minute, tz_offset_minutes=tz)


class TestTimeNormalizer(unittest.TestCase):

    def test_east_of_utc_offset_subtracts_hours(self):
        utc = normalize_to_utc(birth(2000, 1, 1, 10, 0), -480)
        self.assertEqual((utc.year, utc.month, utc.day), (2000, 1, 1))
        self.assertEqual(utc.fractional_hour, 2.0)

    def test_west_of_utc_offset_rolls_into_next_day(self):
        utc = normalize_to_utc(birth(2000, 12, 31, 22, 30), 300)
        self.assertEqual((utc.year, utc.month, utc.day), (2001, 1, 1))
        self.assertEqual(utc.fractional_hour, 3.5)

    def test_year_rolls_back(self):
        utc = normalize_to_utc(birth(2000, 1, 1, 3, 0), -480)
        self.assertEqual((utc.year, utc.month, utc.day), (1999, 12, 31))
        self.assertEqual(utc.fractional_hour, 19.0)

    def test_fractional_offset_keeps_seconds(self):
        utc = normalize_to_utc(birth(2000, 1, 1, 12, 0), 0.5)
        self.assertAlmostEqual(utc.fractional_hour, 12.0 + 30 / 3600.0)

    def test_offset_overflow_is_invalid_input(self):
        with self.assertRaises(InvalidInputError):
            normalize_to_utc(birth(1, 1, 1, 0, 0), -480)


class TestResolveOffset(unittest.TestCase):

    def test_explicit_offset_wins(self):
        self.assertEqual(resolve_offset(0, birth(2000, 1, 1, 0, 0, tz=-480), -480), 0.0)

    def test_birth_offset_used_when_no_explicit(self):
        self.assertEqual(resolve_offset(None, birth(2000, 1, 1, 0, 0, tz=120), -480), 120.0)

    def test_missing_or_non_finite_falls_back_to_default(self):
        b = birth(2000, 1, 1, 0, 0)
        self.assertEqual(resolve_offset(None, b, -480), -480)
        self.assertEqual(resolve_offset(math.nan, b, -480), -480)
        self.assertEqual(resolve_offset(math.inf, b, -480), -480)
        self.assertEqual(resolve_offset("not a number", b, -480), -480)

    def test_numeric_strings_are_accepted(self):
        self.assertEqual(resolve_offset("-330", birth(2000, 1, 1, 0, 0), -480), -330.0)


class TestOffsetForZone(unittest.TestCase):

    def test_fixed_zone(self):
        self.assertEqual(offset_for_zone("Asia/Shanghai", 2000, 1, 1, 20, 0), -480)

    def test_historical_daylight_saving(self):
        # China observed summer time from 1986 to 1991
        self.assertEqual(offset_for_zone("Asia/Shanghai", 1990, 8, 18, 14, 32), -540)

    def test_local_mean_time_keeps_seconds(self):
        self.assertAlmostEqual(
            offset_for_zone("Asia/Shanghai", 1890, 1, 1, 12, 0), -(485 + 43 / 60), places=6
        )
        self.assertAlmostEqual(
            offset_for_zone("America/New_York", 1880, 1, 1, 12, 0), 296 + 2 / 60, places=6
        )

    def test_daylight_saving_is_honoured(self):
        self.assertEqual(offset_for_zone("America/New_York", 2020, 1, 15, 12, 0), 300)
        self.assertEqual(offset_for_zone("America/New_York", 2020, 7, 15, 12, 0), 240)

    def test_half_hour_zone(self):
        self.assertEqual(offset_for_zone("Asia/Kolkata", 2000, 1, 1, 0, 0), -330)

    def test_unknown_zone(self):
        with self.assertRaises(InvalidInputError):
            offset_for_zone("Mars/Olympus_Mons", 2000, 1, 1, 0, 0)


class TestJulianDay(unittest.TestCase):

    def test_j2000_epoch(self):
        self.assertEqual(julian_day(2000, 1, 1, 12.0), 2451545.0)
        self.assertEqual(julian_century(2451545.0), 0.0)

    def test_meeus_reference_dates(self):
        # Meeus, Astronomical Algorithms, example 7.a and table 7.a
        self.assertAlmostEqual(julian_day(1957, 10, 4, 0.81 * 24), 2436116.31, places=6)
        self.assertEqual(julian_day(1987, 1, 27, 0.0), 2446822.5)
        self.assertEqual(julian_day(1988, 6, 19, 12.0), 2447332.0)
        self.assertEqual(julian_day(1600, 12, 31, 0.0), 2305812.5)

    def test_next_day_adds_exactly_one(self):
        for (y, m, d) in [(2000, 1, 1), (2000, 2, 28), (1999, 3, 15), (1850, 11, 29)]:
            self.assertEqual(julian_day(y, m, d + 1, 6.0) - julian_day(y, m, d, 6.0), 1.0)

    def test_month_and_year_boundaries_are_continuous(self):
        self.assertEqual(julian_day(2000, 2, 1, 0.0) - julian_day(2000, 1, 31, 0.0), 1.0)
        self.assertEqual(julian_day(2000, 3, 1, 0.0) - julian_day(2000, 2, 29, 0.0), 1.0)
        self.assertEqual(julian_day(2001, 1, 1, 0.0) - julian_day(2000, 12, 31, 0.0), 1.0)

    def test_julian_moment(self):
        utc = normalize_to_utc(birth(2000, 1, 1, 12, 0), 0)
        moment = julian_moment(utc)
        self.assertEqual(moment.jd, 2451545.0)
        self.assertEqual(moment.century, 0.0)


if __name__ == "__main__":
    unittest.main()
