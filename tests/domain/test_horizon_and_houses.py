import math
import unittest

from astrochart.domain.chart.angles import angular_distance
from astrochart.domain.chart.errors import (
    NumericInstabilityError,
    UnsupportedHouseSystemError,
)
from astrochart.domain.chart.horizon import ascendant
from astrochart.domain.chart import houses
from astrochart.domain.chart.houses import (
    EqualHouseSystem,
    available_house_systems,
    get_house_system,
    register_house_system,
)

EPS = 23.439291


class TestAscendant(unittest.TestCase):

    def test_equator_quadrants(self):
        # On the equator the ascendant sits 90° ahead of the culminating point
        self.assertAlmostEqual(ascendant(0.0, 0.0, EPS), 90.0, places=9)
        self.assertAlmostEqual(angular_distance(ascendant(90.0, 0.0, EPS), 180.0), 0.0, places=9)
        self.assertAlmostEqual(ascendant(180.0, 0.0, EPS), 270.0, places=9)

    def test_mid_northern_latitude(self):
        # LST 0h at 45°N: tan λ = -1 / (tan 45° · sin ε), rising in Cancer
        self.assertAlmostEqual(ascendant(0.0, 45.0, EPS), 111.696, delta=0.01)

    def test_southern_latitude_mirrors_northern(self):
        north = ascendant(0.0, 45.0, EPS)
        south = ascendant(0.0, -45.0, EPS)
        self.assertAlmostEqual(north + south, 180.0, places=6)

    def test_result_is_normalised(self):
        for lst in range(0, 360, 15):
            for lat in (-66.0, -30.0, 0.0, 30.0, 66.0, 89.0):
                value = ascendant(float(lst), lat, EPS)
                self.assertTrue(math.isfinite(value))
                self.assertGreaterEqual(value, 0.0)
                self.assertLess(value, 360.0)

    def test_polar_latitude_raises(self):
        for lat in (89.95, 89.99, 90.0, -89.99, -90.0):
            with self.assertRaises(NumericInstabilityError):
                ascendant(123.0, lat, EPS)

    def test_limit_is_configurable(self):
        with self.assertRaises(NumericInstabilityError):
            ascendant(10.0, 80.0, EPS, polar_latitude_limit=75.0)
        self.assertTrue(math.isfinite(ascendant(10.0, 89.99, EPS, polar_latitude_limit=90.0)))

    def test_non_finite_inputs_raise(self):
        with self.assertRaises(NumericInstabilityError):
            ascendant(math.nan, 10.0, EPS)


class TestEqualHouses(unittest.TestCase):

    def test_first_cusp_is_ascendant(self):
        cusps = EqualHouseSystem().cusps(123.4)
        self.assertEqual(len(cusps), 12)
        self.assertEqual(cusps[0], 123.4)

    def test_closure(self):
        for asc in (0.0, 17.25, 200.5, 359.9):
            cusps = EqualHouseSystem().cusps(asc)
            expected = sorted(((asc + 30.0 * k) % 360.0) for k in range(12))
            self.assertEqual(len(set(cusps)), 12)
            for got, want in zip(sorted(cusps), expected):
                self.assertAlmostEqual(got, want, places=9)

    def test_wraps_past_360(self):
        cusps = EqualHouseSystem().cusps(350.0)
        self.assertAlmostEqual(cusps[1], 20.0)
        self.assertTrue(all(0.0 <= c < 360.0 for c in cusps))


class TestHouseSystemRegistry(unittest.TestCase):

    def test_equal_is_default(self):
        self.assertIsInstance(get_house_system("equal"), EqualHouseSystem)
        self.assertIsInstance(get_house_system("EQUAL"), EqualHouseSystem)
        self.assertIn("equal", available_house_systems())

    def test_unknown_system(self):
        with self.assertRaises(UnsupportedHouseSystemError):
            get_house_system("no-such-system")

    def test_external_system_can_be_registered(self):
        class FixedHouses:
            name = "fixed-aries"

            def cusps(self, ascendant):
                return tuple(30.0 * i for i in range(12))

        register_house_system(FixedHouses())
        self.addCleanup(houses._HOUSE_SYSTEMS.pop, "fixed-aries", None)
        self.assertEqual(get_house_system("fixed-aries").cusps(77.0)[3], 90.0)
        self.assertIn("fixed-aries", available_house_systems())


if __name__ == "__main__":
    unittest.main()
