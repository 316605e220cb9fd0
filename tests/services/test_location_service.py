import unittest

import httpx

from astrochart.domain.chart.schemas import GeoCoordinate
from astrochart.domain.location.city_table import CityTableResolver
from astrochart.domain.location.errors import GeocodingError, LocationNotFoundError
from astrochart.domain.location.resolver import ChainedResolver
from astrochart.services.location_service import LocationService

HANGZHOU = {
    "results": [
        {
            "name": "Hangzhou",
            "admin1": "Zhejiang",
            "country": "China",
            "latitude": 30.29365,
            "longitude": 120.16142,
            "timezone": "Asia/Shanghai",
        }
    ]
}


def service_returning(status_code=200, json=None, content=None, seen=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if content is not None:
            return httpx.Response(status_code, content=content)
        return httpx.Response(status_code, json=json)

    return LocationService(transport=httpx.MockTransport(handler))


class TestLocationService(unittest.IsolatedAsyncioTestCase):

    async def test_search_cities_maps_results(self):
        seen = []
        service = service_returning(json=HANGZHOU, seen=seen)

        results = await service.search_cities("hangzhou")

        self.assertEqual(results, [{
            "display_name": "Hangzhou, Zhejiang, China",
            "latitude": 30.29365,
            "longitude": 120.16142,
            "timezone": "Asia/Shanghai",
        }])
        self.assertEqual(seen[0].url.params["name"], "hangzhou")
        self.assertEqual(seen[0].url.params["count"], "10")

    async def test_short_query_skips_request(self):
        seen = []
        service = service_returning(json=HANGZHOU, seen=seen)
        self.assertEqual(await service.search_cities("h"), [])
        self.assertEqual(seen, [])

    async def test_no_results(self):
        service = service_returning(json={"generationtime_ms": 0.1})
        self.assertEqual(await service.search_cities("nowhere"), [])
        with self.assertRaises(LocationNotFoundError):
            await service.resolve("nowhere")

    async def test_resolve(self):
        coordinate = await service_returning(json=HANGZHOU).resolve("Hangzhou")
        self.assertEqual(coordinate, GeoCoordinate(latitude=30.29365, longitude=120.16142))

    async def test_http_error(self):
        service = service_returning(status_code=503, json={"error": True})
        with self.assertLogs("astrochart.services.location_service", level="ERROR"):
            with self.assertRaises(GeocodingError):
                await service.search_cities("hangzhou")

    async def test_invalid_json(self):
        service = service_returning(content=b"<html>oops</html>")
        with self.assertRaises(GeocodingError):
            await service.search_cities("hangzhou")

    async def test_non_object_body(self):
        for body in (["x"], "x", 7):
            with self.subTest(body=body):
                with self.assertRaises(GeocodingError):
                    await service_returning(json=body).search_cities("hangzhou")

        with self.assertRaises(GeocodingError):
            await service_returning(content=b"null").resolve("hangzhou")

    async def test_malformed_results(self):
        with self.assertRaises(GeocodingError):
            await service_returning(json={"results": "Hangzhou"}).search_cities("hangzhou")

        mixed = {"results": ["junk", None, HANGZHOU["results"][0]]}
        results = await service_returning(json=mixed).search_cities("hangzhou")
        self.assertEqual([r["display_name"] for r in results], ["Hangzhou, Zhejiang, China"])

    async def test_out_of_range_coordinates(self):
        bad = {"results": [{"name": "X", "latitude": 123.0, "longitude": 0.0}]}
        with self.assertRaises(GeocodingError):
            await service_returning(json=bad).resolve("Xanadu")


class TestChainedResolver(unittest.IsolatedAsyncioTestCase):

    async def test_table_hit_skips_geocoder(self):
        seen = []
        resolver = ChainedResolver(CityTableResolver(), service_returning(json=HANGZHOU, seen=seen))
        coordinate = await resolver.resolve("上海")
        self.assertEqual(coordinate.latitude, 31.23)
        self.assertEqual(seen, [])

    async def test_table_miss_uses_geocoder(self):
        resolver = ChainedResolver(CityTableResolver(), service_returning(json=HANGZHOU))
        coordinate = await resolver.resolve("Reykjavik")
        self.assertEqual(coordinate.latitude, 30.29365)

    async def test_nothing_found(self):
        resolver = ChainedResolver(CityTableResolver(), service_returning(json={}))
        with self.assertRaises(LocationNotFoundError):
            await resolver.resolve("Atlantis")

    async def test_geocoder_failure_is_reported(self):
        resolver = ChainedResolver(CityTableResolver(), service_returning(status_code=500, json={}))
        with self.assertRaises(GeocodingError):
            await resolver.resolve("Atlantis")

    async def test_garbage_from_geocoder_is_reported(self):
        resolver = ChainedResolver(CityTableResolver(), service_returning(json=["x"]))
        with self.assertRaises(GeocodingError):
            await resolver.resolve("Paris")

    async def test_empty_name(self):
        with self.assertRaises(LocationNotFoundError):
            await ChainedResolver(CityTableResolver()).resolve("  ")


if __name__ == "__main__":
    unittest.main()
