import csv
import io
import math
import re
from typing import List, Optional, Tuple

from astrochart.domain.chart.errors import InvalidInputError
from astrochart.domain.chart.schemas import GeoCoordinate
from astrochart.domain.location.errors import LocationNotFoundError


# Provincial capitals and a few cities, with pinyin aliases.
CITY_TABLE_CSV = """city,lat,lng
北京,39.904,116.407
上海,31.23,121.474
天津,39.084,117.361
重庆,29.563,106.551
石家庄,38.042,114.514
太原,37.87,112.548
呼和浩特,40.842,111.749
沈阳,41.805,123.431
长春,43.817,125.324
哈尔滨,45.803,126.534
南京,32.061,118.778
杭州,30.274,120.155
合肥,31.861,117.284
福州,26.074,119.297
南昌,28.682,115.858
济南,36.651,117.12
郑州,34.746,113.625
武汉,30.592,114.305
长沙,28.228,112.939
广州,23.129,113.264
南宁,22.817,108.366
海口,20.044,110.192
成都,30.572,104.066
贵阳,26.647,106.63
昆明,25.038,102.718
拉萨,29.65,91.1
西安,34.341,108.94
兰州,36.061,103.834
西宁,36.617,101.766
银川,38.487,106.231
乌鲁木齐,43.825,87.616
台北,25.033,121.565
香港,22.3,114.2
澳门,22.167,113.55
葫芦岛市,40.711,120.836
兴城市,40.616,120.716
beijing,39.904,116.407
shanghai,31.23,121.474
tianjin,39.084,117.361
chongqing,29.563,106.551
shijiazhuang,38.042,114.514
taiyuan,37.87,112.548
huhehaote,40.842,111.749
shenyang,41.805,123.431
changchun,43.817,125.324
haerbin,45.803,126.534
nanjing,32.061,118.778
hangzhou,30.274,120.155
hefei,31.861,117.284
fuzhou,26.074,119.297
nanchang,28.682,115.858
jinan,36.651,117.12
zhengzhou,34.746,113.625
wuhan,30.592,114.305
changsha,28.228,112.939
guangzhou,23.129,113.264
nanning,22.817,108.366
haikou,20.044,110.192
chengdu,30.572,104.066
guiyang,26.647,106.63
kunming,25.038,102.718
lhasa,29.65,91.1
xian,34.341,108.94
lanzhou,36.061,103.834
xining,36.617,101.766
yinchuan,38.487,106.231
wulumuqi,43.825,87.616
taipei,25.033,121.565
hongkong,22.3,114.2
macau,22.167,113.55
huludaoshi,40.711,120.836
xingchengshi,40.616,120.716
"""

CITY_COLUMNS = ("city", "城市", "name", "名称", "地名")
LAT_COLUMNS = ("lat", "latitude", "纬度")
LNG_COLUMNS = ("lng", "lon", "long", "longitude", "经度")

_SPACES = re.compile(r"[\s\u3000]+")
_PUNCTUATION = re.compile(r"[·•・．.\-_,，。/\\]+")
_ADMIN_SUFFIX = re.compile(r"(特别行政区|自治州|自治区|地区|市辖区|省|市|区|县|盟)$")


def normalize_city(name: str) -> str:
    """
    Canonical form for matching: lower case, no BOM, whitespace,
    punctuation or trailing administrative suffix.
    """
    text = (name or "").strip().lower().lstrip("\ufeff")
    text = _SPACES.sub("", text)
    text = _PUNCTUATION.sub("", text)
    return _ADMIN_SUFFIX.sub("", text)


def _find_column(header: List[str], aliases: Tuple[str, ...]) -> int:
    lowered = [h.lower() for h in header]
    for i, h in enumerate(lowered):
        if h in aliases:
            return i
    for i, h in enumerate(lowered):
        if any(alias in h for alias in aliases):
            return i
    return -1


class CityTableResolver:
    """
    Resolves city names against a small CSV table shipped with the package.

    A row matches when its normalised name equals the query or either one
    contains the other, so "杭州市" and "hangzhou city" both hit.
    """

    def __init__(self, csv_text: str = CITY_TABLE_CSV):
        self._rows = self._parse(csv_text)

    async def resolve(self, city: str) -> GeoCoordinate:
        coordinate = self.lookup(city)
        if coordinate is None:
            raise LocationNotFoundError(f"'{city}' is not in the city table")
        return coordinate

    def lookup(self, city: str) -> Optional[GeoCoordinate]:
        target = normalize_city(city)
        if not target:
            return None

        for name, coordinate in self._rows:
            if name == target or name in target or target in name:
                return coordinate
        return None

    @staticmethod
    def _parse(csv_text: str) -> List[Tuple[str, GeoCoordinate]]:
        reader = csv.reader(io.StringIO(csv_text.replace("\r\n", "\n").lstrip("\ufeff")))
        lines = [row for row in reader if any(cell.strip() for cell in row)]
        if len(lines) < 2:
            return []

        header = [cell.strip() for cell in lines[0]]
        city_idx = _find_column(header, CITY_COLUMNS)
        lat_idx = _find_column(header, LAT_COLUMNS)
        lng_idx = _find_column(header, LNG_COLUMNS)
        if min(city_idx, lat_idx, lng_idx) < 0:
            return []

        rows = []
        for cols in lines[1:]:
            if len(cols) <= max(city_idx, lat_idx, lng_idx):
                continue
            name = normalize_city(cols[city_idx])
            if not name:
                continue
            try:
                lat = float(cols[lat_idx])
                lng = float(cols[lng_idx])
            except ValueError:
                continue
            if not (math.isfinite(lat) and math.isfinite(lng)):
                continue
            try:
                rows.append((name, GeoCoordinate.build(latitude=lat, longitude=lng)))
            except InvalidInputError:
                continue
        return rows
