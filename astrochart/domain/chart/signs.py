import math
from enum import Enum
from typing import Dict

from astrochart.domain.chart.angles import normalize_deg
from astrochart.domain.chart.errors import SignOutOfRangeError


SIGN_SPAN = 30.0

SUPPORTED_LOCALES = ("en", "zh")


class ZodiacSign(str, Enum):
    """
    The twelve 30° bands of the ecliptic, counted from 0° Aries.
    """
    ARIES = "Aries"
    TAURUS = "Taurus"
    GEMINI = "Gemini"
    CANCER = "Cancer"
    LEO = "Leo"
    VIRGO = "Virgo"
    LIBRA = "Libra"
    SCORPIO = "Scorpio"
    SAGITTARIUS = "Sagittarius"
    CAPRICORN = "Capricorn"
    AQUARIUS = "Aquarius"
    PISCES = "Pisces"

    @property
    def index(self) -> int:
        return SIGN_ORDER.index(self)

    @property
    def start_longitude(self) -> float:
        return self.index * SIGN_SPAN

    @property
    def glyph(self) -> str:
        return SIGN_GLYPHS[self]

    def label(self, locale: str = "en") -> str:
        if locale == "zh":
            return SIGN_LABELS_ZH[self]
        return self.value


SIGN_ORDER = list(ZodiacSign)

SIGN_GLYPHS: Dict[ZodiacSign, str] = dict(
    zip(SIGN_ORDER, ["♈", "♉", "♊", "♋", "♌", "♍", "♎", "♏", "♐", "♑", "♒", "♓"])
)

SIGN_LABELS_ZH: Dict[ZodiacSign, str] = dict(
    zip(
        SIGN_ORDER,
        [
            "白羊座", "金牛座", "双子座", "巨蟹座", "狮子座", "处女座",
            "天秤座", "天蝎座", "射手座", "摩羯座", "水瓶座", "双鱼座",
        ],
    )
)


# ─────────────────────────────────────────────
# House meanings (static, keyed by house index)
# ─────────────────────────────────────────────

HOUSE_MEANINGS: Dict[str, Dict[int, str]] = {
    "en": {
        1: "House 1: self and image, outward temperament and beginnings",
        2: "House 2: money and values, resources and security",
        3: "House 3: communication and learning, siblings and short trips",
        4: "House 4: home and roots, inner security and private life",
        5: "House 5: creativity and romance, children and self-expression",
        6: "House 6: work and health, routines and service",
        7: "House 7: partners and cooperation, contracts and projection",
        8: "House 8: shared resources and transformation, intimacy and risk",
        9: "House 9: higher learning, philosophy and long journeys",
        10: "House 10: career and reputation, goals and public role",
        11: "House 11: community and aspirations, friends and networks",
        12: "House 12: the unconscious and healing, retreat and endings",
    },
    "zh": {
        1: "第1宫：自我与形象、外在气质与开端",
        2: "第2宫：金钱与价值、资源与安全感",
        3: "第3宫：沟通与学习、手足与短途",
        4: "第4宫：家庭与根基、内在安全与私域",
        5: "第5宫：创造与恋爱、子女与表达",
        6: "第6宫：工作与健康、日常与服务",
        7: "第7宫：伴侣与合作、契约与投射",
        8: "第8宫：共享与转化、亲密与风险",
        9: "第9宫：高等教育、哲思与远行",
        10: "第10宫：事业与名誉、目标与社会角色",
        11: "第11宫：社群与愿景、朋友与资源",
        12: "第12宫：潜意识与疗愈、隐退与结束",
    },
}


def sign_of(longitude: float) -> ZodiacSign:
    """
    Map an ecliptic longitude (degrees, any real value) to its zodiac sign.

    Bands are closed-open: 30.0 belongs to Taurus, 29.999 to Aries.
    """
    if not math.isfinite(longitude):
        raise SignOutOfRangeError(f"Cannot map non-finite longitude {longitude!r} to a sign")

    index = int(normalize_deg(longitude) // SIGN_SPAN)
    index = min(max(index, 0), 11)
    return SIGN_ORDER[index]


def degree_in_sign(longitude: float) -> float:
    """
    Position within the sign, in [0, 30).
    """
    return normalize_deg(longitude) - sign_of(longitude).start_longitude


def house_meaning(index: int, locale: str = "en") -> str:
    meanings = HOUSE_MEANINGS.get(locale, HOUSE_MEANINGS["en"])
    return meanings.get(index, f"House {index}")
