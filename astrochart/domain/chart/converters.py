from typing import Any, Dict

from astrochart.domain.chart.schemas import ChartDiagnostics, ChartResult


# ─────────────────────────────────────────────
# Domain → API payload
# ─────────────────────────────────────────────

def chart_to_payload(chart: ChartResult, locale: str = "en") -> Dict[str, Any]:
    """
    Convert a ChartResult into the JSON body returned by the astrology API.
    """
    return {
        "sunSign": chart.sun_sign.label(locale),
        "moonSign": chart.moon_sign.label(locale),
        "ascendant": chart.ascendant_sign.label(locale),
        "houses": [
            {
                "index": cusp.index,
                "sign": cusp.sign.label(locale),
                "longitude": round(cusp.longitude, 4),
                "meaning": cusp.meaning,
            }
            for cusp in chart.houses
        ],
    }


def diagnostics_to_payload(diagnostics: ChartDiagnostics) -> Dict[str, Any]:
    return {
        "tzOffset": diagnostics.tz_offset_minutes,
        "utc": diagnostics.utc,
        "jd": diagnostics.jd,
        "T": diagnostics.century,
        "sunLon": diagnostics.sun_longitude,
        "moonLon": diagnostics.moon_longitude,
        "ascLon": diagnostics.ascendant_longitude,
        "lat": diagnostics.latitude,
        "lng": diagnostics.longitude,
        "provider": diagnostics.provider,
        "houseSystem": diagnostics.house_system,
    }


# ─────────────────────────────────────────────
# Domain → prompt text
# ─────────────────────────────────────────────

def chart_to_prompt(chart: ChartResult, locale: str = "en") -> str:
    """
    Render a chart as a short textual description, e.g. for an
    image-generation prompt.
    """
    if locale == "zh":
        lines = [
            f"太阳星座：{chart.sun_sign.label('zh')}",
            f"月亮星座：{chart.moon_sign.label('zh')}",
            f"上升星座：{chart.ascendant_sign.label('zh')}",
        ]
    else:
        lines = [
            f"Sun in {chart.sun_sign.value} {chart.sun_sign.glyph}",
            f"Moon in {chart.moon_sign.value} {chart.moon_sign.glyph}",
            f"Ascendant in {chart.ascendant_sign.value} {chart.ascendant_sign.glyph}",
        ]

    for cusp in chart.houses:
        lines.append(f"{cusp.meaning} ({cusp.sign.label(locale)})")

    return "\n".join(lines)
