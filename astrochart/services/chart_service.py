from typing import Any, Dict, Optional

from astrochart.domain.chart.converters import chart_to_payload, diagnostics_to_payload
from astrochart.domain.chart.engine import ChartEngine
from astrochart.domain.chart.houses import get_house_system
from astrochart.domain.chart.providers import build_provider
from astrochart.domain.chart.schemas import BirthMoment, ChartConfig, GeoCoordinate
from astrochart.domain.chart.signs import SUPPORTED_LOCALES
from astrochart.domain.chart.timekeeping import offset_for_zone


class ChartService:
    """
    Request-level orchestration for chart generation.
    """

    def __init__(self, config: ChartConfig, engine: Optional[ChartEngine] = None):
        self.config = config
        self.engine = engine or ChartEngine(
            provider=build_provider(config),
            house_system=get_house_system(config.house_system),
            config=config,
        )
        self._engines = {
            locale: self.engine if locale == config.locale else ChartEngine(
                provider=self.engine.provider,
                house_system=self.engine.house_system,
                config=config.model_copy(update={"locale": locale}),
            )
            for locale in SUPPORTED_LOCALES
        }

    @classmethod
    def from_settings(cls, settings) -> "ChartService":
        return cls(ChartConfig.from_settings(settings))

    def create_chart(
        self,
        *,
        payload: Dict[str, Any],
        debug: bool = False,
    ) -> Dict[str, Any]:
        """
        Build a chart from already-validated request fields.

        payload keys: year, month, day, hour, minute, latitude, longitude and
        optionally tz_offset, timezone (IANA name) and locale.
        """
        birth = BirthMoment.build(
            year=payload["year"],
            month=payload["month"],
            day=payload["day"],
            hour=payload["hour"],
            minute=payload["minute"],
        )
        coordinate = GeoCoordinate.build(
            latitude=payload["latitude"],
            longitude=payload["longitude"],
        )

        tz_offset = payload.get("tz_offset")
        if tz_offset is None and payload.get("timezone"):
            tz_offset = offset_for_zone(
                payload["timezone"],
                birth.year, birth.month, birth.day, birth.hour, birth.minute,
            )

        locale = payload.get("locale") or self.config.locale
        if locale not in SUPPORTED_LOCALES:
            locale = self.config.locale
        engine = self._engine_for(locale)

        chart, diagnostics = engine.explain(birth, coordinate, tz_offset)

        result: Dict[str, Any] = {"data": chart_to_payload(chart, locale)}
        if debug:
            result["debug"] = diagnostics_to_payload(diagnostics)
        return result

    def _engine_for(self, locale: str) -> ChartEngine:
        return self._engines.get(locale, self.engine)
