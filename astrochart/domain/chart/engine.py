import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from astrochart.domain.chart.calculator import EphemerisProvider
from astrochart.domain.chart.errors import ChartError, InvalidInputError
from astrochart.domain.chart.houses import HouseSystem, get_house_system
from astrochart.domain.chart.providers import build_provider
from astrochart.domain.chart.schemas import (
    BirthMoment,
    ChartConfig,
    ChartDiagnostics,
    ChartResult,
    GeoCoordinate,
    HouseCusp,
)
from astrochart.domain.chart.signs import house_meaning, sign_of
from astrochart.domain.chart.timekeeping import (
    julian_moment,
    normalize_to_utc,
    resolve_offset,
    to_utc_datetime,
)

logger = logging.getLogger(__name__)


class ChartEngine:
    """
    Orchestrates chart calculation.

    This class:
    - Normalises the birth moment to UTC and a Julian Day
    - Delegates Sun, Moon and ascendant longitudes to an ephemeris provider
    - Derives house cusps through a pluggable house system
    - Maps every longitude to its zodiac sign

    It holds only immutable configuration and can be shared between threads.
    """

    def __init__(
        self,
        provider: Optional[EphemerisProvider] = None,
        house_system: Optional[HouseSystem] = None,
        config: Optional[ChartConfig] = None,
    ):
        self.config = config or ChartConfig()
        self.provider = provider or build_provider(self.config)
        self.house_system = house_system or get_house_system(self.config.house_system)

    # ─────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────

    def generate(
        self,
        birth: BirthMoment,
        coordinate: GeoCoordinate,
        tz_offset_minutes: Optional[float] = None,
    ) -> ChartResult:
        """
        Generate the chart for a birth moment and place.

        This method is:
        - Pure
        - Deterministic
        - Side-effect free
        """
        chart, _ = self.explain(birth, coordinate, tz_offset_minutes)
        return chart

    def explain(
        self,
        birth: BirthMoment,
        coordinate: GeoCoordinate,
        tz_offset_minutes: Optional[float] = None,
    ) -> Tuple[ChartResult, ChartDiagnostics]:
        """
        Generate the chart together with its intermediate values.
        """
        self._check_inputs(birth, coordinate)

        # ─────────────────────────────────────────────
        # Step 1: Civil time → UTC → Julian Day
        # ─────────────────────────────────────────────

        offset = resolve_offset(
            tz_offset_minutes, birth, self.config.default_tz_offset_minutes
        )
        utc = normalize_to_utc(birth, offset)
        moment = julian_moment(utc)

        # ─────────────────────────────────────────────
        # Step 2: Ephemeris positions
        # ─────────────────────────────────────────────

        positions = self.provider.calculate(
            moment, coordinate, self.config.polar_latitude_limit
        )

        # ─────────────────────────────────────────────
        # Step 3: House cusps
        # ─────────────────────────────────────────────

        locale = self.config.locale
        houses = tuple(
            HouseCusp(
                index=i + 1,
                longitude=cusp,
                sign=sign_of(cusp),
                meaning=house_meaning(i + 1, locale),
            )
            for i, cusp in enumerate(self.house_system.cusps(positions.ascendant))
        )

        # ─────────────────────────────────────────────
        # Step 4: Assemble chart
        # ─────────────────────────────────────────────

        chart = ChartResult(
            sun_sign=sign_of(positions.sun_longitude),
            moon_sign=sign_of(positions.moon_longitude),
            ascendant_sign=sign_of(positions.ascendant),
            houses=houses,
        )

        diagnostics = ChartDiagnostics(
            tz_offset_minutes=offset,
            utc=to_utc_datetime(birth, offset).isoformat(),
            jd=moment.jd,
            century=moment.century,
            sun_longitude=positions.sun_longitude,
            moon_longitude=positions.moon_longitude,
            ascendant_longitude=positions.ascendant,
            latitude=coordinate.latitude,
            longitude=coordinate.longitude,
            provider=self.provider.name,
            house_system=self.house_system.name,
        )

        logger.debug(f"Chart computed: {diagnostics.model_dump()}")
        return chart, diagnostics

    # ─────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────

    @staticmethod
    def _check_inputs(birth: BirthMoment, coordinate: GeoCoordinate) -> None:
        # Models built with model_construct() skip validation; re-validate.
        if not isinstance(birth, BirthMoment):
            raise InvalidInputError(f"Expected BirthMoment, got {type(birth).__name__}")
        if not isinstance(coordinate, GeoCoordinate):
            raise InvalidInputError(f"Expected GeoCoordinate, got {type(coordinate).__name__}")
        BirthMoment.build(**birth.model_dump())
        GeoCoordinate.build(**coordinate.model_dump())


# ─────────────────────────────────────────────
# Result-value entry point
# ─────────────────────────────────────────────

@dataclass(frozen=True)
class ChartOutcome:
    """
    Either a chart or the domain error that prevented it.
    """
    chart: Optional[ChartResult] = None
    error: Optional[ChartError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> ChartResult:
        if self.error is not None:
            raise self.error
        return self.chart


def compute_chart(
    birth: BirthMoment,
    tz_offset_minutes: Optional[float],
    coordinate: GeoCoordinate,
    engine: Optional[ChartEngine] = None,
) -> ChartOutcome:
    """
    Compute a chart, returning domain errors as values instead of raising.
    """
    engine = engine or ChartEngine()
    try:
        return ChartOutcome(chart=engine.generate(birth, coordinate, tz_offset_minutes))
    except ChartError as exc:
        logger.info(f"Chart computation rejected: {exc}")
        return ChartOutcome(error=exc)
