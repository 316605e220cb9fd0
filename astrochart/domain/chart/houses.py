"""
House-cusp strategies.

A house system turns an ascendant longitude into twelve cusp longitudes.
Only the equal-house system ships here; other systems register themselves
through ``register_house_system`` without touching the rest of the pipeline.
"""

from typing import Dict, Protocol, Tuple

from astrochart.domain.chart.angles import normalize_deg
from astrochart.domain.chart.errors import UnsupportedHouseSystemError

HOUSE_COUNT = 12


class HouseSystem(Protocol):
    name: str

    def cusps(self, ascendant: float) -> Tuple[float, ...]:
        ...


class EqualHouseSystem:
    """
    Twelve 30° houses, the first cusp on the ascendant.
    """

    name = "equal"

    def cusps(self, ascendant: float) -> Tuple[float, ...]:
        return tuple(
            normalize_deg(ascendant + i * 30.0)
            for i in range(HOUSE_COUNT)
        )


_HOUSE_SYSTEMS: Dict[str, HouseSystem] = {
    EqualHouseSystem.name: EqualHouseSystem(),
}


def register_house_system(system: HouseSystem) -> None:
    _HOUSE_SYSTEMS[system.name.lower()] = system


def get_house_system(name: str) -> HouseSystem:
    try:
        return _HOUSE_SYSTEMS[name.lower()]
    except KeyError:
        raise UnsupportedHouseSystemError(
            f"Unsupported house system '{name}'. Available: {', '.join(sorted(_HOUSE_SYSTEMS))}"
        ) from None


def available_house_systems() -> Tuple[str, ...]:
    return tuple(sorted(_HOUSE_SYSTEMS))
