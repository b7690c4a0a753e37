"""Mass and balance calculation.

Sums the empty aircraft, every load station and the fuel into one total
weight and moment, derives the CG, and checks the result against the CG
envelope and the maximum takeoff weight.

The calculation is a pure function of its arguments. Station weights and fuel
are owned by the caller and passed in on every call; the result is a new
immutable object.

Typical usage:
    result = calculate_mass_balance(aircraft, {"pilot": 75, "copilot": 75}, fuel_weight=36.0)
    if result.exceeds_max_weight or not result.is_within_envelope:
        ...
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from massbalance.systems.weight_balance.envelope import is_within_envelope
from massbalance.systems.weight_balance.station import StationResult

if TYPE_CHECKING:
    from massbalance.aircraft.aircraft import AircraftConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MassBalanceResult:
    """Result of a mass and balance calculation.

    Attributes:
        total_weight: Empty weight + station weights + fuel weight.
        total_moment: Empty moment + station moments + fuel moment.
        cg_position_in: total_moment / total_weight, or 0 for zero weight.
        is_within_envelope: CG is inside the envelope at total_weight.
        exceeds_max_weight: total_weight is above the maximum takeoff weight.
        stations: Per-station results, in the aircraft's station order.
        empty_weight: Empty weight of the aircraft.
        empty_moment: empty_weight x empty CG.
    """

    total_weight: float
    total_moment: float
    cg_position_in: float
    is_within_envelope: bool
    exceeds_max_weight: bool
    stations: tuple[StationResult, ...]
    empty_weight: float
    empty_moment: float

    @property
    def is_safe(self) -> bool:
        """True when inside the envelope and not above maximum takeoff weight."""
        return self.is_within_envelope and not self.exceeds_max_weight

    def station_result(self, station_id: str) -> StationResult | None:
        """Get the result for a station by id."""
        for result in self.stations:
            if result.station.id == station_id:
                return result
        return None


def calculate_moment(weight: float, arm_in: float) -> float:
    """Calculate moment (weight x arm)."""
    return weight * arm_in


def calculate_cg(total_moment: float, total_weight: float) -> float:
    """Calculate CG position from total moment and total weight.

    Returns:
        CG in inches from datum. Zero weight gives 0 rather than an error.
    """
    if total_weight == 0:
        return 0.0
    return total_moment / total_weight


def calculate_mass_balance(
    aircraft: "AircraftConfig",
    station_weights: Mapping[str, float],
    fuel_weight: float,
) -> MassBalanceResult:
    """Calculate total weight, moment and CG for a loading.

    Args:
        aircraft: Aircraft configuration (read only).
        station_weights: Weight per station id. Stations missing from the
            mapping, or given as None, count as 0; ids the aircraft does not
            declare are ignored. Values are used as given, without clamping to station maximums.
        fuel_weight: Fuel mass, already converted from volume by the caller.

    Returns:
        A new MassBalanceResult. Overweight and out-of-envelope loadings are
        reported through its boolean fields, never raised.

    Examples:
        >>> result = calculate_mass_balance(se_lro, {"pilot": 75, "copilot": 75, "baggage": 10}, 36.0)
        >>> result.total_weight
        577.0
    """
    empty_moment = calculate_moment(aircraft.empty_weight, aircraft.empty_cg_in)

    station_results = []
    for station in aircraft.stations:
        weight = station_weights.get(station.id) or 0
        station_results.append(StationResult(station, weight, station.moment_for(weight)))

    fuel_moment = calculate_moment(fuel_weight, aircraft.fuel_arm_in)

    stations_weight = sum(result.weight for result in station_results)
    stations_moment = sum(result.moment for result in station_results)

    total_weight = aircraft.empty_weight + stations_weight + fuel_weight
    total_moment = empty_moment + stations_moment + fuel_moment
    cg_position = calculate_cg(total_moment, total_weight)

    within_envelope = is_within_envelope(total_weight, cg_position, aircraft.envelope)
    exceeds_max_weight = total_weight > aircraft.max_takeoff_weight

    logger.debug(
        "%s: weight=%.1f moment=%.1f cg=%.2f in envelope=%s overweight=%s",
        aircraft.registration,
        total_weight,
        total_moment,
        cg_position,
        within_envelope,
        exceeds_max_weight,
    )

    return MassBalanceResult(
        total_weight=total_weight,
        total_moment=total_moment,
        cg_position_in=cg_position,
        is_within_envelope=within_envelope,
        exceeds_max_weight=exceeds_max_weight,
        stations=tuple(station_results),
        empty_weight=aircraft.empty_weight,
        empty_moment=empty_moment,
    )
