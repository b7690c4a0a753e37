"""Takeoff and landing evaluation of a loading.

The calculator knows nothing about flight phases. This module runs it twice
for the same station weights, once with the fuel on board at takeoff and once
with the fuel left after the planned burn, and checks each result against the
matching weight limit.

It also provides the input sanitising a user interface applies before
calling the calculator (clamping station weights and fuel to their limits).

Typical usage:
    flight = evaluate_flight(aircraft, {"pilot": 80}, fuel_volume_l=90, fuel_burn_l=30)
    if not flight.is_safe:
        ...
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from massbalance.systems.weight_balance.calculator import MassBalanceResult, calculate_mass_balance
from massbalance.units import liters_to_kg

if TYPE_CHECKING:
    from massbalance.aircraft.aircraft import AircraftConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlightLoadingResult:
    """Mass and balance at takeoff and at landing.

    Attributes:
        takeoff: Result with the full fuel load.
        landing: Result with the fuel remaining after the burn.
        takeoff_fuel_weight: Fuel mass at takeoff.
        landing_fuel_weight: Fuel mass at landing.
        exceeds_max_takeoff: Takeoff weight is above MTOW.
        exceeds_max_landing: Landing weight is above the maximum landing
            weight. Always False when the aircraft has none.
    """

    takeoff: MassBalanceResult
    landing: MassBalanceResult
    takeoff_fuel_weight: float
    landing_fuel_weight: float
    exceeds_max_takeoff: bool
    exceeds_max_landing: bool

    @property
    def is_safe(self) -> bool:
        """True when both phases are in the envelope and under their limits."""
        return (
            self.takeoff.is_within_envelope
            and self.landing.is_within_envelope
            and not self.exceeds_max_takeoff
            and not self.exceeds_max_landing
        )

    @property
    def cg_shift_in(self) -> float:
        """CG movement from takeoff to landing (positive is aft)."""
        return self.landing.cg_position_in - self.takeoff.cg_position_in


def evaluate_flight(
    aircraft: "AircraftConfig",
    station_weights: Mapping[str, float],
    fuel_volume_l: float,
    fuel_burn_l: float = 0.0,
) -> FlightLoadingResult:
    """Evaluate a loading at takeoff and at landing.

    Args:
        aircraft: Aircraft configuration.
        station_weights: Weight per station id, used for both phases.
        fuel_volume_l: Fuel on board at takeoff in liters.
        fuel_burn_l: Planned fuel burn in liters. Landing fuel never goes
            below zero.

    Returns:
        FlightLoadingResult with both phases.
    """
    landing_volume_l = max(fuel_volume_l - fuel_burn_l, 0.0)

    takeoff_fuel = liters_to_kg(fuel_volume_l, aircraft.fuel_density_kg_per_l)
    landing_fuel = liters_to_kg(landing_volume_l, aircraft.fuel_density_kg_per_l)

    takeoff = calculate_mass_balance(aircraft, station_weights, takeoff_fuel)
    landing = calculate_mass_balance(aircraft, station_weights, landing_fuel)

    exceeds_max_landing = (
        aircraft.max_landing_weight is not None
        and landing.total_weight > aircraft.max_landing_weight
    )

    logger.debug(
        "%s: takeoff %.1f / landing %.1f (burn %.1f L)",
        aircraft.registration,
        takeoff.total_weight,
        landing.total_weight,
        fuel_burn_l,
    )

    return FlightLoadingResult(
        takeoff=takeoff,
        landing=landing,
        takeoff_fuel_weight=takeoff_fuel,
        landing_fuel_weight=landing_fuel,
        exceeds_max_takeoff=takeoff.total_weight > aircraft.max_takeoff_weight,
        exceeds_max_landing=exceeds_max_landing,
    )


def clamp_station_weights(
    aircraft: "AircraftConfig", station_weights: Mapping[str, float]
) -> dict[str, float]:
    """Clamp station weights to [0, max_weight] for every declared station.

    Ids the aircraft does not declare are dropped and missing stations are
    set to 0.
    """
    clamped = {}
    for station in aircraft.stations:
        weight = station_weights.get(station.id) or 0.0
        clamped[station.id] = min(max(0.0, weight), station.max_weight)
        if clamped[station.id] != weight:
            logger.info(
                "Clamped %s from %.1f to %.1f", station.id, weight, clamped[station.id]
            )
    return clamped


def clamp_fuel_volume(aircraft: "AircraftConfig", volume_l: float) -> float:
    """Clamp a fuel volume to [0, fuel capacity]."""
    return min(max(0.0, volume_l), aircraft.fuel_capacity_l)
