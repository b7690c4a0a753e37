"""Weight and balance calculation engine.

This package computes total weight, moment and center of gravity for a
loading, and checks it against the aircraft's CG envelope and weight limits.
"""

from massbalance.systems.weight_balance.calculator import (
    MassBalanceResult,
    calculate_cg,
    calculate_mass_balance,
    calculate_moment,
)
from massbalance.systems.weight_balance.envelope import (
    CGEnvelope,
    CGEnvelopePoint,
    EnvelopeError,
    is_within_envelope,
)
from massbalance.systems.weight_balance.flight_phases import (
    FlightLoadingResult,
    clamp_fuel_volume,
    clamp_station_weights,
    evaluate_flight,
)
from massbalance.systems.weight_balance.station import Station, StationResult

__all__ = [
    "CGEnvelope",
    "CGEnvelopePoint",
    "EnvelopeError",
    "FlightLoadingResult",
    "MassBalanceResult",
    "Station",
    "StationResult",
    "calculate_cg",
    "calculate_mass_balance",
    "calculate_moment",
    "clamp_fuel_volume",
    "clamp_station_weights",
    "evaluate_flight",
    "is_within_envelope",
]
