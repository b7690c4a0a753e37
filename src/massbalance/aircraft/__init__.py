"""Aircraft configuration data and the registry that loads it."""

from massbalance.aircraft.aircraft import AircraftConfig
from massbalance.aircraft.registry import (
    AircraftConfigError,
    AircraftNotFoundError,
    AircraftRegistry,
)

__all__ = ["AircraftConfig", "AircraftConfigError", "AircraftNotFoundError", "AircraftRegistry"]
