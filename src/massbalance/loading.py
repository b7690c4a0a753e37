"""Loading sheets.

A loading sheet records what the pilot has put in the aircraft: the weight at
each station, the fuel on board and the planned burn. Sheets are stored as
YAML, keyed by registration:

    registration: SE-LRO
    stations:
      pilot: 75
      copilot: 75
      baggage: 10
    fuel:
      volume_l: 50
      burn_l: 20
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from massbalance.core.config import ConfigError, ConfigLoader


@dataclass
class LoadingSheet:
    """Caller-owned loading input for one aircraft.

    Attributes:
        registration: Tail number the sheet belongs to.
        station_weights: Weight per station id.
        fuel_volume_l: Fuel on board at takeoff in liters.
        fuel_burn_l: Planned fuel burn in liters.
    """

    registration: str
    station_weights: dict[str, float] = field(default_factory=dict)
    fuel_volume_l: float = 0.0
    fuel_burn_l: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str | Path | None = None) -> "LoadingSheet":
        """Build a sheet from its YAML mapping.

        Raises:
            ConfigError: If the registration is missing, a weight is not a
                number, or a fuel figure is negative.
        """
        config = ConfigLoader(data, source=source)

        registration = config.require("registration")

        stations = config.get("stations") or {}
        if not isinstance(stations, dict):
            raise ConfigError(f"{config.source}: 'stations' must map station ids to weights")

        station_weights = {}
        for station_id in stations:
            station_weights[str(station_id)] = config.get_float(f"stations.{station_id}")

        fuel_volume_l = config.get_float("fuel.volume_l", default=0.0)
        fuel_burn_l = config.get_float("fuel.burn_l", default=0.0)
        if fuel_volume_l < 0 or fuel_burn_l < 0:
            raise ConfigError(f"{config.source}: fuel volume and burn must not be negative")

        return cls(
            registration=str(registration),
            station_weights=station_weights,
            fuel_volume_l=fuel_volume_l,
            fuel_burn_l=fuel_burn_l,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "registration": self.registration,
            "stations": dict(self.station_weights),
            "fuel": {"volume_l": self.fuel_volume_l, "burn_l": self.fuel_burn_l},
        }


def load_loading_sheet(path: str | Path) -> LoadingSheet:
    """Read a loading sheet from a YAML file.

    Raises:
        ConfigError: If the file cannot be read or is malformed.
    """
    config = ConfigLoader.load(path)
    return LoadingSheet.from_dict(config.to_dict(), source=path)


def save_loading_sheet(sheet: LoadingSheet, path: str | Path) -> None:
    """Write a loading sheet to a YAML file."""
    ConfigLoader(sheet.to_dict()).save(path)
