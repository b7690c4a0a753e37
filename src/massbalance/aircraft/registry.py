"""Aircraft configuration registry.

Loads aircraft configurations from YAML fleet files and looks them up by
registration. Each file describes one model type: the data shared by every
airframe of that type, followed by the tail numbers with their own empty
weight and CG.

Example fleet file:

    model_type: tecnam-2002jf
    model: Tecnam P2002JF
    manufacturer: Tecnam
    max_takeoff_weight: 620
    default_unit: kg
    fuel:
      capacity_l: 100
      arm_in: 60.24
      type: avgas
    stations:
      - {id: pilot, name: Pilot, arm_in: 70.87, max_weight: 120}
    envelope:
      - {weight: 580, cg_min: 66.65, cg_max: 70.16}
      - {weight: 620, cg_min: 66.65, cg_max: 70.16}
    aircraft:
      - registration: SE-LRO
        empty_weight: 381
        empty_cg_in: 67.95

A tail entry may override any shared key (e.g. ``fuel: {density_kg_per_l: 0.71}``).

Every record is validated when it is loaded, so a malformed envelope or a
duplicate station is reported once at startup instead of at calculation time.

Typical usage:
    registry = AircraftRegistry.default()
    aircraft = registry.get("SE-LRO")
"""

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from massbalance.aircraft.aircraft import AircraftConfig
from massbalance.core.config import ConfigError, ConfigLoader
from massbalance.core.resource_path import get_data_path
from massbalance.systems.weight_balance.envelope import CGEnvelope, EnvelopeError
from massbalance.systems.weight_balance.station import Station
from massbalance.units import WEIGHT_UNITS, fuel_density_for

logger = logging.getLogger(__name__)


class AircraftConfigError(ConfigError):
    """Raised when an aircraft configuration is invalid."""


class AircraftNotFoundError(KeyError):
    """Raised when a registration is not in the registry."""


def _parse_stations(record: ConfigLoader) -> tuple[Station, ...]:
    raw_stations = record.require("stations")
    if not isinstance(raw_stations, list) or not raw_stations:
        raise AircraftConfigError(f"{record.source}: 'stations' must be a non-empty list")

    stations = []
    seen: set[str] = set()
    for index, raw in enumerate(raw_stations):
        if not isinstance(raw, dict):
            raise AircraftConfigError(f"{record.source}: station {index} must be a mapping")
        entry = ConfigLoader(raw, source=f"{record.source} station {index}")

        station_id = str(entry.require("id"))
        if station_id in seen:
            raise AircraftConfigError(f"{record.source}: duplicate station id '{station_id}'")
        seen.add(station_id)

        max_weight = entry.get_float("max_weight")
        if max_weight < 0:
            raise AircraftConfigError(f"{entry.source}: max_weight must not be negative")

        stations.append(
            Station(
                id=station_id,
                name=str(entry.get("name", station_id)),
                arm_in=entry.get_float("arm_in"),
                max_weight=max_weight,
            )
        )
    return tuple(stations)


def _parse_envelope(record: ConfigLoader) -> CGEnvelope:
    raw_envelope = record.require("envelope")
    if not isinstance(raw_envelope, list):
        raise AircraftConfigError(f"{record.source}: 'envelope' must be a list of points")
    try:
        return CGEnvelope.from_points(raw_envelope)
    except EnvelopeError as e:
        raise AircraftConfigError(f"{record.source}: invalid envelope: {e}") from e


def build_aircraft_config(record: ConfigLoader) -> AircraftConfig:
    """Build and validate one aircraft configuration.

    Args:
        record: Flattened record of one tail number (model data with the
            tail's overrides applied).

    Returns:
        Validated AircraftConfig.

    Raises:
        AircraftConfigError: If a key is missing or a value is invalid.
    """
    try:
        registration = str(record.require("registration"))

        empty_weight = record.get_float("empty_weight")
        max_takeoff_weight = record.get_float("max_takeoff_weight")
        max_landing_weight = record.get_float("max_landing_weight", default=None)
        fuel_capacity_l = record.get_float("fuel.capacity_l")
        fuel_type = str(record.get("fuel.type", "avgas")).lower()

        density = record.get("fuel.density_kg_per_l")
        if density is None:
            fuel_density = fuel_density_for(fuel_type)
        else:
            fuel_density = record.get_float("fuel.density_kg_per_l")

        if empty_weight <= 0:
            raise AircraftConfigError(f"{registration}: empty_weight must be positive")
        if max_takeoff_weight <= 0:
            raise AircraftConfigError(f"{registration}: max_takeoff_weight must be positive")
        if max_landing_weight is not None and max_landing_weight <= 0:
            raise AircraftConfigError(f"{registration}: max_landing_weight must be positive")
        if fuel_capacity_l < 0 or fuel_density < 0:
            raise AircraftConfigError(f"{registration}: fuel capacity and density must not be negative")

        default_unit = str(record.get("default_unit", "kg"))
        if default_unit not in WEIGHT_UNITS:
            raise AircraftConfigError(f"{registration}: unknown default_unit '{default_unit}'")

        model_type = str(record.require("model_type"))

        return AircraftConfig(
            registration=registration,
            model=str(record.get("model", model_type)),
            model_type=model_type,
            manufacturer=str(record.get("manufacturer", "")),
            empty_weight=empty_weight,
            empty_cg_in=record.get_float("empty_cg_in"),
            stations=_parse_stations(record),
            envelope=_parse_envelope(record),
            max_takeoff_weight=max_takeoff_weight,
            max_landing_weight=max_landing_weight,
            fuel_capacity_l=fuel_capacity_l,
            fuel_arm_in=record.get_float("fuel.arm_in"),
            fuel_density_kg_per_l=fuel_density,
            fuel_type=fuel_type,
            default_unit=default_unit,
        )
    except AircraftConfigError:
        raise
    except (ConfigError, ValueError) as e:
        raise AircraftConfigError(str(e)) from e


def load_fleet_file(path: str | Path) -> list[AircraftConfig]:
    """Load every aircraft described in one fleet file.

    Raises:
        ConfigError: If the file cannot be read.
        AircraftConfigError: If any record is invalid.
    """
    fleet = ConfigLoader.load(path)

    tails = fleet.get("aircraft", [])
    if not isinstance(tails, list) or not tails:
        raise AircraftConfigError(f"{fleet.source}: 'aircraft' must be a non-empty list")

    shared = {key: value for key, value in fleet.to_dict().items() if key != "aircraft"}
    model = ConfigLoader(shared, source=fleet.source)

    configs = []
    for index, tail in enumerate(tails):
        if not isinstance(tail, dict):
            raise AircraftConfigError(f"{fleet.source}: aircraft entry {index} must be a mapping")
        record = model.merge(tail)
        record.source = f"{fleet.source} [{tail.get('registration', index)}]"
        configs.append(build_aircraft_config(record))

    return configs


class AircraftRegistry:
    """Lookup of aircraft configurations by registration.

    Examples:
        >>> registry = AircraftRegistry.from_directory("fleet/")
        >>> registry.get("LN-FTM").model
        'Diamond DA40 NG'
        >>> registry.model_types()
        ['da40-ng', 'tecnam-2002jf']
    """

    def __init__(self, aircraft: list[AircraftConfig] | None = None) -> None:
        self._aircraft: dict[str, AircraftConfig] = {}
        for config in aircraft or []:
            self.register(config)

    @classmethod
    def from_directory(cls, directory: str | Path) -> "AircraftRegistry":
        """Load all ``*.yaml`` fleet files in a directory, in name order.

        Raises:
            ConfigError: If the directory does not exist.
            AircraftConfigError: If any record is invalid or duplicated.
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise ConfigError(f"Aircraft directory not found: {directory}")

        registry = cls()
        for path in sorted(directory.glob("*.yaml")):
            for config in load_fleet_file(path):
                registry.register(config)

        logger.info("Loaded %d aircraft from %s", len(registry), directory)
        return registry

    @classmethod
    def default(cls) -> "AircraftRegistry":
        """Load the bundled fleet."""
        return cls.from_directory(get_data_path("aircraft"))

    def register(self, config: AircraftConfig) -> None:
        """Add an aircraft.

        Raises:
            AircraftConfigError: If the registration is already present.
        """
        if config.registration in self._aircraft:
            raise AircraftConfigError(f"Duplicate registration: {config.registration}")
        self._aircraft[config.registration] = config
        logger.debug("Registered aircraft %s", config)

    def get(self, registration: str) -> AircraftConfig:
        """Get an aircraft by registration.

        Raises:
            AircraftNotFoundError: If the registration is unknown.
        """
        try:
            return self._aircraft[registration]
        except KeyError:
            raise AircraftNotFoundError(registration) from None

    def find(self, registration: str) -> AircraftConfig | None:
        return self._aircraft.get(registration)

    def all(self) -> list[AircraftConfig]:
        return list(self._aircraft.values())

    def by_model_type(self, model_type: str) -> list[AircraftConfig]:
        return [config for config in self._aircraft.values() if config.model_type == model_type]

    def model_types(self) -> list[str]:
        """Get the distinct model types, in first-seen order."""
        return list(dict.fromkeys(config.model_type for config in self._aircraft.values()))

    def model_display_name(self, model_type: str) -> str:
        """Get the display name of a model type, or the key itself if unknown."""
        for config in self._aircraft.values():
            if config.model_type == model_type:
                return config.model
        return model_type

    def __len__(self) -> int:
        return len(self._aircraft)

    def __contains__(self, registration: Any) -> bool:
        return registration in self._aircraft

    def __iter__(self) -> Iterator[AircraftConfig]:
        return iter(self._aircraft.values())
