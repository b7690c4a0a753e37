"""Aircraft configuration record.

An AircraftConfig describes one airframe (one tail number): its empty weight
and CG from the weighing report, plus the data it shares with its model type
(stations, envelope, weight limits and fuel system). It is read-only input to
the mass and balance calculator.
"""

from dataclasses import dataclass

from massbalance.systems.weight_balance.envelope import CGEnvelope
from massbalance.systems.weight_balance.station import Station


@dataclass(frozen=True)
class AircraftConfig:
    """Mass and balance data of one aircraft.

    Weights are in the aircraft's data unit (kg for the bundled fleet);
    arms and CG positions are in inches from the datum.

    Attributes:
        registration: Tail number (e.g., "SE-LRO").
        model: Display name of the model (e.g., "Tecnam P2002JF").
        model_type: Model type key shared by aircraft of the same type.
        manufacturer: Manufacturer name.
        empty_weight: Basic empty weight.
        empty_cg_in: Empty CG position.
        stations: Load stations, in display order.
        envelope: CG envelope.
        max_takeoff_weight: Maximum takeoff weight (MTOW).
        max_landing_weight: Maximum landing weight, or None if not limited
            separately.
        fuel_capacity_l: Total fuel capacity in liters.
        fuel_arm_in: Fuel tank arm.
        fuel_density_kg_per_l: Fuel density used to convert volume to weight.
        fuel_type: "avgas" or "jet-a".
        default_unit: Preferred display unit ("kg" or "lbs").
    """

    registration: str
    model: str
    model_type: str
    manufacturer: str
    empty_weight: float
    empty_cg_in: float
    stations: tuple[Station, ...]
    envelope: CGEnvelope
    max_takeoff_weight: float
    fuel_capacity_l: float
    fuel_arm_in: float
    fuel_density_kg_per_l: float
    fuel_type: str = "avgas"
    max_landing_weight: float | None = None
    default_unit: str = "kg"

    @property
    def station_ids(self) -> list[str]:
        return [station.id for station in self.stations]

    @property
    def empty_moment(self) -> float:
        return self.empty_weight * self.empty_cg_in

    @property
    def max_fuel_weight(self) -> float:
        """Weight of a full fuel load."""
        return self.fuel_capacity_l * self.fuel_density_kg_per_l

    def get_station(self, station_id: str) -> Station | None:
        """Get a station by id, or None if the aircraft has no such station."""
        for station in self.stations:
            if station.id == station_id:
                return station
        return None

    def __str__(self) -> str:
        return f"{self.registration} ({self.model})"
