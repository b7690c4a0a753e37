"""Load stations for weight and balance calculations.

A load station is a fixed point where weight can be placed in the aircraft,
such as a seat row or a baggage compartment. Fuel is handled separately
through the aircraft's fuel arm.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Station:
    """A fixed loading point of the aircraft.

    Attributes:
        id: Stable identifier used as key in station weight mappings
            (e.g., "pilot", "baggage").
        name: Display label.
        arm_in: Signed distance from the reference datum in inches.
        max_weight: Advisory ceiling for the station. Not enforced by the
            calculator.

    Examples:
        >>> pilot = Station(id="pilot", name="Pilot", arm_in=70.87, max_weight=120)
        >>> moment = pilot.moment_for(75)  # 75 kg x 70.87 in = 5315.25 kg-in
    """

    id: str
    name: str
    arm_in: float
    max_weight: float

    def moment_for(self, weight: float) -> float:
        """Calculate the moment of ``weight`` placed at this station."""
        return weight * self.arm_in

    def is_overweight(self, weight: float) -> bool:
        """Check whether ``weight`` exceeds the advisory station maximum."""
        return weight > self.max_weight


@dataclass(frozen=True)
class StationResult:
    """Per-station output of a mass and balance calculation.

    Attributes:
        station: The station definition.
        weight: Weight supplied for the station (0 if none was given).
        moment: weight x arm.
    """

    station: Station
    weight: float
    moment: float
