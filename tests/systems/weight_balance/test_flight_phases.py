"""Tests for takeoff/landing evaluation and input clamping."""

import dataclasses

import pytest

from massbalance.aircraft import AircraftConfig
from massbalance.systems.weight_balance import (
    calculate_mass_balance,
    clamp_fuel_volume,
    clamp_station_weights,
    evaluate_flight,
)


class TestEvaluateFlight:
    """Test two-phase evaluation."""

    def test_takeoff_uses_full_fuel(self, se_lro: AircraftConfig) -> None:
        """Takeoff phase matches a direct calculation with all fuel on board."""
        weights = {"pilot": 75, "copilot": 75}

        flight = evaluate_flight(se_lro, weights, fuel_volume_l=50, fuel_burn_l=20)

        assert flight.takeoff == calculate_mass_balance(se_lro, weights, 50 * 0.72)
        assert flight.takeoff_fuel_weight == pytest.approx(36.0)

    def test_landing_uses_remaining_fuel(self, se_lro: AircraftConfig) -> None:
        """Landing phase carries the fuel left after the burn."""
        weights = {"pilot": 75, "copilot": 75}

        flight = evaluate_flight(se_lro, weights, fuel_volume_l=50, fuel_burn_l=20)

        assert flight.landing_fuel_weight == pytest.approx(30 * 0.72)
        assert flight.landing.total_weight == pytest.approx(flight.takeoff.total_weight - 20 * 0.72)

    def test_burn_larger_than_fuel(self, se_lro: AircraftConfig) -> None:
        """Landing fuel never goes negative."""
        flight = evaluate_flight(se_lro, {"pilot": 75}, fuel_volume_l=10, fuel_burn_l=30)

        assert flight.landing_fuel_weight == 0.0
        assert flight.landing.total_weight == pytest.approx(381 + 75)

    def test_no_burn_gives_identical_phases(self, se_lro: AircraftConfig) -> None:
        """Without a burn both phases are the same."""
        flight = evaluate_flight(se_lro, {"pilot": 75}, fuel_volume_l=40)

        assert flight.takeoff == flight.landing
        assert flight.cg_shift_in == 0.0

    def test_cg_moves_aft_as_forward_fuel_burns(self, se_lro: AircraftConfig) -> None:
        """The Tecnam tank is forward of the CG, so burning fuel moves the CG aft."""
        flight = evaluate_flight(se_lro, {"pilot": 75, "copilot": 75}, fuel_volume_l=80, fuel_burn_l=60)

        assert flight.cg_shift_in > 0

    def test_safe_flight(self, se_lro: AircraftConfig) -> None:
        """A normal loading is safe in both phases."""
        flight = evaluate_flight(se_lro, {"pilot": 75, "copilot": 75, "baggage": 10}, 50, 20)

        assert not flight.exceeds_max_takeoff
        assert not flight.exceeds_max_landing
        assert flight.is_safe

    def test_overweight_takeoff(self, se_lro: AircraftConfig) -> None:
        """Too much fuel at takeoff makes the flight unsafe."""
        flight = evaluate_flight(se_lro, {"pilot": 110, "copilot": 110}, fuel_volume_l=100, fuel_burn_l=80)

        assert flight.exceeds_max_takeoff
        assert not flight.exceeds_max_landing
        assert not flight.is_safe

    def test_max_landing_weight_checked(self, se_lro: AircraftConfig) -> None:
        """Landing weight is compared against the maximum landing weight."""
        limited = dataclasses.replace(se_lro, max_landing_weight=590.0)

        flight = evaluate_flight(limited, {"pilot": 90, "copilot": 90}, fuel_volume_l=80, fuel_burn_l=10)

        # Takeoff 381 + 180 + 57.6 = 618.6, landing 381 + 180 + 50.4 = 611.4
        assert not flight.exceeds_max_takeoff
        assert flight.exceeds_max_landing
        assert not flight.is_safe

    def test_no_max_landing_weight(self, se_lro: AircraftConfig) -> None:
        """Without a landing limit the landing weight is never exceeded."""
        flight = evaluate_flight(se_lro, {"pilot": 120, "copilot": 120}, fuel_volume_l=100)

        assert se_lro.max_landing_weight is None
        assert not flight.exceeds_max_landing

    def test_uses_aircraft_fuel_density(self, se_lro: AircraftConfig) -> None:
        """Fuel volume is converted with the aircraft's own density."""
        jet = dataclasses.replace(se_lro, fuel_density_kg_per_l=0.8)

        flight = evaluate_flight(jet, {}, fuel_volume_l=50)

        assert flight.takeoff_fuel_weight == pytest.approx(40.0)


class TestClamping:
    """Test caller-side input sanitising."""

    def test_clamp_station_weights(self, se_lro: AircraftConfig) -> None:
        """Weights are limited to [0, max_weight]."""
        clamped = clamp_station_weights(se_lro, {"pilot": 150, "copilot": -5, "baggage": 15})

        assert clamped == {"pilot": 120, "copilot": 0.0, "baggage": 15}

    def test_clamp_fills_missing_and_drops_unknown(self, se_lro: AircraftConfig) -> None:
        """Every declared station is present; unknown ids are removed."""
        clamped = clamp_station_weights(se_lro, {"rearSeats": 80})

        assert clamped == {"pilot": 0.0, "copilot": 0.0, "baggage": 0.0}

    def test_clamp_none_weight(self, se_lro: AircraftConfig) -> None:
        clamped = clamp_station_weights(se_lro, {"pilot": None, "baggage": 10})

        assert clamped == {"pilot": 0.0, "copilot": 0.0, "baggage": 10}

    def test_clamp_does_not_mutate_input(self, se_lro: AircraftConfig) -> None:
        """The caller's mapping is left unchanged."""
        weights = {"pilot": 150}
        clamp_station_weights(se_lro, weights)

        assert weights == {"pilot": 150}

    @pytest.mark.parametrize(
        ("volume", "expected"),
        [(-10.0, 0.0), (0.0, 0.0), (55.5, 55.5), (100.0, 100.0), (130.0, 100.0)],
    )
    def test_clamp_fuel_volume(self, se_lro: AircraftConfig, volume: float, expected: float) -> None:
        """Fuel is limited to [0, capacity]."""
        assert clamp_fuel_volume(se_lro, volume) == expected
