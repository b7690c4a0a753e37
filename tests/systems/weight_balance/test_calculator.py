"""Tests for the mass and balance calculator."""

import dataclasses

import pytest

from massbalance.aircraft import AircraftConfig
from massbalance.systems.weight_balance import (
    MassBalanceResult,
    calculate_cg,
    calculate_mass_balance,
    calculate_moment,
)


class TestHelpers:
    """Test moment and CG helpers."""

    def test_calculate_moment(self) -> None:
        """Moment is weight times arm."""
        assert calculate_moment(180.0, 85.0) == pytest.approx(15300.0)

    def test_calculate_moment_negative_arm(self) -> None:
        """Arms forward of the datum give negative moments."""
        assert calculate_moment(10.0, -5.0) == pytest.approx(-50.0)

    def test_calculate_cg(self) -> None:
        """CG is moment over weight."""
        assert calculate_cg(15300.0, 180.0) == pytest.approx(85.0)

    def test_calculate_cg_zero_weight(self) -> None:
        """Zero weight gives CG 0 instead of dividing by zero."""
        assert calculate_cg(0.0, 0.0) == 0.0
        assert calculate_cg(123.0, 0.0) == 0.0


class TestCalculateMassBalance:
    """Test the full calculation."""

    @pytest.fixture
    def loading(self) -> dict[str, float]:
        """Two people and 10 kg of baggage."""
        return {"pilot": 75, "copilot": 75, "baggage": 10}

    def test_se_lro_scenario(self, se_lro: AircraftConfig, loading: dict[str, float]) -> None:
        """Worked example for SE-LRO with 50 L of avgas."""
        fuel_weight = 50 * 0.72

        result = calculate_mass_balance(se_lro, loading, fuel_weight)

        expected_moment = 381 * 67.95 + 75 * 70.87 + 75 * 70.87 + 10 * 88.98 + 36 * 60.24
        assert result.total_weight == pytest.approx(577.0)
        assert result.total_moment == pytest.approx(expected_moment)
        assert result.cg_position_in == pytest.approx(expected_moment / 577)
        assert not result.exceeds_max_weight
        # 577 kg is below the 580 kg breakpoint: tested against (66.65, 70.16)
        assert 66.65 <= result.cg_position_in <= 70.16
        assert result.is_within_envelope
        assert result.is_safe

    def test_empty_fields(self, se_lro: AircraftConfig, loading: dict[str, float]) -> None:
        """Empty weight and moment are reported."""
        result = calculate_mass_balance(se_lro, loading, 36.0)

        assert result.empty_weight == 381.0
        assert result.empty_moment == pytest.approx(381 * 67.95)

    def test_station_results_in_aircraft_order(self, se_lro: AircraftConfig) -> None:
        """Output follows the aircraft's stations, not the mapping order."""
        result = calculate_mass_balance(se_lro, {"baggage": 10, "pilot": 80}, 0.0)

        assert [r.station.id for r in result.stations] == ["pilot", "copilot", "baggage"]
        assert [r.weight for r in result.stations] == [80, 0, 10]
        assert result.stations[2].moment == pytest.approx(10 * 88.98)

    def test_missing_stations_default_to_zero(self, se_lro: AircraftConfig) -> None:
        """Stations not in the mapping weigh nothing."""
        result = calculate_mass_balance(se_lro, {"pilot": 80}, 0.0)

        copilot = result.station_result("copilot")
        assert copilot is not None
        assert copilot.weight == 0
        assert copilot.moment == 0

    def test_none_weight_counts_as_zero(self, se_lro: AircraftConfig) -> None:
        """A station given as None is treated like a missing one."""
        result = calculate_mass_balance(se_lro, {"pilot": 80, "copilot": None}, 0.0)

        assert result.station_result("copilot").weight == 0
        assert result == calculate_mass_balance(se_lro, {"pilot": 80}, 0.0)

    def test_unknown_station_ids_ignored(self, se_lro: AircraftConfig) -> None:
        """Ids the aircraft does not declare do not count."""
        with_unknown = calculate_mass_balance(se_lro, {"pilot": 80, "rearSeats": 150}, 0.0)
        without = calculate_mass_balance(se_lro, {"pilot": 80}, 0.0)

        assert with_unknown == without
        assert with_unknown.station_result("rearSeats") is None

    def test_station_weights_not_clamped(self, se_lro: AircraftConfig) -> None:
        """Station maximums are advisory only."""
        result = calculate_mass_balance(se_lro, {"baggage": 50}, 0.0)

        assert result.station_result("baggage").weight == 50
        assert result.total_weight == pytest.approx(431.0)

    def test_totals_match_components(self, se_lro: AircraftConfig, loading: dict[str, float]) -> None:
        """Totals are exactly the sum of their parts."""
        fuel_weight = 72.0
        result = calculate_mass_balance(se_lro, loading, fuel_weight)

        station_weight = sum(r.weight for r in result.stations)
        station_moment = sum(r.moment for r in result.stations)

        assert result.total_weight == se_lro.empty_weight + station_weight + fuel_weight
        assert result.total_moment == (
            result.empty_moment + station_moment + fuel_weight * se_lro.fuel_arm_in
        )

    def test_zero_loading_gives_empty_cg(self, se_lro: AircraftConfig) -> None:
        """Nothing loaded: weight and CG are the empty values."""
        result = calculate_mass_balance(se_lro, {}, 0.0)

        assert result.total_weight == se_lro.empty_weight
        assert result.cg_position_in == pytest.approx(se_lro.empty_cg_in)

    def test_all_zero_weight_gives_zero_cg(self, se_lro: AircraftConfig) -> None:
        """Zero total weight falls back to CG 0."""
        weightless = dataclasses.replace(se_lro, empty_weight=0.0)

        result = calculate_mass_balance(weightless, {}, 0.0)

        assert result.total_weight == 0
        assert result.cg_position_in == 0.0

    def test_max_weight_boundary(self, se_lro: AircraftConfig) -> None:
        """Exactly MTOW is acceptable; anything above is not."""
        # 381 + 120 + 119 = 620
        at_limit = calculate_mass_balance(se_lro, {"pilot": 120, "copilot": 119}, 0.0)
        above = calculate_mass_balance(se_lro, {"pilot": 120, "copilot": 119}, 0.001)

        assert at_limit.total_weight == 620
        assert not at_limit.exceeds_max_weight
        assert above.exceeds_max_weight
        assert not above.is_safe

    def test_above_envelope_table_is_out(self, se_lro: AircraftConfig) -> None:
        """Above the heaviest breakpoint the loading is out of the envelope."""
        result = calculate_mass_balance(se_lro, {"pilot": 120, "copilot": 120}, 10.0)

        assert result.total_weight > 620
        assert not result.is_within_envelope

    def test_aft_cg_out_of_envelope(self, se_lro: AircraftConfig) -> None:
        """Heavy baggage with a light cabin can move the CG aft of the limit."""
        aft_heavy = dataclasses.replace(se_lro, empty_cg_in=70.0)

        result = calculate_mass_balance(aft_heavy, {"pilot": 60, "baggage": 100}, 0.0)

        assert result.cg_position_in > 70.16
        assert not result.is_within_envelope
        assert not result.exceeds_max_weight

    def test_idempotent(self, se_lro: AircraftConfig, loading: dict[str, float]) -> None:
        """Same inputs give identical results."""
        first = calculate_mass_balance(se_lro, loading, 36.0)
        second = calculate_mass_balance(se_lro, loading, 36.0)

        assert first == second
        assert first is not second

    def test_inputs_not_mutated(self, se_lro: AircraftConfig, loading: dict[str, float]) -> None:
        """The station weight mapping is left untouched."""
        before = dict(loading)
        calculate_mass_balance(se_lro, {"pilot": 80}, 0.0)
        calculate_mass_balance(se_lro, loading, 36.0)

        assert loading == before

    def test_result_is_immutable(self, se_lro: AircraftConfig) -> None:
        """Results cannot be changed after the fact."""
        result = calculate_mass_balance(se_lro, {}, 0.0)

        assert isinstance(result, MassBalanceResult)
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.total_weight = 0.0  # type: ignore[misc]
