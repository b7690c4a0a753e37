"""Pytest configuration and fixtures for all tests."""

import pytest

from massbalance.aircraft import AircraftConfig
from massbalance.core import logging_system
from massbalance.systems.weight_balance import CGEnvelope, CGEnvelopePoint, Station

TECNAM_STATIONS = (
    Station(id="pilot", name="Pilot", arm_in=70.87, max_weight=120),
    Station(id="copilot", name="Co-Pilot", arm_in=70.87, max_weight=120),
    Station(id="baggage", name="Baggage", arm_in=88.98, max_weight=20),
)

TECNAM_ENVELOPE = CGEnvelope(
    (
        CGEnvelopePoint(580, 66.65, 70.16),
        CGEnvelopePoint(600, 66.65, 70.16),
        CGEnvelopePoint(620, 66.65, 70.16),
    )
)

DA40_ENVELOPE = CGEnvelope(
    (
        CGEnvelopePoint(940, 94.49, 99.61),
        CGEnvelopePoint(1080, 94.49, 99.61),
        CGEnvelopePoint(1310, 97.20, 99.61),
    )
)


@pytest.fixture
def se_lro() -> AircraftConfig:
    """Tecnam P2002JF SE-LRO, as in the weighing report."""
    return AircraftConfig(
        registration="SE-LRO",
        model="Tecnam P2002JF",
        model_type="tecnam-2002jf",
        manufacturer="Tecnam",
        empty_weight=381.0,
        empty_cg_in=67.95,
        stations=TECNAM_STATIONS,
        envelope=TECNAM_ENVELOPE,
        max_takeoff_weight=620.0,
        fuel_capacity_l=100.0,
        fuel_arm_in=60.24,
        fuel_density_kg_per_l=0.72,
        fuel_type="avgas",
    )


@pytest.fixture
def da40_envelope() -> CGEnvelope:
    """Diamond DA40 NG envelope."""
    return DA40_ENVELOPE


@pytest.fixture
def log_dir(tmp_path, monkeypatch):
    """Send platform log output to a temporary directory.

    Resets the logging module state afterwards.
    """
    directory = tmp_path / "logs"
    monkeypatch.setattr(logging_system, "get_platform_log_dir", lambda: directory)
    monkeypatch.setattr(logging_system, "_initialized", False)
    monkeypatch.setattr(logging_system, "_logging_config", {})
    monkeypatch.setattr(logging_system, "_loggers_cache", {})
    yield directory
    logging_system._remove_handlers()
