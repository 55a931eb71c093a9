"""Shared test fixtures."""

import pytest

from rakshak.config import DashboardSettings, get_settings
from rakshak.logging.context import clear_context


@pytest.fixture(autouse=True)
def _clear_environment(monkeypatch):
    """Clear environment variables that affect settings."""
    env_vars_to_clear = [
        "RAKSHAK_DRONE_HOST",
        "RAKSHAK_COMMAND_PORT",
        "RAKSHAK_COMMAND_TIMEOUT_SECONDS",
        "RAKSHAK_DEFAULT_COMMAND_ALTITUDE",
        "RAKSHAK_TICK_INTERVAL_SECONDS",
        "RAKSHAK_HANDSHAKE_DELAY_SECONDS",
        "RAKSHAK_BATTERY_DECAY_PER_TICK",
        "RAKSHAK_INITIAL_BATTERY",
        "RAKSHAK_INITIAL_LATITUDE",
        "RAKSHAK_INITIAL_LONGITUDE",
        "RAKSHAK_CRUISE_SPEED",
        "RAKSHAK_BASELINE_TEMPERATURE",
        "RAKSHAK_TEMPERATURE_SPREAD",
        "RAKSHAK_ALTITUDE_JITTER",
        "RAKSHAK_SIGNAL_JITTER",
        "RAKSHAK_POSITION_JITTER_DEGREES",
        "RAKSHAK_RANDOM_SEED",
        "RAKSHAK_TARGET_LATITUDE",
        "RAKSHAK_TARGET_LONGITUDE",
        "RAKSHAK_AWS_REGION",
        "RAKSHAK_BEDROCK_MODEL_ID",
        "RAKSHAK_AI_TIMEOUT_SECONDS",
        "RAKSHAK_LOG_LEVEL",
        "RAKSHAK_LOG_FORMAT",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    clear_context()


@pytest.fixture
def settings():
    """Settings with fast timings for event loop tests."""
    return DashboardSettings(
        drone_host="10.0.0.7",
        tick_interval_seconds=0.01,
        handshake_delay_seconds=0.02,
        command_timeout_seconds=0.2,
        random_seed=7,
    )
