"""Tests for telemetry models."""

import pytest
from pydantic import ValidationError

from rakshak.telemetry.models import FlightMode, ManualInput, TelemetryState


class TestFlightMode:
    def test_assisted_display_value(self):
        assert FlightMode.ASSISTED == "AI-ASSISTED"

    def test_parse_from_value(self):
        assert FlightMode("AUTONOMOUS") is FlightMode.AUTONOMOUS


class TestTelemetryState:
    def test_defaults(self):
        state = TelemetryState()
        assert state.battery == 92.0
        assert state.altitude == 0.0
        assert state.speed == 0.0
        assert state.signal_strength == 0.0
        assert state.temperature == 32.0
        assert state.latitude == 28.6139
        assert state.longitude == 77.2090

    def test_is_frozen(self):
        state = TelemetryState()
        with pytest.raises(ValidationError):
            state.battery = 50.0

    def test_battery_above_range_raises(self):
        with pytest.raises(ValidationError):
            TelemetryState(battery=101.0)

    def test_negative_altitude_raises(self):
        with pytest.raises(ValidationError):
            TelemetryState(altitude=-1.0)

    def test_latitude_out_of_range_raises(self):
        with pytest.raises(ValidationError):
            TelemetryState(latitude=95.0)


class TestManualInput:
    def test_neutral_is_inactive(self):
        assert ManualInput().is_active is False

    def test_tilted_is_active(self):
        assert ManualInput(tilt_z=-0.5).is_active is True

    def test_tilt_out_of_range_raises(self):
        with pytest.raises(ValidationError):
            ManualInput(tilt_x=1.5)
