"""Tests for command dispatch models."""

import pytest
from pydantic import ValidationError

from rakshak.command.models import CommandResult, FlyCommand


class TestCommandResult:
    def test_pending_is_not_terminal(self):
        assert CommandResult.PENDING.is_terminal is False

    @pytest.mark.parametrize(
        "result",
        [
            CommandResult.SENT,
            CommandResult.TIMEOUT,
            CommandResult.CONNECTION_REFUSED,
            CommandResult.FAILED,
        ],
    )
    def test_settled_results_are_terminal(self, result):
        assert result.is_terminal is True

    def test_display_messages(self):
        assert CommandResult.SENT.display_message == "Command sent. Drone en route."
        assert CommandResult.TIMEOUT.display_message == "Timeout: drone did not respond."
        assert CommandResult.CONNECTION_REFUSED.display_message == "Connection refused: check drone IP."
        assert CommandResult.FAILED.display_message == "Failed to send command."
        assert CommandResult.PENDING.display_message == "Transmitting coordinates..."


class TestFlyCommand:
    def test_url_drops_trailing_zero(self):
        command = FlyCommand(host="192.168.4.1", latitude=12.0, longitude=77.0)
        assert command.url == "http://192.168.4.1:5000/fly?lat=12&lon=77&alt=15"

    def test_url_keeps_decimals(self):
        command = FlyCommand(host="10.0.0.2", port=8080, latitude=28.6139, longitude=77.209, altitude=22.5)
        assert command.url == "http://10.0.0.2:8080/fly?lat=28.6139&lon=77.209&alt=22.5"

    def test_negative_coordinates(self):
        command = FlyCommand(host="drone.local", latitude=-33.5, longitude=-70.25)
        assert "lat=-33.5&lon=-70.25" in command.url

    def test_empty_host_raises(self):
        with pytest.raises(ValidationError):
            FlyCommand(host="", latitude=0.0, longitude=0.0)

    def test_latitude_out_of_range_raises(self):
        with pytest.raises(ValidationError):
            FlyCommand(host="drone.local", latitude=100.0, longitude=0.0)
