"""Command dispatch data models."""

from enum import StrEnum

from pydantic import BaseModel, Field


class CommandResult(StrEnum):
    """Outcome of a single command dispatch."""

    PENDING = "PENDING"
    SENT = "SENT"
    TIMEOUT = "TIMEOUT"
    CONNECTION_REFUSED = "CONNECTION_REFUSED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        """Return whether the dispatch has settled."""
        return self != CommandResult.PENDING

    @property
    def display_message(self) -> str:
        """Return the operator-facing status line."""
        return _DISPLAY_MESSAGES[self]


_DISPLAY_MESSAGES: dict[CommandResult, str] = {
    CommandResult.PENDING: "Transmitting coordinates...",
    CommandResult.SENT: "Command sent. Drone en route.",
    CommandResult.TIMEOUT: "Timeout: drone did not respond.",
    CommandResult.CONNECTION_REFUSED: "Connection refused: check drone IP.",
    CommandResult.FAILED: "Failed to send command.",
}


class FlyCommand(BaseModel):
    """Coordinates sent to the drone's fly endpoint."""

    host: str = Field(min_length=1)
    port: int = Field(default=5000, ge=1, le=65535)
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    altitude: float = Field(default=15.0, ge=0.0)

    @property
    def url(self) -> str:
        """Return the GET URL for this command."""
        return (
            f"http://{self.host}:{self.port}/fly"
            f"?lat={_format_number(self.latitude)}"
            f"&lon={_format_number(self.longitude)}"
            f"&alt={_format_number(self.altitude)}"
        )


def _format_number(value: float) -> str:
    """Render whole numbers without a trailing ``.0``."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)
