"""Telemetry data models."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class FlightMode(StrEnum):
    """Flight regime selected by the operator."""

    MANUAL = "MANUAL"
    ASSISTED = "AI-ASSISTED"
    AUTONOMOUS = "AUTONOMOUS"


class JoystickDirection(StrEnum):
    """Discrete directional command from the manual override pad."""

    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    STOP = "STOP"


class TelemetryState(BaseModel):
    """Drone vitals and position."""

    model_config = ConfigDict(frozen=True)

    battery: float = Field(default=92.0, ge=0.0, le=100.0)
    altitude: float = Field(default=0.0, ge=0.0)
    speed: float = Field(default=0.0, ge=0.0)
    signal_strength: float = Field(default=0.0, ge=0.0, le=100.0)
    temperature: float = Field(default=32.0)
    latitude: float = Field(default=28.6139, ge=-90.0, le=90.0)
    longitude: float = Field(default=77.2090, ge=-180.0, le=180.0)


class ManualInput(BaseModel):
    """Joystick tilt currently held by the operator."""

    model_config = ConfigDict(frozen=True)

    tilt_x: float = Field(default=0.0, ge=-1.0, le=1.0)
    tilt_z: float = Field(default=0.0, ge=-1.0, le=1.0)

    @property
    def is_active(self) -> bool:
        """Return whether any axis is deflected."""
        return self.tilt_x != 0.0 or self.tilt_z != 0.0
