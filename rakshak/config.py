"""Ground station configuration using Pydantic BaseSettings.

All settings are loaded from environment variables prefixed with ``RAKSHAK_``.

Usage:
    from rakshak.config import get_settings

    settings = get_settings()
    print(settings.drone_host)
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DashboardSettings(BaseSettings):
    """Ground station settings loaded from environment variables.

    Attributes:
        drone_host: Host or IP of the drone command endpoint.
        command_port: TCP port of the drone command endpoint.
        command_timeout_seconds: Time allowed for one command dispatch.
        default_command_altitude: Altitude sent with a fly command.
        tick_interval_seconds: Period of the telemetry simulation tick.
        handshake_delay_seconds: Simulated link handshake latency.
        battery_decay_per_tick: Battery percentage drained per tick.
        random_seed: Optional seed for reproducible telemetry.
        target_latitude: Drop zone latitude confirmed by the headless runner.
        target_longitude: Drop zone longitude confirmed by the headless runner.
        bedrock_model_id: Model used by the landing-zone analyzer.
        ai_timeout_seconds: Read timeout for AI calls.
        log_level: Logging level.
    """

    model_config = SettingsConfigDict(
        env_prefix="RAKSHAK_",
        case_sensitive=False,
        extra="ignore",
        str_strip_whitespace=True,
    )

    # Command link
    drone_host: str = Field(default="192.168.4.1", min_length=1)
    command_port: int = Field(default=5000, ge=1, le=65535)
    command_timeout_seconds: float = Field(default=5.0, gt=0.0, le=60.0)
    default_command_altitude: float = Field(default=15.0, ge=0.0, le=500.0)

    # Simulation timing
    tick_interval_seconds: float = Field(default=1.0, gt=0.0, le=60.0)
    handshake_delay_seconds: float = Field(default=2.0, ge=0.0, le=60.0)

    # Simulation model
    battery_decay_per_tick: float = Field(default=0.05, ge=0.0, le=100.0)
    initial_battery: float = Field(default=92.0, ge=0.0, le=100.0)
    initial_latitude: float = Field(default=28.6139, ge=-90.0, le=90.0)
    initial_longitude: float = Field(default=77.2090, ge=-180.0, le=180.0)
    cruise_speed: float = Field(default=15.0, ge=0.0, le=50.0)
    baseline_temperature: float = Field(default=32.0)
    temperature_spread: float = Field(default=2.0, ge=0.0)
    altitude_jitter: float = Field(default=0.5, ge=0.0)
    signal_jitter: float = Field(default=5.0, ge=0.0, le=20.0)
    position_jitter_degrees: float = Field(default=0.0001, ge=0.0, le=0.01)
    random_seed: int | None = Field(default=None)

    # Headless runner mission
    target_latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    target_longitude: float | None = Field(default=None, ge=-180.0, le=180.0)

    # AI collaborator
    aws_region: str = Field(default="us-east-1", min_length=1)
    bedrock_model_id: str = Field(
        default="anthropic.claude-sonnet-4-5-20250929-v1:0",
        min_length=1,
    )
    ai_timeout_seconds: float = Field(default=10.0, gt=0.0, le=120.0)

    # Logging
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate log level is one of the allowed values."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in allowed:
            error_message = f"log_level must be one of {allowed}, got '{value}'"
            raise ValueError(error_message)
        return upper_value

    @property
    def has_mission_target(self) -> bool:
        """Check if both target coordinates are configured."""
        return self.target_latitude is not None and self.target_longitude is not None


@lru_cache
def get_settings() -> DashboardSettings:
    """Get cached settings instance.

    Returns:
        Cached DashboardSettings instance.
    """
    return DashboardSettings()
