"""Mission target data models."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class MissionStatus(StrEnum):
    """Lifecycle of the operator's drop zone."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    ABORTED = "ABORTED"


class MissionTarget(BaseModel):
    """Drop zone coordinate chosen on the map."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
