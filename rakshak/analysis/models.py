"""Landing-zone analysis models."""

from enum import StrEnum

from pydantic import BaseModel, Field, field_validator


class SlopeClass(StrEnum):
    """Estimated terrain slope."""

    FLAT = "Flat"
    MODERATE = "Moderate"
    STEEP = "Steep"
    UNKNOWN = "Unknown"


class LandingAnalysis(BaseModel):
    """Safety verdict for a candidate landing zone."""

    safe: bool
    score: float = Field(ge=0, le=100)
    hazards: list[str] = Field(default_factory=list)
    recommendation: str
    slope: SlopeClass = Field(default=SlopeClass.UNKNOWN)

    @field_validator("slope", mode="before")
    @classmethod
    def normalize_slope(cls, value: object) -> SlopeClass:
        """Map free-text slope estimates onto the known classes."""
        if isinstance(value, SlopeClass):
            return value
        text = str(value).strip().lower()
        for slope in SlopeClass:
            if text.startswith(slope.value.lower()):
                return slope
        return SlopeClass.UNKNOWN


def fallback_analysis() -> LandingAnalysis:
    """Return the verdict used when the AI service cannot be reached."""
    return LandingAnalysis(
        safe=False,
        score=0,
        hazards=["AI Connection Failed", "Unknown Terrain"],
        recommendation="Abort landing. Maintain altitude.",
        slope=SlopeClass.UNKNOWN,
    )
