"""ImpactSummary Pydantic model -- before/after size statistics."""

from pydantic import BaseModel, ConfigDict, Field


class ImpactSummary(BaseModel):
    """Size delta of a cleaning run.

    Byte counts are the UTF-8 encoded lengths of the input and output
    strings, not a measure of parsed or semantic size.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    original_bytes: int = Field(alias="originalBytes")
    cleaned_bytes: int = Field(alias="cleanedBytes")
    bytes_saved: int = Field(alias="bytesSaved")
    nodes_removed: int = Field(alias="nodesRemoved")
    estimated_speed_gain: str = Field(alias="estimatedSpeedGain")
