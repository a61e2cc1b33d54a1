"""Common Pydantic models shared across steps."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class StepMeta(BaseModel):
    """Metadata attached to every step output for reproducibility."""

    step_name: str
    elapsed_seconds: float = 0.0
    params: dict[str, Any] = Field(default_factory=dict)


class StreamSummary(BaseModel):
    """Serializable view of the video stream a step worked on."""

    index: int
    codec_name: str
    width: int
    height: int
    pix_fmt: str | None = None
    time_base: str = Field(..., description="Stream time base as 'num/den'")
    average_rate: float | None = None
    duration_seconds: float | None = None
