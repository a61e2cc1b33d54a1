"""I/O contracts for Step 01: Video to still frames."""

from pathlib import Path

from pydantic import BaseModel, Field

from stillgrab.core.contracts import StepMeta, StreamSummary


class ExtractFramesInput(BaseModel):
    video_path: Path = Field(..., description="Path to input video file")
    start_time: float = Field(0.0, description="Window start in seconds (inclusive)")
    end_time: float = Field(..., description="Window end in seconds (inclusive)")


class ExtractFramesOutput(BaseModel):
    frames_dir: Path = Field(..., description="Directory containing extracted frames")
    frames_processed: int = Field(..., description="In-window frames seen")
    frames_saved: int = Field(..., description="Frames successfully encoded")
    frame_list: list[str] = Field(default_factory=list, description="Filenames actually written")
    packets_read: int = Field(0, description="Packets pulled from the container")
    stopped_early: bool = Field(False, description="True if a frame past end_time ended the scan")
    stream: StreamSummary | None = None
    meta: StepMeta | None = None
