"""Configuration for Step 01: Video to still frames."""

from pathlib import Path

from pydantic import BaseModel, Field


class ExtractFramesConfig(BaseModel):
    stride: int = Field(1, description="Save every Nth in-window frame (N >= 1)")
    output_dir: Path = Field(Path("."), description="Directory for the JPEG files")
    filename_pattern: str = Field(
        "frame_{index:05d}.jpg", description="Output filename, formatted with the saved-frame index"
    )
    encoder_codec: str = Field("mjpeg", description="Still-image encoder name")
    encoder_pix_fmt: str = Field("yuvj420p", description="Pixel format fed to the encoder")
    nominal_fps: int = Field(25, description="Encoder time base is 1/nominal_fps")
    quality: int | None = Field(None, ge=2, le=31, description="MJPEG qscale (2 = best, None = encoder default)")
