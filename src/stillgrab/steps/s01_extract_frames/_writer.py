"""Writes encoded still images to numbered files."""

from __future__ import annotations

import logging
from pathlib import Path

from stillgrab.core.errors import FrameWriteError

logger = logging.getLogger(__name__)


class FrameWriter:
    def __init__(self, output_dir: Path, pattern: str = "frame_{index:05d}.jpg"):
        self.output_dir = Path(output_dir)
        self.pattern = pattern

    def filename(self, index: int) -> str:
        return self.pattern.format(index=index)

    def write(self, payload: bytes, index: int) -> Path:
        """Write payload verbatim to the file for ``index``."""
        path = self.output_dir / self.filename(index)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            f = open(path, "wb")
        except OSError as e:
            raise FrameWriteError(f"Could not open file {path} for writing: {e}") from e

        try:
            with f:
                written = f.write(payload)
        except OSError as e:
            raise FrameWriteError(f"Write to {path} failed: {e}") from e
        if written != len(payload):
            raise FrameWriteError(f"Incomplete write to {path}: {written} of {len(payload)} bytes")

        logger.info(f"Saved {path.name}")
        return path
