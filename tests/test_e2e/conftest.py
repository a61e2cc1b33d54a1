"""Fixtures for E2E CLI tests."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pytest
from typer.testing import CliRunner


@pytest.fixture
def runner():
    yield CliRunner()
    # setup_logging() binds handlers to the runner's temporary streams.
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)


@pytest.fixture
def opencv_video(tmp_path: Path) -> Path:
    """
    30-frame, 160x120 mp4v video written by OpenCV at 30 fps.

    Gives the CLI a file from a different muxer than the PyAV-made fixtures.
    """
    cv2 = pytest.importorskip("cv2")
    video_path = tmp_path / "opencv_video.mp4"
    writer = cv2.VideoWriter(str(video_path), cv2.VideoWriter_fourcc(*"mp4v"), 30.0, (160, 120))
    gradient = np.linspace(0, 255, 160, dtype=np.uint8)
    for i in range(30):
        frame = np.zeros((120, 160, 3), dtype=np.uint8)
        frame[:, :, 0] = gradient
        frame[:, :, 1] = i * 8
        cv2.putText(frame, f"F:{i:03d}", (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)
        writer.write(frame)
    writer.release()
    return video_path
