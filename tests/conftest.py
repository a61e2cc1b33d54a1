"""Shared pytest fixtures for stillgrab tests."""

from __future__ import annotations

from pathlib import Path

import av
import numpy as np
import pytest


def create_synthetic_video(
    video_path: Path,
    seconds: float = 10.0,
    fps: int = 25,
    resolution: tuple[int, int] = (160, 120),
    codec: str = "mpeg4",
) -> Path:
    """
    Write a synthetic constant-frame-rate video with PyAV.

    Every frame is a gradient whose brightness changes with the frame index,
    so consecutive frames differ. Timestamps are assigned by the encoder
    (frame i sits at exactly i / fps seconds).

    Args:
        video_path: Output file; the extension picks the container
        seconds: Duration
        fps: Frames per second
        resolution: (width, height)
        codec: Video encoder name

    Returns:
        video_path
    """
    video_path.parent.mkdir(parents=True, exist_ok=True)
    width, height = resolution
    num_frames = int(seconds * fps)

    with av.open(str(video_path), mode="w") as container:
        stream = container.add_stream(codec, rate=fps)
        stream.width = width
        stream.height = height
        stream.pix_fmt = "yuv420p"

        gradient = np.linspace(0, 200, width, dtype=np.uint8)
        for i in range(num_frames):
            img = np.zeros((height, width, 3), dtype=np.uint8)
            img[:, :, 0] = gradient
            img[:, :, 1] = (i * 3) % 256
            img[: height // 2, :, 2] = 255 - (i * 5) % 256
            frame = av.VideoFrame.from_ndarray(img, format="rgb24")
            for packet in stream.encode(frame):
                container.mux(packet)
        for packet in stream.encode(None):
            container.mux(packet)

    return video_path


def create_audio_only_file(path: Path, seconds: float = 1.0, rate: int = 8000) -> Path:
    """Write a silent mono WAV file (no video stream)."""
    with av.open(str(path), mode="w") as container:
        stream = container.add_stream("pcm_s16le", rate=rate, layout="mono")
        chunk = rate // 10
        for _ in range(int(seconds * 10)):
            samples = np.zeros((1, chunk), dtype=np.int16)
            frame = av.AudioFrame.from_ndarray(samples, format="s16", layout="mono")
            frame.sample_rate = rate
            for packet in stream.encode(frame):
                container.mux(packet)
        for packet in stream.encode(None):
            container.mux(packet)
    return path


@pytest.fixture(scope="session")
def video_10s(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """10 seconds, 25 fps, 160x120, mpeg4 in mp4."""
    return create_synthetic_video(tmp_path_factory.mktemp("videos") / "synthetic_10s.mp4")


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Working directory for a step run."""
    root = tmp_path / "data"
    root.mkdir(parents=True, exist_ok=True)
    return root


@pytest.fixture
def audio_only_file(tmp_path: Path) -> Path:
    return create_audio_only_file(tmp_path / "silence.wav")


@pytest.fixture
def garbage_file(tmp_path: Path) -> Path:
    path = tmp_path / "not_a_video.mp4"
    path.write_bytes(b"this is not a media container\x00" * 64)
    return path
