"""Container access: open, probe the stream table, seek, read packets."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from fractions import Fraction
from pathlib import Path

import av
from av.error import FFmpegError

from stillgrab.core.contracts import StreamSummary
from stillgrab.core.errors import NoVideoStreamError, OpenFailedError, ProbeFailedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StreamDescriptor:
    """Read-only metadata for one elementary stream."""

    index: int
    media_type: str  # "video", "audio", "subtitle", "data", ...
    codec_name: str | None
    time_base: Fraction | None
    width: int = 0
    height: int = 0
    pix_fmt: str | None = None
    average_rate: Fraction | None = None
    duration: int | None = None  # in time_base units

    @property
    def duration_seconds(self) -> float | None:
        if self.duration is None or self.time_base is None:
            return None
        return float(self.duration * self.time_base)

    def summary(self) -> StreamSummary:
        tb = self.time_base or Fraction(0)
        return StreamSummary(
            index=self.index,
            codec_name=self.codec_name or "unknown",
            width=self.width,
            height=self.height,
            pix_fmt=self.pix_fmt,
            time_base=f"{tb.numerator}/{tb.denominator}",
            average_rate=float(self.average_rate) if self.average_rate else None,
            duration_seconds=self.duration_seconds,
        )


def _describe(stream) -> StreamDescriptor:
    ctx = stream.codec_context
    width = height = 0
    pix_fmt = None
    if stream.type == "video" and ctx is not None:
        width, height = ctx.width, ctx.height
        pix_fmt = ctx.pix_fmt
    return StreamDescriptor(
        index=stream.index,
        media_type=stream.type,
        codec_name=ctx.name if ctx is not None else None,
        time_base=stream.time_base,
        width=width,
        height=height,
        pix_fmt=pix_fmt,
        average_rate=getattr(stream, "average_rate", None),
        duration=stream.duration,
    )


def select_video_stream(descriptors: list[StreamDescriptor]) -> StreamDescriptor:
    """Return the first video stream in container order."""
    for desc in descriptors:
        if desc.media_type == "video":
            return desc
    raise NoVideoStreamError("No video stream found")


class DemuxSource:
    """One opened input container and its read cursor."""

    def __init__(self, container, path: Path):
        self.container = container
        self.path = path
        self.packets_read = 0
        self._descriptors: list[StreamDescriptor] | None = None

    @classmethod
    def open(cls, path: Path | str) -> DemuxSource:
        path = Path(path)
        try:
            container = av.open(str(path), mode="r")
        except (FFmpegError, OSError) as e:
            raise OpenFailedError(f"Could not open file {path}: {e}") from e
        logger.debug(f"Opened {path} ({container.format.name})")
        return cls(container, path)

    def close(self) -> None:
        if self.container is not None:
            self.container.close()
            self.container = None

    def __enter__(self) -> DemuxSource:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _require_probe(self) -> None:
        if self._descriptors is None:
            raise RuntimeError("probe_streams() must be called first")

    @property
    def streams(self) -> list[StreamDescriptor]:
        self._require_probe()
        return self._descriptors

    def probe_streams(self) -> list[StreamDescriptor]:
        """Populate stream metadata; required before seek or read."""
        try:
            descriptors = [_describe(s) for s in self.container.streams]
        except FFmpegError as e:
            raise ProbeFailedError(f"Could not find stream information: {e}") from e
        if not descriptors:
            raise ProbeFailedError(f"Could not find stream information in {self.path}")
        self._descriptors = descriptors
        return descriptors

    def stream(self, index: int):
        """Underlying PyAV stream for a probed index."""
        return self.container.streams[self.streams[index].index]

    def seek(self, target_seconds: Fraction | float) -> None:
        """Move to the nearest keyframe at or before target_seconds.

        The offset is in the container's global time unit (av.time_base),
        not in any stream's time base.
        """
        self._require_probe()
        offset = int(Fraction(target_seconds) * av.time_base)
        try:
            self.container.seek(offset, backward=True, any_frame=False)
        except FFmpegError as e:
            logger.warning(f"Seek to {float(target_seconds):.3f}s failed, reading from current position: {e}")
            return
        logger.debug(f"Seeked to {float(target_seconds):.3f}s (offset={offset})")

    def read_packets(self) -> Iterator:
        """Yield packets from every stream in container order.

        Each stream ends with one empty packet, which decoders treat as a
        flush request. Stopping iteration early means nothing further is read.
        """
        self._require_probe()
        for packet in self.container.demux():
            self.packets_read += 1
            yield packet
