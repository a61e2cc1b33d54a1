"""Still-image encoder: one decoded frame in, one JPEG payload out."""

from __future__ import annotations

import logging
from fractions import Fraction

import av
from av.error import FFmpegError

from stillgrab.core.errors import (
    CodecNotFoundError,
    EncodeError,
    EncoderAllocError,
    EncoderOpenError,
)

logger = logging.getLogger(__name__)


class StillImageEncoder:
    """Independent encoder with fixed geometry and pixel format.

    Frames whose format or size differ from the configured ones are
    converted with swscale before they are sent. Output pts follow the
    encoder's own nominal time base, not the source stream's.
    """

    def __init__(self, codec_context):
        self._ctx = codec_context
        self.frames_encoded = 0

    @property
    def width(self) -> int:
        return self._ctx.width

    @property
    def height(self) -> int:
        return self._ctx.height

    @property
    def pix_fmt(self) -> str:
        return self._ctx.pix_fmt

    @classmethod
    def configure(
        cls,
        width: int,
        height: int,
        pix_fmt: str = "yuvj420p",
        time_base: Fraction = Fraction(1, 25),
        codec: str = "mjpeg",
        quality: int | None = None,
    ) -> StillImageEncoder:
        try:
            av_codec = av.Codec(codec, "w")
        except ValueError as e:
            raise CodecNotFoundError(f"{codec} encoder not found") from e

        try:
            ctx = av.CodecContext.create(av_codec)
        except (FFmpegError, MemoryError) as e:
            raise EncoderAllocError(f"Could not allocate {codec} codec context: {e}") from e

        ctx.width = width
        ctx.height = height
        ctx.pix_fmt = pix_fmt
        ctx.time_base = time_base
        if quality is not None:
            # Pin the rate controller to one quantiser.
            ctx.options = {"qmin": str(quality), "qmax": str(quality)}

        try:
            ctx.open()
        except (FFmpegError, ValueError) as e:
            raise EncoderOpenError(f"Could not open {codec} codec: {e}") from e

        logger.debug(f"Encoder {codec} open: {width}x{height} {pix_fmt} tb={time_base}")
        return cls(ctx)

    def close(self) -> None:
        self._ctx = None

    def convert(self, frame):
        """Match the frame to the encoder's pixel format and size."""
        if (
            frame.format.name == self.pix_fmt
            and frame.width == self.width
            and frame.height == self.height
        ):
            return frame
        return frame.reformat(width=self.width, height=self.height, format=self.pix_fmt)

    def encode(self, frame) -> bytes:
        """Encode exactly one frame and return exactly one payload."""
        if self._ctx is None:
            raise RuntimeError("Encoder is closed")

        try:
            still = self.convert(frame)
        except (FFmpegError, ValueError) as e:
            raise EncodeError(f"Could not convert frame from {frame.format.name} to {self.pix_fmt}: {e}") from e
        still.pts = self.frames_encoded
        still.time_base = self._ctx.time_base

        try:
            packets = self._ctx.encode(still)
        except FFmpegError as e:
            raise EncodeError(f"Failed to send frame to {self._ctx.name} encoder: {e}") from e
        if not packets:
            raise EncodeError(f"Failed to receive packet from {self._ctx.name} encoder")
        if len(packets) > 1:
            logger.warning(f"Encoder returned {len(packets)} packets for one frame; keeping the first")

        self.frames_encoded += 1
        return bytes(packets[0])
