"""Video decoder bound to one stream's codec parameters."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterator

from av.error import FFmpegError

from stillgrab.core.errors import DecodeError, DecoderOpenError, UnsupportedCodecError
from ._demux import DemuxSource, StreamDescriptor

logger = logging.getLogger(__name__)


class VideoDecoder:
    """Stateful decoder: submit() one packet, then drain() its frames."""

    def __init__(self, codec_context, descriptor: StreamDescriptor):
        self._ctx = codec_context
        self.descriptor = descriptor
        self._pending: deque = deque()

    @property
    def stream_index(self) -> int:
        return self.descriptor.index

    @classmethod
    def configure(cls, source: DemuxSource, descriptor: StreamDescriptor) -> VideoDecoder:
        stream = source.stream(descriptor.index)
        # PyAV leaves codec_context unset when FFmpeg has no decoder for the codec id.
        ctx = stream.codec_context
        if ctx is None or ctx.codec is None:
            raise UnsupportedCodecError(f"Unsupported codec in stream {descriptor.index}")
        try:
            ctx.open(strict=False)
        except FFmpegError as e:
            raise DecoderOpenError(f"Could not open codec {ctx.name}: {e}") from e
        logger.debug(f"Decoder {ctx.name} open for stream {descriptor.index}")
        return cls(ctx, descriptor)

    def close(self) -> None:
        self._pending.clear()
        self._ctx = None

    def submit(self, packet) -> None:
        """Send one packet; frames it produces become available to drain()."""
        if self._ctx is None:
            raise RuntimeError("Decoder is closed")
        if packet.stream.index != self.stream_index:
            raise ValueError(
                f"Packet from stream {packet.stream.index} sent to decoder for stream {self.stream_index}"
            )
        try:
            frames = self._ctx.decode(packet)
        except FFmpegError as e:
            raise DecodeError(f"Failed to decode packet (pts={packet.pts}): {e}") from e
        self._pending.extend(frames)

    def drain(self) -> Iterator:
        """Yield decoded frames until none are left for the last packet."""
        while self._pending:
            yield self._pending.popleft()
