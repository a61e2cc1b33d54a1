"""Step 01: Extract still frames from a time window of a video.

demux -> decode -> time-window / stride selection -> JPEG encode -> write
"""

from __future__ import annotations

import logging
import time
from contextlib import ExitStack
from fractions import Fraction
from pathlib import Path
from typing import ClassVar

from stillgrab.core.contracts import StepMeta
from stillgrab.core.errors import DecodeError, EncodeError, FrameWriteError
from stillgrab.core.step_base import BaseStep
from ._decoder import VideoDecoder
from ._demux import DemuxSource, select_video_stream
from ._encoder import StillImageEncoder
from ._sampling import Decision, SamplingPolicy, check_stride, frame_time
from ._writer import FrameWriter
from .config import ExtractFramesConfig
from .contracts import ExtractFramesInput, ExtractFramesOutput

logger = logging.getLogger(__name__)


class ExtractFramesStep(BaseStep[ExtractFramesInput, ExtractFramesOutput, ExtractFramesConfig]):
    name: ClassVar[str] = "extract_frames"
    input_type: ClassVar = ExtractFramesInput
    output_type: ClassVar = ExtractFramesOutput
    config_type: ClassVar = ExtractFramesConfig

    @property
    def output_dir(self) -> Path:
        # An absolute output_dir replaces data_root.
        return self.data_root / self.config.output_dir

    def validate_config(self) -> None:
        check_stride(self.config.stride)

    def validate_inputs(self, inputs: ExtractFramesInput) -> bool:
        if inputs.start_time < 0 or inputs.end_time < 0:
            logger.error(f"Negative time window: {inputs.start_time}s to {inputs.end_time}s")
            return False
        return True

    def run(self, inputs: ExtractFramesInput) -> ExtractFramesOutput:
        t0 = time.time()
        policy = SamplingPolicy(inputs.start_time, inputs.end_time, self.config.stride)
        writer = FrameWriter(self.output_dir, self.config.filename_pattern)
        written: list[str] = []

        # Released in reverse order: packet reader, encoder, decoder, container.
        with ExitStack() as stack:
            source = stack.enter_context(DemuxSource.open(inputs.video_path))
            video = select_video_stream(source.probe_streams())
            logger.info(
                f"Video stream #{video.index}: {video.codec_name} {video.width}x{video.height} "
                f"{video.pix_fmt}, time base {video.time_base}"
            )

            decoder = VideoDecoder.configure(source, video)
            stack.callback(decoder.close)

            encoder = StillImageEncoder.configure(
                width=video.width,
                height=video.height,
                pix_fmt=self.config.encoder_pix_fmt,
                time_base=Fraction(1, self.config.nominal_fps),
                codec=self.config.encoder_codec,
                quality=self.config.quality,
            )
            stack.callback(encoder.close)
            if video.pix_fmt and video.pix_fmt != encoder.pix_fmt:
                logger.info(f"Frames will be converted from {video.pix_fmt} to {encoder.pix_fmt}")

            source.seek(policy.seek_target())

            packets = source.read_packets()
            stack.callback(packets.close)
            for packet in packets:
                # Flush packets leave stream_index unset, so go through the stream object.
                if packet.stream.index != decoder.stream_index:
                    continue
                try:
                    decoder.submit(packet)
                except DecodeError as e:
                    logger.error(str(e))
                    continue

                for frame in decoder.drain():
                    decision = policy.evaluate(frame_time(frame.pts, video.time_base))
                    if decision is Decision.STOP:
                        break
                    if decision is Decision.SAVE:
                        name = self._save(frame, encoder, writer, policy)
                        if name is not None:
                            written.append(name)

                if policy.stopped:
                    break

            packets_read = source.packets_read

        logger.info(
            f"Processed {policy.frames_processed} frames in window, saved {policy.frames_saved} "
            f"(every {self.config.stride}), read {packets_read} packets"
        )
        return ExtractFramesOutput(
            frames_dir=self.output_dir,
            frames_processed=policy.frames_processed,
            frames_saved=policy.frames_saved,
            frame_list=written,
            packets_read=packets_read,
            stopped_early=policy.stopped,
            stream=video.summary(),
            meta=StepMeta(
                step_name=self.name,
                elapsed_seconds=time.time() - t0,
                params=self.config.model_dump(mode="json"),
            ),
        )

    def _save(
        self,
        frame,
        encoder: StillImageEncoder,
        writer: FrameWriter,
        policy: SamplingPolicy,
    ) -> str | None:
        """Encode and write one selected frame. Failures only drop this frame."""
        try:
            payload = encoder.encode(frame)
        except EncodeError as e:
            logger.warning(f"Dropping frame pts={frame.pts}: {e}")
            return None

        index = policy.record_saved()
        try:
            path = writer.write(payload, index)
        except FrameWriteError as e:
            logger.error(str(e))
            return None
        return path.name
