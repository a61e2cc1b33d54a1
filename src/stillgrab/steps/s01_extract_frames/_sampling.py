"""Frame selection: time window gating plus every-Nth stride.

The policy is a small state machine that never touches media objects, so
the selection rules can be exercised with plain numbers:

    SEEKING  -> seek_target() hands out the start time once
    SCANNING -> evaluate() classifies each decoded frame
    STOPPED  -> a frame past end_time was seen; the read loop must end

Frame times are compared as exact fractions (pts * time_base), so a frame
sitting exactly on a window edge is never lost to float rounding.
"""

from __future__ import annotations

import enum
import logging
from fractions import Fraction
from numbers import Rational

from stillgrab.core.errors import InvalidStrideError

logger = logging.getLogger(__name__)


class PolicyState(enum.Enum):
    SEEKING = "seeking"
    SCANNING = "scanning"
    STOPPED = "stopped"


class Decision(enum.Enum):
    DISCARD = "discard"  # before the window, not counted
    SKIP = "skip"  # in window, counted, off-stride
    SAVE = "save"  # in window, counted, on stride
    STOP = "stop"  # past the window


def frame_time(pts: int | None, time_base: Fraction | None) -> Fraction | None:
    """Presentation time in seconds, or None if the frame carries no pts."""
    if pts is None or time_base is None:
        return None
    return pts * Fraction(time_base)


def check_stride(stride: int) -> None:
    if isinstance(stride, bool) or not isinstance(stride, int) or stride < 1:
        raise InvalidStrideError(f"Stride must be an integer >= 1, got {stride!r}")


class SamplingPolicy:
    """Decides which decoded frames get encoded and written."""

    def __init__(self, start_time: float, end_time: float, stride: int):
        check_stride(stride)

        self.start_time = _as_fraction(start_time)
        self.end_time = _as_fraction(end_time)
        self.stride = stride
        self.state = PolicyState.SEEKING
        self.frames_processed = 0
        self.frames_saved = 0

        if self.start_time > self.end_time:
            logger.warning(
                f"Start time {start_time}s is after end time {end_time}s; no frames will be saved"
            )

    @property
    def stopped(self) -> bool:
        return self.state is PolicyState.STOPPED

    def seek_target(self) -> Fraction:
        """Return the seek position in seconds and start scanning."""
        if self.state is not PolicyState.SEEKING:
            raise RuntimeError(f"seek_target() called in state {self.state.value}")
        self.state = PolicyState.SCANNING
        return self.start_time

    def evaluate(self, time_seconds: Fraction | float | None) -> Decision:
        """Classify one decoded frame by its presentation time."""
        if self.state is PolicyState.STOPPED:
            return Decision.STOP
        if self.state is PolicyState.SEEKING:
            # No seek requested; scanning from wherever the source is.
            self.state = PolicyState.SCANNING

        if time_seconds is None:
            logger.debug("Frame without timestamp discarded")
            return Decision.DISCARD

        t = _as_fraction(time_seconds)
        if t < self.start_time:
            return Decision.DISCARD
        if t > self.end_time:
            self.state = PolicyState.STOPPED
            return Decision.STOP

        decision = Decision.SAVE if self.frames_processed % self.stride == 0 else Decision.SKIP
        self.frames_processed += 1
        return decision

    def record_saved(self) -> int:
        """Claim the next artifact index after a successful encode."""
        index = self.frames_saved
        self.frames_saved += 1
        return index


def _as_fraction(value: Fraction | float | int) -> Fraction:
    if isinstance(value, Rational):
        return Fraction(value)
    # Via repr: 0.1 becomes 1/10, not the nearest binary fraction.
    return Fraction(str(value))
