"""Exception hierarchy for frame extraction.

SetupError subclasses are fatal and abort the run. FrameError subclasses
are per-frame failures: the pipeline logs them and moves on.
"""

from __future__ import annotations


class StillgrabError(Exception):
    """Base for all stillgrab errors."""


# ── Fatal setup failures ─────────────────────────────────────────────

class SetupError(StillgrabError):
    """Fatal: the run cannot start or continue."""


class OpenFailedError(SetupError):
    pass


class ProbeFailedError(SetupError):
    pass


class NoVideoStreamError(SetupError):
    pass


class UnsupportedCodecError(SetupError):
    pass


class DecoderOpenError(SetupError):
    pass


class CodecNotFoundError(SetupError):
    pass


class EncoderAllocError(SetupError):
    pass


class EncoderOpenError(SetupError):
    pass


# ── Per-frame failures ───────────────────────────────────────────────

class FrameError(StillgrabError):
    """Non-fatal: the current packet or frame is dropped."""


class DecodeError(FrameError):
    pass


class EncodeError(FrameError):
    pass


class FrameWriteError(FrameError):
    pass


# ── Configuration ────────────────────────────────────────────────────

class ConfigurationError(StillgrabError, ValueError):
    """Settings rejected before the main loop starts."""


class InvalidStrideError(ConfigurationError):
    pass
