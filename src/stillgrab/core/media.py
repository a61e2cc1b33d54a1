"""Process-wide FFmpeg runtime state.

PyAV keeps one FFmpeg log level for the whole process. The top-level run
sets it once on entry and puts the previous value back on exit; the
extraction pipeline itself never touches it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import av.logging

logger = logging.getLogger(__name__)

FFMPEG_LOG_LEVELS = {
    "quiet": None,
    "panic": av.logging.PANIC,
    "fatal": av.logging.FATAL,
    "error": av.logging.ERROR,
    "warning": av.logging.WARNING,
    "info": av.logging.INFO,
    "verbose": av.logging.VERBOSE,
    "debug": av.logging.DEBUG,
}


@contextmanager
def media_runtime(ffmpeg_log_level: str = "quiet") -> Iterator[None]:
    """Initialise FFmpeg logging for one run and restore it afterwards."""
    try:
        level = FFMPEG_LOG_LEVELS[ffmpeg_log_level.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown FFmpeg log level '{ffmpeg_log_level}', "
            f"expected one of {sorted(FFMPEG_LOG_LEVELS)}"
        ) from None

    previous = av.logging.get_level()
    av.logging.set_level(level)
    logger.debug(f"FFmpeg log level set to {ffmpeg_log_level}")
    try:
        yield
    finally:
        av.logging.set_level(previous)
