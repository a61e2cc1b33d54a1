"""Tests for the process-wide FFmpeg runtime context."""

import av.logging
import pytest

from stillgrab.core.media import media_runtime


def test_sets_and_restores_level():
    before = av.logging.get_level()
    with media_runtime("error"):
        assert av.logging.get_level() == av.logging.ERROR
    assert av.logging.get_level() == before


def test_restores_on_error():
    before = av.logging.get_level()
    with pytest.raises(RuntimeError):
        with media_runtime("warning"):
            raise RuntimeError("boom")
    assert av.logging.get_level() == before


def test_unknown_level():
    with pytest.raises(ValueError):
        with media_runtime("chatty"):
            pass
