"""stillgrab core: base step, shared contracts, errors, logging, config."""

from .step_base import BaseStep
from .contracts import StepMeta, StreamSummary
from .config import load_step_config
from .errors import ConfigurationError, FrameError, SetupError, StillgrabError
from .logging import setup_logging

__all__ = [
    "BaseStep",
    "StepMeta",
    "StreamSummary",
    "load_step_config",
    "StillgrabError",
    "SetupError",
    "FrameError",
    "ConfigurationError",
    "setup_logging",
]
