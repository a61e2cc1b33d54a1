"""YAML config loading for step configs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel

logger = logging.getLogger(__name__)

ConfigT = TypeVar("ConfigT", bound=BaseModel)


def load_step_config(
    config_path: Path | None,
    config_class: type[ConfigT],
    overrides: dict[str, Any] | None = None,
) -> ConfigT:
    """Load a step-specific YAML config into its Pydantic model.

    Keys in ``overrides`` whose value is not None replace the file values.
    A missing ``config_path`` means "defaults plus overrides".
    """
    raw: dict[str, Any] = {}
    if config_path is not None:
        with open(config_path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        logger.debug(f"Loaded {config_class.__name__} from {config_path}")

    if overrides:
        raw.update({k: v for k, v in overrides.items() if v is not None})
    return config_class(**raw)
