"""
Configuration resource loader.

Loads the YAML resources that shape pipeline behaviour. Currently that is
the field -> context hint table used by the structure translator.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from sitelingo.i18n.hints import ContextHints

logger = logging.getLogger(__name__)


RESOURCES_DIR = Path(__file__).parent / "resources"
DEFAULT_CONTEXT_HINTS_PATH = RESOURCES_DIR / "context_hints.yaml"


def load_yaml(path: Path | str) -> dict[str, Any]:
    """Read a YAML mapping. An empty file gives an empty dict."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}, got {type(data).__name__}")
    return data


def load_context_hints(path: Path | str | None = None) -> ContextHints:
    """
    Load the context hint table.
    
    Args:
        path: YAML file with ``fields`` and ``passthrough`` sections.
            Defaults to the bundled table.
    """
    path = Path(path) if path else DEFAULT_CONTEXT_HINTS_PATH
    hints = ContextHints.from_dict(load_yaml(path))
    logger.debug(f"Loaded {len(hints.fields)} context hints from {path}")
    return hints
