"""Layout options from YAML files or plain mappings."""

from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from pedigree_layout.errors import ConfigurationError
from pedigree_layout.models import LayoutOptions

OPTION_NAMES = frozenset(f.name for f in fields(LayoutOptions))


def options_from_dict(data: dict[str, Any] | None) -> LayoutOptions:
    """Build LayoutOptions from a mapping, rejecting keys that are not options."""
    data = dict(data or {})
    unknown = sorted(set(data) - OPTION_NAMES)
    if unknown:
        raise ConfigurationError(f"Unknown layout options: {', '.join(unknown)}")
    try:
        return LayoutOptions(**data)
    except TypeError as e:
        raise ConfigurationError(f"Invalid layout option value: {e}") from e


def load_options(config_path: Path | str) -> LayoutOptions:
    """
    Load layout options from a YAML file.

    The file holds option names at the top level, or under a ``layout`` key:

        layout:
          width: 1000
          symbol_size: 30
          centering_pull: 0.5
    """
    config_path = Path(config_path)
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {config_path}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file: {e}")

    if isinstance(data, dict) and "layout" in data:
        data = data["layout"] or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file must contain a mapping: {config_path}")
    return options_from_dict(data)
