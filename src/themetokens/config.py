"""
Export configuration.

Export options can be kept in a ``themetokens.yaml`` next to the snapshot:

    generate_typography: true
    generate_color_presets: true
    use_rem: true
    rem_collections:
      font: true
      spacing: true
    base_theme: base-theme.json   # or an inline mapping

Keys may be snake_case or camelCase. A ``base_theme`` string is a JSON file
path, relative to the config file.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import ConfigError
from .models import ExportOptions

logger = logging.getLogger(__name__)

CONFIG_FILE = "themetokens.yaml"
LOG_LEVEL_ENV = "THEMETOKENS_LOG_LEVEL"


def get_config_path(directory: Path) -> Path:
    return directory / CONFIG_FILE


def get_log_level(verbose: bool = False) -> int:
    """Log level from ``--verbose`` or ``THEMETOKENS_LOG_LEVEL``."""
    if verbose:
        return logging.DEBUG
    name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def load_base_theme(path: Path) -> dict[str, Any]:
    """Load a theme.json document to seed the export.

    Raises:
        ConfigError: If the file is missing, not JSON, or not an object.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"Base theme not found: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to read base theme {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Base theme {path} must be a JSON object")
    return data


def parse_options(data: dict[str, Any], base_dir: Path | None = None) -> ExportOptions:
    """Validate raw option data into ``ExportOptions``.

    Raises:
        ConfigError: If validation fails or a base theme path cannot be read.
    """
    data = dict(data)
    for key in ("base_theme", "baseTheme"):
        value = data.get(key)
        if isinstance(value, str):
            path = Path(value)
            if base_dir is not None and not path.is_absolute():
                path = base_dir / path
            data[key] = load_base_theme(path)

    try:
        return ExportOptions.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid export options: {e}") from e


def load_options(path: Path) -> ExportOptions:
    """Load export options from a YAML file.

    Raises:
        ConfigError: If the file is missing, malformed, or invalid.
    """
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e

    if data is None:
        logger.warning("Config file %s is empty, using defaults", path)
        return ExportOptions()
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    return parse_options(data, base_dir=path.parent)
