"""Configuration loading utilities."""

import json
import logging
import pathlib
import tomllib
from typing import Any, Dict, Union

from .errors import ConfigError
from .models import ChartOptions

logger = logging.getLogger(__name__)

KNOWN_KEYS = ('title',)


def load_config(path: Union[str, pathlib.Path]) -> Dict[str, Any]:
    """Load a configuration file (TOML or JSON)."""
    path_obj = pathlib.Path(path)
    if not path_obj.exists():
        raise ConfigError(f"Config path does not exist: {path_obj}")

    suffix = path_obj.suffix.lower()
    try:
        if suffix == '.toml':
            with path_obj.open('rb') as handle:
                return tomllib.load(handle)
        if suffix == '.json':
            with path_obj.open('r', encoding='utf-8') as handle:
                return json.load(handle)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        raise ConfigError(f"Invalid config file {path_obj}: {e}") from e

    raise ConfigError(f"Unsupported config format: {path_obj.suffix}")


def chart_options_from_config(config: Dict[str, Any]) -> ChartOptions:
    """Build ChartOptions from a loaded config; reads `title` or `chart.title`."""
    section = config.get('chart', config)
    if not isinstance(section, dict):
        raise ConfigError(f"[chart] must be a table, got {type(section).__name__}")

    for key in section:
        if key not in KNOWN_KEYS and key != 'chart':
            logger.warning("Ignoring unknown config option %r", key)

    title = section.get('title')
    if title is not None and not isinstance(title, str):
        raise ConfigError(f"title must be a string, got {type(title).__name__}")
    return ChartOptions(title=title)
