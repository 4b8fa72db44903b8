"""Discovery and loading of the optional analyzer configuration file."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from rvtools_analyzer.analysis import field_tables
from rvtools_analyzer.errors import ConfigError
from rvtools_analyzer.models.config import AnalyzerConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "rvtools_analyzer.yaml"

# User-level config directory
_USER_CONFIG_PATH = Path.home() / ".config" / "rvtools_analyzer" / "config.yaml"


def default_config_paths() -> list[Path]:
    """Search order (first existing file wins): ./rvtools_analyzer.yaml, then the user config."""
    return [Path(CONFIG_FILENAME), _USER_CONFIG_PATH]


def load_config_file(path: Path) -> AnalyzerConfig:
    """Load and validate a config file, raising ConfigError on failure."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config {path}: not a YAML mapping")

    try:
        config = AnalyzerConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config {path}: {exc}") from exc

    try:
        field_tables(config)
    except ConfigError as exc:
        raise ConfigError(f"Invalid config {path}: {exc}") from exc

    logger.debug("Loaded analyzer config from %s", path)
    return config


def load_config(path: str | Path | None = None) -> AnalyzerConfig:
    """Load *path* if given, else the first config found on the search path, else defaults."""
    if path is not None:
        return load_config_file(Path(path))

    for candidate in default_config_paths():
        if candidate.is_file():
            return load_config_file(candidate)

    logger.debug("No analyzer config found; using defaults")
    return AnalyzerConfig()
