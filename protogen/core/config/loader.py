"""
Configuration loader — reads codegen.yml into domain models.

This is the primary entry point for loading generation configuration.
It reads YAML, validates against Pydantic schemas, and returns typed
domain objects. A missing file is not an error: the built-in tables
apply and the current directory is the project root.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from protogen.core.models.config import CodegenConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "codegen.yml"


class ConfigError(Exception):
    """Raised when generation configuration is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Nearest codegen.yml in ``start_dir`` (default: cwd) or any parent.

    Lets the CLI run from anywhere inside the checkout. Returns None when
    no ancestor has one, in which case the built-in tables apply.
    """
    start = (start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILE
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None) -> CodegenConfig:
    """Load and validate generation configuration.

    Args:
        path: Explicit path to codegen.yml, or None for the built-in
            defaults.

    Returns:
        Validated CodegenConfig model.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    if path is None:
        logger.debug("No %s, using built-in tables", CONFIG_FILE)
        return CodegenConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading codegen config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = CodegenConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid codegen configuration: {e}") from e

    logger.info(
        "Loaded %d targets and %d naming patches from %s",
        len(config.targets),
        len(config.naming_patches),
        path,
    )
    return config


def project_root(config_path: Path | None) -> Path:
    """Get the project root directory from a config file path."""
    if config_path is None:
        return Path.cwd().resolve()
    return config_path.parent.resolve()
