"""
Configuration loader — optional scaffold defaults from ``.flaskinit.yml``.

The file lets a team pin the host, port, mode, pages and dependencies
used when the matching CLI flags are omitted. Flags always win.

Example::

    host: 0.0.0.0
    port: 8080
    environment: production
    pages: [About, Contact]
    dependencies: [flask, python-dotenv, gunicorn]
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from flaskinit.core.models.options import DEFAULT_HOST, DEFAULT_PORT, EnvironmentMode
from flaskinit.core.services.provisioner import DEFAULT_DEPENDENCIES

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = ".flaskinit.yml"


class ConfigError(Exception):
    """Raised when the defaults file is unreadable or invalid."""


class ScaffoldDefaults(BaseModel):
    """Values used when the corresponding CLI flag is absent."""

    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    environment: EnvironmentMode = EnvironmentMode.DEVELOPMENT
    pages: list[str] = Field(default_factory=list)
    dependencies: list[str] = Field(default_factory=lambda: list(DEFAULT_DEPENDENCIES), min_length=1)


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for .flaskinit.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to the file, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_defaults(path: Path | None = None) -> ScaffoldDefaults:
    """Load scaffold defaults.

    Args:
        path: Explicit path. If None, searches upward from cwd and falls
            back to built-in defaults when nothing is found.

    Returns:
        Validated ScaffoldDefaults.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            return ScaffoldDefaults()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading scaffold defaults from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return ScaffoldDefaults()
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        defaults = ScaffoldDefaults.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info("Loaded scaffold defaults from %s", path)
    return defaults
