#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the mlgrep CLI.

Config files hold defaults for ``GrepOptions`` fields. TOML, YAML and JSON
are supported, as is a ``[tool.mlgrep]`` table in ``pyproject.toml``.
"""

import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from mlgrep.constants import CONFIG_FILENAMES
from mlgrep.exceptions import ConfigError
from mlgrep.options import GrepOptions

logger = logging.getLogger(__name__)


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.mlgrep]`` table from a pyproject.toml file.

    Returns an empty dict when the file has no such table.

    Raises
    ------
    ConfigError
        If pyproject.toml cannot be parsed or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {pyproject_path}: {e}", str(pyproject_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading {pyproject_path}: {e}", str(pyproject_path), e) from e

    config = data.get("tool", {}).get("mlgrep")
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"[tool.mlgrep] section in {pyproject_path} must be a table, got {type(config).__name__}",
            str(pyproject_path),
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by walking up from ``start_dir``.

    Each directory is checked for ``.mlgrep.toml``, ``.mlgrep.yaml``,
    ``.mlgrep.yml``, ``.mlgrep.json`` and finally a ``pyproject.toml`` that
    has a ``[tool.mlgrep]`` table.

    Parameters
    ----------
    start_dir : Path, optional
        Directory the walk starts from; the cwd when omitted

    Returns
    -------
    Path or None
        The nearest config file, if any

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except ConfigError:
                logger.debug("Skipping unreadable %s", pyproject_path)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file() -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    The parent directory walk from the cwd comes first, then the user's home
    directory.
    """
    found = find_config_in_parents()
    if found:
        return found

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML, or pyproject.toml file.

    The format is picked from the file name and extension.

    Raises
    ------
    ConfigError
        If the file cannot be read, parsed, or has an unsupported format

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file does not exist: {config_path}", str(config_path))
    if not config_path.is_file():
        raise ConfigError(f"Configuration path is not a file: {config_path}", str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        return _load_pyproject_section(config_path)

    try:
        if ext == ".toml":
            with open(config_path, "rb") as f:
                config = tomllib.load(f)
        elif ext in (".yaml", ".yml"):
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        elif ext == ".json":
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        else:
            raise ConfigError(f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml", str(config_path))
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading config file {config_path}: {e}", str(config_path), e) from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"Config file {config_path} must contain a mapping, got {type(config).__name__}", str(config_path)
        )
    logger.debug("Loaded configuration from %s", config_path)
    return config


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load the defaults file that applies to this run.

    ``--config`` wins over ``MLGREP_CONFIG``, which wins over discovery.

    Returns
    -------
    dict
        Option values keyed by field name; empty when no file applies

    """
    if explicit_path:
        return load_config_file(explicit_path)
    if env_var_path:
        return load_config_file(env_var_path)
    discovered_path = discover_config_file()
    if discovered_path:
        return load_config_file(discovered_path)
    return {}


def apply_config(options: GrepOptions, config: Dict[str, Any]) -> GrepOptions:
    """Overlay config file values onto ``options``.

    Keys may use hyphens or underscores. Unknown keys are logged and
    ignored.

    Raises
    ------
    ConfigError
        If a value is rejected by ``GrepOptions`` validation

    """
    if not config:
        return options
    normalized = {str(key).replace("-", "_"): value for key, value in config.items()}
    try:
        updated, ignored = options.with_mapping(normalized)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration value: {e}", original_error=e) from e
    for key in ignored:
        logger.warning("Ignoring unknown configuration key: %s", key)
    return updated
