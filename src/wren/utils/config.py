"""
Configuration System

YAML configuration for the Wren note composer. Features:
- Single-file YAML loading with environment resolution
- Built-in defaults deep-merged under user settings
- Dot-notation access for any setting
- Explicit path, CONFIG_FILE env var, or ./config.yml discovery

The composer must start without a project file, so a missing config.yml
falls back to the defaults instead of failing.
"""

import copy
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

# Use standard logging (not get_logger) to avoid circular imports with logger.py
# The short name 'CONFIG' enables easy filtering
logger = logging.getLogger("CONFIG")

_ENV_REFERENCE = re.compile(r"\$\{([^}:]+)(?::-(.*?))?\}|\$([A-Za-z_][A-Za-z0-9_]*)")


DEFAULT_CONFIG: dict[str, Any] = {
    "commands": {
        "marker": "/",
        "history_size": 50,
    },
    "autocomplete": {
        "max_command_suggestions": 6,
        "max_argument_suggestions": 5,
    },
    "vault": {
        "path": None,
        "notebook": None,
        "notebooks": ["Inbox"],
    },
    "cli": {
        "theme": "default",
    },
    "logging": {
        "level": "INFO",
        "rich_tracebacks": True,
        "show_traceback_locals": False,
        "show_full_paths": False,
        "logging_colors": {
            "commands": "cyan",
            "autocomplete": "magenta",
            "history": "blue",
            "composer": "green",
            "cli": "white",
        },
    },
}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return a new dict with ``override`` merged recursively over ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@dataclass
class CommandSettings:
    """Resolved settings for the command interpreter and autocomplete panel."""

    marker: str = "/"
    history_size: int = 50
    max_command_suggestions: int = 6
    max_argument_suggestions: int = 5


class ConfigBuilder:
    """
    Configuration builder.

    Features:
    - Single-file YAML loading with validation and error handling
    - Environment variable resolution
    - Defaults merged beneath the file contents
    """

    def __init__(self, config_path: str | Path | None = None):
        """
        Initialize configuration builder.

        Args:
            config_path: Path to the config.yml file. If None, looks in the current
                directory and silently uses defaults when nothing is found.

        Raises:
            FileNotFoundError: If an explicit config_path does not exist.
        """
        if config_path is None:
            cwd_config = Path.cwd() / "config.yml"
            if cwd_config.exists():
                config_path = cwd_config
        elif not Path(config_path).exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        self.config_path = Path(config_path) if config_path is not None else None
        self.raw_config = self._load_config()

    def _load_yaml_file(self, file_path: Path) -> dict[str, Any]:
        """Read ``file_path``; an empty file is an empty mapping."""
        try:
            with open(file_path) as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Invalid YAML in {file_path}: {e}")
            raise yaml.YAMLError(f"Error parsing YAML configuration: {e}") from e

        if config is None:
            logger.warning(f"Configuration file is empty: {file_path}")
            return {}
        if not isinstance(config, dict):
            raise ValueError(f"Configuration file must contain a mapping: {file_path}")
        return config

    def _resolve_env_vars(self, data: Any) -> Any:
        """Substitute environment references in every string value.

        ``${NAME}`` and ``$NAME`` are replaced by the variable's value;
        ``${NAME:-fallback}`` uses ``fallback`` when NAME is unset. Unset
        references without a fallback are left as written.
        """
        if isinstance(data, dict):
            return {key: self._resolve_env_vars(value) for key, value in data.items()}
        if isinstance(data, list):
            return [self._resolve_env_vars(item) for item in data]
        if not isinstance(data, str):
            return data

        def substitute(match: re.Match) -> str:
            braced, fallback, bare = match.groups()
            value = os.environ.get(braced or bare)
            if value is not None:
                return value
            if fallback is not None:
                return fallback
            logger.info(f"Environment variable '{braced or bare}' is not set")
            return match.group(0)

        return _ENV_REFERENCE.sub(substitute, data)

    def _load_config(self) -> dict[str, Any]:
        """File contents (if any) with env references resolved, over the defaults."""
        if self.config_path is None:
            logger.debug("No config.yml found, using built-in defaults")
            return copy.deepcopy(DEFAULT_CONFIG)

        overrides = self._resolve_env_vars(self._load_yaml_file(self.config_path))
        logger.info(f"Loaded configuration from {self.config_path}")
        return _deep_merge(DEFAULT_CONFIG, overrides)

    def get(self, path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation path."""
        keys = path.split(".")
        value = self.raw_config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default


# =============================================================================
# GLOBAL CONFIGURATION
# =============================================================================

_default_config: ConfigBuilder | None = None

# Per-path config cache for explicit config paths
_config_cache: dict[str, ConfigBuilder] = {}


def _get_config(config_path: str | None = None, set_as_default: bool = False) -> ConfigBuilder:
    """Get configuration instance (singleton with optional explicit path).

    Args:
        config_path: Optional explicit path to configuration file.
        set_as_default: If True and config_path is provided, also make this the
            default for future calls without a path.
    """
    global _default_config

    if config_path is None:
        if _default_config is None:
            config_file = os.environ.get("CONFIG_FILE")
            _default_config = ConfigBuilder(config_file) if config_file else ConfigBuilder()
            logger.debug("Initialized default configuration system")
        return _default_config

    resolved_path = str(Path(config_path).resolve())

    if resolved_path not in _config_cache:
        logger.info(f"Loading configuration from explicit path: {resolved_path}")
        _config_cache[resolved_path] = ConfigBuilder(resolved_path)

    if set_as_default:
        _default_config = _config_cache[resolved_path]
        logger.debug(f"Set explicit config as default: {resolved_path}")

    return _config_cache[resolved_path]


def reset_config() -> None:
    """Drop cached configuration so the next access reloads from disk."""
    global _default_config
    _default_config = None
    _config_cache.clear()


def get_config_builder(
    config_path: str | None = None, set_as_default: bool = False
) -> ConfigBuilder:
    """Get configuration builder instance for full config access.

    Examples:
        >>> config = get_config_builder()
        >>> size = config.get("commands.history_size", 50)

        >>> config = get_config_builder("/path/to/config.yml", set_as_default=True)
    """
    return _get_config(config_path, set_as_default)


def get_config_value(path: str, default: Any = None, config_path: str | None = None) -> Any:
    """
    Get a specific configuration value by dot-separated path.

    Args:
        path: Dot-separated configuration path (e.g., "commands.history_size")
        default: Default value to return if path is not found
        config_path: Optional explicit path to configuration file

    Returns:
        The configuration value at the specified path, or default if not found

    Raises:
        ValueError: If path is empty or None
    """
    if not path:
        raise ValueError("Configuration path cannot be empty or None")

    return _get_config(config_path).get(path, default)


def get_command_settings(config_path: str | None = None) -> CommandSettings:
    """Resolve the interpreter and autocomplete settings."""
    config = _get_config(config_path)
    settings = CommandSettings(
        marker=str(config.get("commands.marker", "/")),
        history_size=int(config.get("commands.history_size", 50)),
        max_command_suggestions=int(config.get("autocomplete.max_command_suggestions", 6)),
        max_argument_suggestions=int(config.get("autocomplete.max_argument_suggestions", 5)),
    )

    if len(settings.marker) != 1 or settings.marker.isspace():
        raise ValueError(
            f"commands.marker must be a single non-whitespace character, got {settings.marker!r}"
        )
    return settings
