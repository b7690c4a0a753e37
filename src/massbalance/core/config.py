"""YAML configuration loading.

Aircraft data files and loading sheets are YAML documents. ConfigLoader wraps
one parsed document and gives dotted-path access to it.

Typical usage example:
    from massbalance.core.config import ConfigLoader

    sheet = ConfigLoader.load("sheets/se-lro.yaml")
    fuel = sheet.get_float("fuel.volume_l", default=0.0)
"""

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

_MISSING = object()


class ConfigError(Exception):
    """Raised when configuration operations fail."""


class ConfigLoader:
    """Wrapper around a YAML document with dotted-path access.

    Examples:
        >>> config = ConfigLoader({"fuel": {"volume_l": 50}})
        >>> config.get("fuel.volume_l")
        50
    """

    def __init__(self, data: dict[str, Any], source: str | Path | None = None) -> None:
        """Initialize with configuration data.

        Args:
            data: Configuration dictionary.
            source: Where the data came from, used in error messages.
        """
        self._data = data
        self.source = str(source) if source is not None else "<memory>"

    @classmethod
    def load(cls, path: str | Path) -> "ConfigLoader":
        """Load configuration from a YAML file.

        Args:
            path: Path to YAML file.

        Returns:
            ConfigLoader instance with loaded data.

        Raises:
            ConfigError: If the file is missing, unreadable, or not a mapping.
        """
        path = Path(path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load configuration {path}: {e}") from e

        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root must be a mapping: {path}")

        logger.info("Loaded configuration from: %s", path)
        return cls(data, source=path)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value using dot notation.

        Args:
            key: Configuration key, e.g. "fuel.volume_l".
            default: Default value if key not found.

        Returns:
            Configuration value or default.
        """
        value = self._data

        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def require(self, key: str) -> Any:
        """Get a value that must be present.

        Raises:
            ConfigError: If the key is missing.
        """
        value = self.get(key, _MISSING)
        if value is _MISSING:
            raise ConfigError(f"{self.source}: missing required key '{key}'")
        return value

    def get_float(self, key: str, default: Any = _MISSING) -> float:
        """Get a numeric value as float.

        Args:
            key: Configuration key (dot notation).
            default: Returned when the key is missing. When omitted the key is
                required.

        Raises:
            ConfigError: If the key is required and missing, or the value is not
                a number.
        """
        value = self.require(key) if default is _MISSING else self.get(key, default)
        if value is None:
            return value
        if isinstance(value, bool):
            raise ConfigError(f"{self.source}: '{key}' must be a number, got {value!r}")
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{self.source}: '{key}' must be a number, got {value!r}") from e

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value using dot notation.

        Examples:
            >>> config.set("fuel.burn_l", 20)
        """
        keys = key.split(".")
        data = self._data

        for k in keys[:-1]:
            if k not in data:
                data[k] = {}
            data = data[k]

        data[keys[-1]] = value

    def get_section(self, key: str) -> dict[str, Any]:
        """Get an entire configuration section.

        Raises:
            ConfigError: If section not found or not a dict.
        """
        value = self.get(key)

        if value is None:
            raise ConfigError(f"{self.source}: section not found: {key}")

        if not isinstance(value, dict):
            raise ConfigError(f"{self.source}: key is not a section: {key}")

        return value

    def save(self, path: str | Path) -> None:
        """Save configuration to a YAML file.

        Raises:
            ConfigError: If save fails.
        """
        path = Path(path)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)

            with path.open("w", encoding="utf-8") as f:
                yaml.safe_dump(self._data, f, default_flow_style=False, sort_keys=False)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to save configuration {path}: {e}") from e

        logger.info("Saved configuration to: %s", path)

    def merge(self, other: "ConfigLoader | dict[str, Any]") -> "ConfigLoader":
        """Return a new loader with ``other`` layered over this one.

        Nested sections are merged key by key; other values replace ours.
        """
        override = other._data if isinstance(other, ConfigLoader) else other
        return ConfigLoader(_merge_dicts(self._data, override), source=self.source)

    def to_dict(self) -> dict[str, Any]:
        """Get the configuration as a dictionary."""
        return self._data.copy()


def _merge_dicts(base: dict, override: dict) -> dict:
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_dicts(result[key], value)
        else:
            result[key] = value

    return result
