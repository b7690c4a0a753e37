"""Logging setup for the mass and balance tools.

Loggers can be configured from a YAML file, get a per-component level, and write
to a platform-aware log location. Logs are rotated at startup.

Platform-specific log locations:
    - macOS: ~/Library/Logs/MassBalance/massbalance.log
    - Linux: ~/.massbalance/logs/massbalance.log
    - Windows: %AppData%/MassBalance/Logs/massbalance.log

Each run rotates the log and keeps the last 5 runs.

Typical usage example:
    from massbalance.core.logging_system import get_logger, initialize_logging

    initialize_logging(console_level="WARNING")
    log = get_logger("massbalance.registry")
    log.info("Loaded %d aircraft", count)
"""

import logging
import os
import platform
import time
from pathlib import Path
from typing import Any

import yaml

_logging_config: dict[str, Any] = {}
_loggers_cache: dict[str, logging.Logger] = {}
_handlers: list[logging.Handler] = []
_initialized = False

LOG_FILENAME = "massbalance.log"


class LoggingError(Exception):
    """Raised when logging system operations fail."""


def get_platform_log_dir() -> Path:
    """Get platform-specific log directory.

    Returns:
        Path to the platform-appropriate log directory:
        - macOS: ~/Library/Logs/MassBalance
        - Linux: ~/.massbalance/logs
        - Windows: %AppData%/MassBalance/Logs
    """
    system = platform.system()

    if system == "Darwin":
        return Path.home() / "Library" / "Logs" / "MassBalance"
    elif system == "Windows":
        appdata = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return appdata / "MassBalance" / "Logs"
    else:
        return Path.home() / ".massbalance" / "logs"


def rotate_logs(log_dir: Path, log_filename: str = LOG_FILENAME, keep_count: int = 5) -> None:
    """Rotate logs on startup, keeping the last N runs.

    Renames the current log to massbalance.log.1, shifts older logs, and deletes
    logs beyond keep_count.

    Args:
        log_dir: Directory containing log files.
        log_filename: Base name of the log file.
        keep_count: Number of old logs to keep.
    """
    log_file = log_dir / log_filename

    if not log_file.exists():
        return

    oldest_log = log_dir / f"{log_filename}.{keep_count}"
    if oldest_log.exists():
        oldest_log.unlink()

    for i in range(keep_count - 1, 0, -1):
        old_log = log_dir / f"{log_filename}.{i}"
        new_log = log_dir / f"{log_filename}.{i + 1}"
        if old_log.exists():
            old_log.rename(new_log)

    log_file.rename(log_dir / f"{log_filename}.1")


def initialize_logging(
    config_path: str | Path | None = None,
    use_platform_dir: bool = True,
    console_level: str | None = None,
) -> None:
    """Initialize the logging system.

    Should be called once at startup, before any logging occurs. Rotates the
    log from the previous run.

    Args:
        config_path: Path to a logging configuration YAML file.
            If None, the default configuration is used.
        use_platform_dir: If True, log to the platform-specific directory.
            If False, use log_dir from the config (for development/testing).
        console_level: Overrides the console handler level (e.g. "INFO").

    Raises:
        LoggingError: If the configuration cannot be loaded.

    Examples:
        >>> initialize_logging("config/logging.yaml", console_level="DEBUG")
    """
    global _logging_config, _initialized

    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise LoggingError(f"Logging config file not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise LoggingError(f"Failed to load logging config: {e}") from e

        _logging_config = _merge_dicts(_get_default_config(), loaded)
    else:
        _logging_config = _get_default_config()

    if use_platform_dir:
        _logging_config["log_dir"] = str(get_platform_log_dir())

    if console_level:
        _logging_config["console"]["level"] = console_level.upper()

    _remove_handlers()

    if _logging_config["file_log"].get("enabled", True):
        log_dir = Path(_logging_config["log_dir"])
        log_dir.mkdir(parents=True, exist_ok=True)
        rotate_logs(
            log_dir,
            _logging_config["file_log"].get("filename", LOG_FILENAME),
            _logging_config["file_log"].get("backup_count", 5),
        )

    _loggers_cache.clear()
    _configure_root_logger()
    for name in _logging_config.get("components", {}):
        _configure_component(logging.getLogger(name))

    _initialized = True


def _get_default_config() -> dict[str, Any]:
    """Get default logging configuration.

    Returns:
        Default logging configuration dictionary.
    """
    return {
        "version": 1,
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "date_format": "%Y-%m-%d %H:%M:%S",
        "log_dir": "logs",
        "file_log": {
            "enabled": True,
            "filename": LOG_FILENAME,
            "backup_count": 5,
        },
        "console": {
            "enabled": True,
            "level": "WARNING",
        },
        "components": {},
    }


def _merge_dicts(base: dict, override: dict) -> dict:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_dicts(result[key], value)
        else:
            result[key] = value
    return result


def _remove_handlers() -> None:
    """Detach and close the handlers installed by this module."""
    root_logger = logging.getLogger()
    while _handlers:
        handler = _handlers.pop()
        root_logger.removeHandler(handler)
        handler.close()


def _configure_root_logger() -> None:
    """Configure the root logger with handlers."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture all, filter in handlers

    console_config = _logging_config.get("console", {})
    if console_config.get("enabled", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(_parse_level(console_config.get("level", "WARNING")))
        console_handler.setFormatter(_get_formatter())
        root_logger.addHandler(console_handler)
        _handlers.append(console_handler)

    file_config = _logging_config.get("file_log", {})
    if file_config.get("enabled", True):
        log_dir = Path(_logging_config.get("log_dir", "logs"))
        log_file = log_dir / file_config.get("filename", LOG_FILENAME)

        # Plain FileHandler: rotation already happened at startup
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(_get_formatter())
        root_logger.addHandler(file_handler)
        _handlers.append(file_handler)


def _parse_level(level: str) -> int:
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise LoggingError(f"Unknown log level: {level}")
    return value


class MillisecondFormatter(logging.Formatter):
    """Formatter that shows milliseconds with a dot separator."""

    def formatTime(self, record, datefmt=None):
        ct = self.converter(record.created)
        if datefmt:
            s = time.strftime(datefmt, ct)
        else:
            s = time.strftime("%Y-%m-%d %H:%M:%S", ct)
        return f"{s}.{int(record.msecs):03d}"


def _get_formatter() -> logging.Formatter:
    fmt = _logging_config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    datefmt = _logging_config.get("date_format", "%Y-%m-%d %H:%M:%S")
    return MillisecondFormatter(fmt, datefmt)


def _configure_component(logger: logging.Logger) -> None:
    """Apply the level or disabled flag configured for a component logger."""
    component_config = _logging_config.get("components", {}).get(logger.name, {})
    if component_config.get("enabled", True):
        logger.disabled = False
        if "level" in component_config:
            logger.setLevel(_parse_level(component_config["level"]))
    else:
        logger.disabled = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a component.

    Loggers are cached. A component can have its own level, or be disabled,
    under the 'components' section of the logging config.

    Args:
        name: Logger name (typically the module name).

    Returns:
        Configured logger instance.

    Examples:
        >>> log = get_logger("massbalance.main")
        >>> log.info("Loaded %s", registration)

    Note:
        Use lazy formatting (%) instead of f-strings.
    """
    if not _initialized:
        initialize_logging()

    if name in _loggers_cache:
        return _loggers_cache[name]

    logger = logging.getLogger(name)
    _configure_component(logger)

    _loggers_cache[name] = logger
    return logger


def shutdown_logging() -> None:
    """Flush and close the handlers installed by initialize_logging."""
    global _initialized

    _remove_handlers()
    _loggers_cache.clear()
    _initialized = False
