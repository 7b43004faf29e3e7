"""Configuration exceptions: invalid values and unreadable config files."""

from pathlib import Path
from typing import Any

from .base import ScanlineError


class ConfigurationError(ScanlineError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value!r}. {reason}",
            details={"key": key},
        )
        self.key = key
        self.value = value
        self.reason = reason


class ConfigFileError(ConfigurationError):
    """Raised when a config file cannot be read or parsed."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Invalid config file '{path}': {reason}", details={"path": str(path)})
        self.path = path
        self.reason = reason
