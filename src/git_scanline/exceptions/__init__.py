"""Exception hierarchy for git-scanline."""

from .base import ScanlineError
from .config import ConfigFileError, ConfigurationError, InvalidConfigError
from .history import (
    GitLaunchError,
    GitLogError,
    HistoryError,
    InsufficientDataError,
    NoCommitsError,
    NoFilesError,
)

__all__ = [
    "ScanlineError",
    "HistoryError",
    "GitLaunchError",
    "GitLogError",
    "InsufficientDataError",
    "NoCommitsError",
    "NoFilesError",
    "ConfigurationError",
    "InvalidConfigError",
    "ConfigFileError",
]
