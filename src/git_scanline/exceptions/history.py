"""History-related exceptions: git process failures and empty results."""

from typing import Dict, Optional, Sequence

from .base import ScanlineError


class HistoryError(ScanlineError):
    """Base class for errors raised while reading version-control history."""

    pass


class GitLaunchError(HistoryError):
    """Raised when the git binary cannot be started at all."""

    def __init__(self, command: Sequence[str], reason: str):
        cmd = " ".join(command)
        super().__init__(
            f"Failed to run git: {reason}",
            details={"command": cmd},
        )
        self.command = list(command)
        self.reason = reason


class GitLogError(HistoryError):
    """Raised when git exits with a non-zero status."""

    def __init__(self, command: Sequence[str], returncode: int, stderr: str):
        stderr_text = stderr.strip()
        super().__init__(
            f"git log failed: {stderr_text or 'no error output'}",
            details={"command": " ".join(command), "exit_code": str(returncode)},
        )
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr_text


class InsufficientDataError(ScanlineError):
    """Raised when there is nothing left to analyze."""

    def __init__(self, reason: str, hint: Optional[str] = None, details: Optional[Dict[str, str]] = None):
        message = reason if hint is None else f"{reason}. {hint}"
        super().__init__(message, details=details)
        self.reason = reason
        self.hint = hint


class NoCommitsError(InsufficientDataError):
    """Raised when the history window contains no commits."""

    def __init__(self, repo_path: str, since: str = ""):
        super().__init__(
            f"No commits found in '{repo_path}'",
            hint='Try a wider window, e.g. --since "4 years ago"',
            details={"since": since or "all history"},
        )
        self.repo_path = repo_path
        self.since = since


class NoFilesError(InsufficientDataError):
    """Raised when every touched file was removed by the file filter."""

    def __init__(self, path_filter: Optional[str] = None):
        details = {"path": path_filter} if path_filter else None
        super().__init__(
            "No files found after filtering",
            hint="Try a different --path or a wider --since",
            details=details,
        )
        self.path_filter = path_filter
