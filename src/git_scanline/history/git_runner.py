"""Run ``git log`` and return its raw text."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Optional, Protocol

from ..exceptions import GitLaunchError, GitLogError
from ..logging_config import get_logger

logger = get_logger(__name__)

LOG_FORMAT = "--format=COMMIT|%H|%ae|%ad|%s"


class LogRunner(Protocol):
    """Anything that can produce raw log text for a history window."""

    def run_log(self, since: str = "", path_filter: Optional[str] = None) -> str: ...


def build_log_command(
    since: str = "", path_filter: Optional[str] = None, git_binary: str = "git"
) -> list[str]:
    cmd = [
        git_binary,
        "log",
        LOG_FORMAT,
        "--date=unix",
        "--numstat",
        "--diff-filter=ACDMRT",
    ]
    if since:
        cmd.append(f"--since={since}")
    if path_filter:
        cmd.extend(["--", path_filter])
    return cmd


class GitLogRunner:
    """Invoke git in a repository and capture the whole log at once."""

    def __init__(
        self,
        repo_path: str | Path,
        git_binary: str = "git",
        timeout: Optional[float] = None,
    ):
        self.repo_path = str(Path(repo_path).resolve())
        self.git_binary = git_binary
        self.timeout = timeout

    def run_log(self, since: str = "", path_filter: Optional[str] = None) -> str:
        cmd = build_log_command(since, path_filter, self.git_binary)
        logger.debug("Running %s in %s", " ".join(cmd), self.repo_path)

        try:
            result = subprocess.run(
                cmd,
                cwd=self.repo_path,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise GitLogError(cmd, -1, f"timed out after {e.timeout}s") from e
        except OSError as e:
            raise GitLaunchError(cmd, str(e)) from e

        if result.returncode != 0:
            logger.warning("git log exited with %d", result.returncode)
            raise GitLogError(cmd, result.returncode, result.stderr or "")

        return result.stdout
