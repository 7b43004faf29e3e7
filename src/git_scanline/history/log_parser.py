"""Parse ``git log --numstat`` output into commits and per-file diff stats.

The stream alternates header lines and numstat lines::

    COMMIT|<hash>|<author email>|<unix ts>|<subject>
    <added>\t<deleted>\t<path>
    ...

A single forward pass builds both the commit list and the aggregated
diff stats. Malformed lines are dropped, never fatal.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

from ..logging_config import get_logger
from .git_runner import LogRunner
from .models import Commit, DiffStats, DiffStatsMap, ParsedLog

logger = get_logger(__name__)

HEADER_PREFIX = "COMMIT|"
BINARY_SENTINEL = "-"

# "{old => new}" inside a path; either side may be empty when a directory
# level is added or removed.
_BRACE_RENAME_RE = re.compile(r"\{([^{}]*) => ([^{}]*)\}")
_DOUBLE_SLASH_RE = re.compile(r"/{2,}")


def normalize_path(raw: str) -> Optional[str]:
    """Resolve git rename notation to the new path.

    ``src/{old => new}/file.py`` becomes ``src/new/file.py`` and
    ``old.py => new.py`` becomes ``new.py``. Returns None for unparseable
    brace notation and for empty paths.
    """
    if "{" in raw and "=>" in raw:
        result = _BRACE_RENAME_RE.sub(lambda m: m.group(2), raw)
        if "{" in result or "}" in result:
            return None
        result = _DOUBLE_SLASH_RE.sub("/", result).strip().lstrip("/")
        return result or None
    if " => " in raw:
        result = raw.split(" => ")[-1].strip()
        return result or None
    result = raw.strip()
    return result or None


def _parse_count(value: str) -> Optional[int]:
    if not value.isdigit():
        return None
    return int(value)


class _LogAccumulator:
    """Mutable state for one parsing pass."""

    def __init__(self) -> None:
        self.commits: list[Commit] = []
        self.diff_stats: DiffStatsMap = {}
        self.dropped = 0
        self._header: Optional[tuple[str, str, int, str]] = None
        self._files: list[str] = []

    def start_commit(self, rest: str) -> None:
        self.finish_commit()
        # Subjects may contain "|", so cap the split at four fields.
        parts = rest.split("|", 3)
        if len(parts) < 4:
            self.dropped += 1
            return
        commit_hash, author, raw_ts, subject = parts
        try:
            timestamp = int(raw_ts.strip())
        except ValueError:
            timestamp = 0
        self._header = (commit_hash, author, timestamp, subject)

    def add_change(self, line: str) -> None:
        parts = line.split("\t", 2)
        if len(parts) < 3:
            self.dropped += 1
            return
        added_raw, deleted_raw, raw_path = parts
        path = normalize_path(raw_path)
        if path is None:
            self.dropped += 1
            return

        if added_raw != BINARY_SENTINEL and deleted_raw != BINARY_SENTINEL:
            additions = _parse_count(added_raw)
            deletions = _parse_count(deleted_raw)
            if additions is None or deletions is None:
                self.dropped += 1
            else:
                self.diff_stats.setdefault(path, DiffStats()).add(additions, deletions)

        if self._header is not None:
            self._files.append(path)

    def finish_commit(self) -> None:
        if self._header is None:
            return
        commit_hash, author, timestamp, subject = self._header
        self.commits.append(
            Commit(
                hash=commit_hash,
                author=author,
                timestamp=timestamp,
                subject=subject,
                files=tuple(self._files),
            )
        )
        self._header = None
        self._files = []


def parse_log_lines(lines: Iterable[str]) -> ParsedLog:
    """Parse an iterable of log lines in a single forward pass."""
    acc = _LogAccumulator()

    for line in lines:
        trimmed = line.strip()
        if not trimmed:
            continue
        if trimmed.startswith(HEADER_PREFIX):
            acc.start_commit(trimmed[len(HEADER_PREFIX):])
        else:
            acc.add_change(trimmed)

    # The last commit has no trailing header to flush it.
    acc.finish_commit()

    if acc.dropped:
        logger.debug("Dropped %d malformed log line(s)", acc.dropped)
    logger.debug(
        "Parsed %d commits touching %d files", len(acc.commits), len(acc.diff_stats)
    )
    return ParsedLog(commits=acc.commits, diff_stats=acc.diff_stats)


def parse_log_text(raw: str) -> ParsedLog:
    """Parse raw ``git log`` text into a ParsedLog."""
    return parse_log_lines(raw.splitlines())


def parse_log(
    runner: LogRunner, since: str = "", path_filter: Optional[str] = None
) -> ParsedLog:
    """Run the log command through ``runner`` and parse its output.

    Process failures propagate as HistoryError subclasses; nothing is
    returned for a failed run.
    """
    return parse_log_text(runner.run_log(since=since, path_filter=path_filter))
