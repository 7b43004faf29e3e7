"""Version-control history: running git and parsing its log."""

from .git_runner import GitLogRunner, LogRunner, build_log_command
from .log_parser import normalize_path, parse_log, parse_log_lines, parse_log_text
from .models import Commit, DiffStats, DiffStatsMap, ParsedLog

__all__ = [
    "Commit",
    "DiffStats",
    "DiffStatsMap",
    "ParsedLog",
    "GitLogRunner",
    "LogRunner",
    "build_log_command",
    "normalize_path",
    "parse_log",
    "parse_log_lines",
    "parse_log_text",
]
