"""Output formatters for git-scanline."""

from .base import BaseFormatter
from .json_formatter import JsonFormatter, report_to_dict
from .terminal_formatter import TerminalFormatter


def get_formatter(name: str) -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: One of "terminal", "json"

    Raises:
        ValueError: If name is not recognized
    """
    formatters = {
        "terminal": TerminalFormatter,
        "json": JsonFormatter,
    }
    cls = formatters.get(name)
    if cls is None:
        raise ValueError(f"Unknown formatter: {name!r}. Choose from: {', '.join(sorted(formatters))}")
    return cls()


__all__ = [
    "BaseFormatter",
    "JsonFormatter",
    "TerminalFormatter",
    "get_formatter",
    "report_to_dict",
]
