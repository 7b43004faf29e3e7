"""Base formatter interface for git-scanline report rendering."""

from abc import ABC, abstractmethod
from typing import List, Optional, TextIO

from ..pipeline import Report
from ..scoring import HotspotResult

# Coupling pairs shown per report.
MAX_COUPLINGS = 10


class BaseFormatter(ABC):
    """Abstract base class for output formatters.

    Formatters display, truncate and order results; they never change scores.
    """

    @abstractmethod
    def format(self, report: Report, results: List[HotspotResult]) -> str:
        """Return the rendered report as a string."""

    def render(
        self, report: Report, results: List[HotspotResult], out: Optional[TextIO] = None
    ) -> None:
        """Write the rendered report to ``out`` (stdout by default)."""
        print(self.format(report, results), file=out)
