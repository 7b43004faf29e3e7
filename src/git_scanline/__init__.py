"""
git-scanline - git history hotspot analysis

Reads a repository's commit log once, runs seven independent history
signals over it and ranks source files by a weighted hotspot score.
"""

__version__ = "0.1.0"

from .history import Commit, parse_log_text
from .pipeline import Report, run_analysis, select_results
from .scoring import HotspotResult, Tier, Weights

analyze = run_analysis

__all__ = [
    "analyze",  # Main entry point
    "run_analysis",
    "select_results",
    "Report",
    "HotspotResult",
    "Tier",
    "Weights",
    "Commit",
    "parse_log_text",
]
