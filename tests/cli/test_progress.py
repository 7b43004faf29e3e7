"""Tests for the analysis spinner."""

import io

from rich.console import Console
from rich.text import Text

from git_scanline.cli.progress import AnalysisProgress


def _console() -> Console:
    return Console(file=io.StringIO(), width=80)


class TestAnalysisProgress:
    """Tests for AnalysisProgress."""

    def test_repository_label_survives_markup(self):
        with AnalysisProgress(_console(), label="myrepo") as progress:
            progress.update("[1/5] Parsing")
            description = progress._progress.tasks[0].description
        assert Text.from_markup(f"[bold]{description}").plain == "[myrepo] [1/5] Parsing"

    def test_no_label(self):
        with AnalysisProgress(_console()) as progress:
            progress.update("[2/5] Scanning")
            description = progress._progress.tasks[0].description
        assert Text.from_markup(description).plain == "[2/5] Scanning"

    def test_disabled_ignores_updates(self):
        with AnalysisProgress(_console(), label="myrepo", enabled=False) as progress:
            progress.update("[1/5] Parsing")
            assert progress._progress is None
