"""Tests for terminal and JSON report rendering."""

import io
import json
from dataclasses import replace

import pytest

from conftest import BASE_TS, DAY, FakeLogRunner
from git_scanline.formatters import JsonFormatter, TerminalFormatter, get_formatter, report_to_dict
from git_scanline.formatters.base import MAX_COUPLINGS
from git_scanline.analyzers.models import CouplingEntry
from git_scanline.pipeline import run_analysis, select_results


@pytest.fixture
def report(sample_log):
    return run_analysis("/repo", runner=FakeLogRunner(sample_log), now=BASE_TS + 10 * DAY)


class TestGetFormatter:
    def test_known_names(self):
        assert isinstance(get_formatter("json"), JsonFormatter)
        assert isinstance(get_formatter("terminal"), TerminalFormatter)

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="html"):
            get_formatter("html")


class TestJsonFormatter:
    """Tests for JSON output."""

    def test_document_shape(self, report):
        results = select_results(report.results, top=2)
        data = json.loads(JsonFormatter().format(report, results))
        assert set(data) == {"meta", "results", "couplings", "security_risks"}
        assert data["meta"]["commit_count"] == 5
        assert len(data["results"]) == 2
        assert data["results"][0]["file"] == "src/parser.py"
        assert data["results"][0]["tier"] in {"CRITICAL", "HIGH", "MEDIUM", "LOW"}
        assert data["results"][0]["details"]["bug_commits"] == 2
        assert data["security_risks"][0]["risk_type"] == "env-file"

    def test_couplings_truncated(self, report):
        report.couplings = [CouplingEntry(f"a{i}.py", f"b{i}.py", 3, 50.0) for i in range(15)]
        data = report_to_dict(report, [])
        assert len(data["couplings"]) == MAX_COUPLINGS

    def test_render_to_stream(self, report):
        out = io.StringIO()
        JsonFormatter().render(report, report.results, out=out)
        assert json.loads(out.getvalue())["meta"]["repo_path"] == "/repo"


class TestTerminalFormatter:
    """Tests for the rich terminal tables."""

    def test_contains_tables(self, report):
        text = TerminalFormatter().format(report, select_results(report.results))
        assert "Hotspots" in text
        assert "src/parser.py" in text
        assert "Co-change coupling" in text
        assert "Security risks in history" in text
        assert "Tiers:" in text

    def test_no_matching_results(self, report):
        text = TerminalFormatter().format(report, [])
        assert "No hotspots matched" in text

    def test_markup_in_paths_is_escaped(self, report):
        [first, *_] = report.results
        text = TerminalFormatter().format(report, [first.__class__(**{**first.__dict__, "file": "src/[bold]x.py"})])
        assert "[bold]x.py" in text

    def test_no_color_codes_in_plain_text(self, report):
        assert "\x1b[" not in TerminalFormatter().format(report, report.results)

    def test_markup_in_window_is_escaped(self, report):
        report.meta = replace(report.meta, since="[stable] 2 weeks ago")
        text = TerminalFormatter().format(report, report.results)
        assert "since [stable] 2 weeks ago" in text
