"""Tests for commit hygiene analysis."""

import pytest

from conftest import make_commit
from git_scanline.analyzers import analyze_commit_quality
from git_scanline.analyzers.commit_quality import is_large, is_low_quality


class TestIsLowQuality:
    """Tests for subject classification."""

    @pytest.mark.parametrize(
        "subject",
        ["wip", "WIP: half done parser", "temp hack for demo", "fixup! Add parser", "Update.", "misc", "oops"],
    )
    def test_low_quality(self, subject):
        assert is_low_quality(subject)

    @pytest.mark.parametrize(
        "subject",
        ["Add streaming parser for numstat output", "Fix off-by-one in burst window", "Update README install steps"],
    )
    def test_descriptive(self, subject):
        assert not is_low_quality(subject)


class TestIsLarge:
    def test_threshold(self):
        assert not is_large(make_commit("c", [f"f{i}" for i in range(30)]))
        assert is_large(make_commit("c", [f"f{i}" for i in range(31)]))


class TestAnalyzeCommitQuality:
    """Tests for analyze_commit_quality."""

    def test_wip_only_caps_at_sixty(self):
        commits = [make_commit("c1", ["a.py"], subject="wip")]
        data = analyze_commit_quality(commits, ["a.py", "b.py"])
        assert data["a.py"].wip_commits == 1
        assert data["a.py"].commit_quality_score == pytest.approx(60.0)
        assert data["b.py"].commit_quality_score == 0.0

    def test_large_and_wip_reach_hundred(self):
        files = ["a.py"] + [f"gen/f{i}.py" for i in range(31)]
        commits = [make_commit("c1", files, subject="WIP dump everything")]
        data = analyze_commit_quality(commits, ["a.py"])
        assert data["a.py"].large_commit_count == 1
        assert data["a.py"].commit_quality_score == pytest.approx(100.0)

    def test_large_counts_all_touched_files(self):
        """Size is judged on the whole commit, not just candidate files."""
        files = ["a.py"] + [f"node_modules/{i}.js" for i in range(40)]
        commits = [make_commit("c1", files, subject="Vendor the new dependency tree")]
        data = analyze_commit_quality(commits, ["a.py"])
        assert data["a.py"].large_commit_count == 1
        assert data["a.py"].commit_quality_score == pytest.approx(40.0)

    def test_clean_history_scores_zero(self):
        commits = [make_commit("c1", ["a.py"], subject="Add descriptive commit message")]
        assert analyze_commit_quality(commits, ["a.py"])["a.py"].commit_quality_score == 0.0
