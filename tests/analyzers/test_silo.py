"""Tests for author concentration."""

from collections import Counter

import pytest

from conftest import make_commit
from git_scanline.analyzers import analyze_authors
from git_scanline.analyzers.silo import UNKNOWN_AUTHOR, top_author


class TestTopAuthor:
    """Tests for top author selection."""

    def test_most_commits_wins(self):
        assert top_author(Counter({"bob@x.com": 3, "alice@x.com": 1})) == ("bob@x.com", 3)

    def test_tie_goes_to_smallest_identifier(self):
        assert top_author(Counter({"zed@x.com": 2, "amy@x.com": 2})) == ("amy@x.com", 2)


class TestAnalyzeAuthors:
    """Tests for analyze_authors."""

    def test_single_author_is_full_silo(self):
        commits = [make_commit(f"c{i}", ["a.py"], author="alice@x.com") for i in range(3)]
        data = analyze_authors(commits, ["a.py"])["a.py"]
        assert data.top_author == "alice@x.com"
        assert data.top_author_percent == pytest.approx(100.0)
        assert data.author_count == 1

    def test_shared_ownership(self):
        commits = [
            make_commit("c1", ["a.py"], author="alice@x.com"),
            make_commit("c2", ["a.py"], author="alice@x.com"),
            make_commit("c3", ["a.py"], author="alice@x.com"),
            make_commit("c4", ["a.py"], author="bob@x.com"),
        ]
        data = analyze_authors(commits, ["a.py"])["a.py"]
        assert data.top_author_percent == pytest.approx(75.0)
        assert data.author_count == 2

    def test_file_without_history(self):
        data = analyze_authors([], ["ghost.py"])["ghost.py"]
        assert data.top_author == UNKNOWN_AUTHOR
        assert data.top_author_percent == 100.0
        assert data.author_count == 1
