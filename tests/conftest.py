"""Shared test fixtures for git-scanline tests."""

from typing import Iterable, Optional, Sequence

import pytest

from git_scanline.history import Commit

# 2024-01-01T00:00:00Z
BASE_TS = 1704067200
DAY = 86400


def make_commit(
    sha: str,
    files: Sequence[str],
    subject: str = "Add feature implementation",
    author: str = "alice@example.com",
    timestamp: int = BASE_TS,
) -> Commit:
    """Create a test commit."""
    return Commit(hash=sha, author=author, timestamp=timestamp, subject=subject, files=tuple(files))


def build_log(entries: Iterable[tuple]) -> str:
    """Render ``(hash, author, ts, subject, [(added, deleted, path), ...])`` as git log text."""
    lines = []
    for sha, author, ts, subject, changes in entries:
        lines.append(f"COMMIT|{sha}|{author}|{ts}|{subject}")
        lines.extend(f"{added}\t{deleted}\t{path}" for added, deleted, path in changes)
        lines.append("")
    return "\n".join(lines)


class FakeLogRunner:
    """Returns canned log text and records every call."""

    def __init__(self, text: str = "", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.calls: list[tuple[str, Optional[str]]] = []

    def run_log(self, since: str = "", path_filter: Optional[str] = None) -> str:
        self.calls.append((since, path_filter))
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep GIT_SCANLINE_* variables from the host out of every test."""
    import os

    for key in list(os.environ):
        if key.startswith("GIT_SCANLINE_"):
            monkeypatch.delenv(key)


@pytest.fixture
def sample_log() -> str:
    """A small history: one hot bug-prone file, a coupled pair and a leaked .env."""
    return build_log(
        [
            ("c5", "alice@example.com", BASE_TS + 4 * DAY, "Fix crash in parser",
             [("10", "2", "src/parser.py"), ("3", "1", "src/lexer.py")]),
            ("c4", "bob@example.com", BASE_TS + 3 * DAY, "fix: handle empty input",
             [("5", "5", "src/parser.py"), ("1", "0", "src/lexer.py")]),
            ("c3", "alice@example.com", BASE_TS + 2 * DAY, "Refactor tokenizer state machine",
             [("20", "8", "src/parser.py"), ("4", "4", "src/lexer.py"), ("1", "0", "package.json")]),
            ("c2", "alice@example.com", BASE_TS + 1 * DAY, "Add configuration loading",
             [("30", "0", "src/config.py"), ("1", "0", ".env")]),
            ("c1", "carol@example.com", BASE_TS, "Initial project skeleton",
             [("50", "0", "src/parser.py"), ("-", "-", "assets/logo.png"), ("2", "0", "README.md")]),
        ]
    )
