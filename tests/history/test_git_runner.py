"""Tests for the git log subprocess wrapper."""

import subprocess

import pytest

from git_scanline.exceptions import GitLaunchError, GitLogError, HistoryError
from git_scanline.history import GitLogRunner, build_log_command


class TestBuildLogCommand:
    """Tests for log command construction."""

    def test_default_command(self):
        cmd = build_log_command()
        assert cmd == [
            "git",
            "log",
            "--format=COMMIT|%H|%ae|%ad|%s",
            "--date=unix",
            "--numstat",
            "--diff-filter=ACDMRT",
        ]

    def test_since_appended(self):
        assert build_log_command(since="6 months ago")[-1] == "--since=6 months ago"

    def test_path_filter_after_separator(self):
        cmd = build_log_command(path_filter="src/api")
        assert cmd[-2:] == ["--", "src/api"]

    def test_custom_binary(self):
        assert build_log_command(git_binary="/usr/local/bin/git")[0] == "/usr/local/bin/git"


class _Completed:
    def __init__(self, returncode=0, stdout="", stderr=""):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class TestGitLogRunner:
    """Tests for GitLogRunner error mapping."""

    def test_returns_stdout(self, tmp_path, monkeypatch):
        captured = {}

        def fake_run(cmd, **kwargs):
            captured["cmd"] = cmd
            captured["cwd"] = kwargs["cwd"]
            return _Completed(stdout="COMMIT|h|a@x.com|1|Subject\n")

        monkeypatch.setattr(subprocess, "run", fake_run)
        out = GitLogRunner(tmp_path).run_log(since="1 week ago")
        assert out.startswith("COMMIT|h")
        assert "--since=1 week ago" in captured["cmd"]
        assert captured["cwd"] == str(tmp_path.resolve())

    def test_nonzero_exit_raises(self, tmp_path, monkeypatch):
        monkeypatch.setattr(
            subprocess, "run", lambda cmd, **kw: _Completed(128, stderr="fatal: not a git repository\n")
        )
        with pytest.raises(GitLogError) as exc_info:
            GitLogRunner(tmp_path).run_log()
        assert exc_info.value.returncode == 128
        assert exc_info.value.stderr == "fatal: not a git repository"
        assert "git log failed" in str(exc_info.value)

    def test_missing_binary_raises_launch_error(self, tmp_path, monkeypatch):
        def fake_run(cmd, **kwargs):
            raise FileNotFoundError(2, "No such file or directory")

        monkeypatch.setattr(subprocess, "run", fake_run)
        with pytest.raises(GitLaunchError):
            GitLogRunner(tmp_path, git_binary="no-such-git").run_log()

    def test_timeout_raises_log_error(self, tmp_path, monkeypatch):
        def fake_run(cmd, **kwargs):
            raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

        monkeypatch.setattr(subprocess, "run", fake_run)
        with pytest.raises(GitLogError, match="timed out"):
            GitLogRunner(tmp_path, timeout=5).run_log()

    def test_errors_share_history_base(self):
        assert issubclass(GitLaunchError, HistoryError)
        assert issubclass(GitLogError, HistoryError)
