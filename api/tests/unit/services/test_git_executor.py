"""
Unit tests for GitCommandExecutor.

Spawn failures are exercised with a binary that does not exist; the real git
binary is only used when available.
"""

import shutil

import pytest

from pickflow.services.git_executor import GitCommandExecutor


class TestGitCommandExecutor:
    @pytest.mark.asyncio
    async def test_missing_binary_returns_failure(self, tmp_path):
        executor = GitCommandExecutor(binary="definitely-not-git-binary", extra_path="")

        result = await executor.run(["status"], str(tmp_path))

        assert result.success is False
        assert result.stdout == ""
        assert result.stderr.startswith("Failed to execute git command:")

    @pytest.mark.asyncio
    async def test_missing_directory_returns_failure(self, tmp_path):
        executor = GitCommandExecutor(extra_path="")

        result = await executor.run(["status"], str(tmp_path / "missing"))

        assert result.success is False
        assert result.stderr.startswith("Failed to execute git command:")

    @pytest.mark.asyncio
    @pytest.mark.skipif(shutil.which("git") is None, reason="git binary not available")
    async def test_runs_git_and_trims_output(self, tmp_path):
        executor = GitCommandExecutor(extra_path="")

        result = await executor.run(["--version"], str(tmp_path))

        assert result.success is True
        assert result.stdout.startswith("git version")
        assert result.stdout == result.stdout.strip()

    @pytest.mark.asyncio
    @pytest.mark.skipif(shutil.which("git") is None, reason="git binary not available")
    async def test_nonzero_exit_is_data_not_exception(self, tmp_path):
        executor = GitCommandExecutor(extra_path="")

        result = await executor.run(["status"], str(tmp_path))

        assert result.success is False
        assert "not a git repository" in result.stderr.lower()

    def test_extra_path_is_appended(self, monkeypatch):
        monkeypatch.setenv("PATH", "/bin")
        executor = GitCommandExecutor(extra_path="/opt/git/bin")

        env = executor._env({"GIT_EDITOR": "true"})

        assert env["PATH"] == "/bin:/opt/git/bin"
        assert env["GIT_EDITOR"] == "true"
