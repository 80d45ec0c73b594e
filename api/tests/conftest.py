"""
Pytest fixtures for Pickflow API testing infrastructure.

This module provides:
1. Test environment settings
2. Mock database session fixtures
3. Scripted git executor fixtures
4. Real git repository fixtures for integration tests
"""

import os
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

os.environ.setdefault("PICKFLOW_ENVIRONMENT", "testing")

from tests.helpers.fake_git import ScriptedGitExecutor  # noqa: E402
from tests.helpers.git_repo import run_git  # noqa: E402


# ==================== SESSION FIXTURES ====================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Reset cached settings and database state around the test run."""
    from pickflow.config import get_settings
    from pickflow.core.database import reset_db_state

    get_settings.cache_clear()
    reset_db_state()

    yield

    reset_db_state()


# ==================== MOCK FIXTURES ====================


@pytest.fixture
def mock_session():
    """Mock AsyncSession for repository and workflow unit tests."""
    session = AsyncMock()
    session.add = MagicMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.get = AsyncMock(return_value=None)
    return session


@pytest.fixture
def git():
    """Scripted git executor; tests queue results per subcommand."""
    return ScriptedGitExecutor()


# ==================== GIT REPOSITORY FIXTURES ====================


@pytest.fixture
def git_identity(monkeypatch):
    """Deterministic author/committer identity for commits made in tests."""
    for prefix in ("GIT_AUTHOR", "GIT_COMMITTER"):
        monkeypatch.setenv(f"{prefix}_NAME", "Pickflow Test")
        monkeypatch.setenv(f"{prefix}_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")


@pytest.fixture
def git_repo(tmp_path, git_identity) -> Path:
    """
    Repository on `main` with one commit and a `feature` branch off it.

    Tests add commits on either branch and cherry-pick between them.
    """
    repo = tmp_path / "repo"
    repo.mkdir()
    run_git(repo, "init", "-b", "main")
    run_git(repo, "config", "user.name", "Pickflow Test")
    run_git(repo, "config", "user.email", "test@example.com")
    (repo / "app.txt").write_text("line one\n")
    run_git(repo, "add", ".")
    run_git(repo, "commit", "-m", "Initial commit")
    run_git(repo, "branch", "feature")
    return repo
