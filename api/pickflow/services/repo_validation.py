"""
Repository Validation

Checks that a filesystem path is a usable git working directory before it is
registered.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from pickflow.services.git_executor import GitCommandExecutor

logger = logging.getLogger(__name__)


@dataclass
class RepositoryValidation:
    """Validation verdict for a path."""

    valid: bool
    error: str | None = None


async def validate_git_repository(
    path: str,
    executor: GitCommandExecutor | None = None,
) -> RepositoryValidation:
    """
    Validate ``path`` as a git working directory.

    The path must exist, be a directory, contain a ``.git`` entry, and
    `git status` must succeed inside it.
    """
    directory = Path(path)
    if not directory.exists():
        return RepositoryValidation(False, "Directory does not exist")
    if not directory.is_dir():
        return RepositoryValidation(False, "Path is not a directory")
    if not (directory / ".git").exists():
        return RepositoryValidation(False, "Not a git repository (no .git directory found)")

    executor = executor or GitCommandExecutor()
    result = await executor.run(["status"], str(directory))
    if not result.success:
        logger.info(f"git status failed in {path}: {result.stderr}")
        if result.stderr.startswith("Failed to execute git command"):
            return RepositoryValidation(False, f"Git command failed: {result.stderr}")
        return RepositoryValidation(False, "Invalid git repository")
    return RepositoryValidation(True)
