"""
Shared plumbing for git workflows.

Workflows run a chain of git commands against one working directory and then
update Commit/Task rows. Git-level results are decided first; status writes
afterwards are best-effort and can never change the response.
"""

import logging
from collections.abc import Awaitable
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from pickflow.core.exceptions import GitPreconditionError
from pickflow.core.locks import DirectoryLockService, directory_locks
from pickflow.models import Commit
from pickflow.models.contracts import ApiModel
from pickflow.models.enums import CommitStatus, TaskStatus
from pickflow.repositories import CommitRepository, TaskRepository
from pickflow.services.git_executor import GitCommandExecutor

logger = logging.getLogger(__name__)


@dataclass
class WorkflowResult:
    """HTTP status plus response body produced by a workflow."""

    status_code: int
    body: ApiModel

    def content(self) -> dict:
        return self.body.model_dump(by_alias=True, exclude_none=True)


async def ensure_branch(
    executor: GitCommandExecutor,
    directory: str,
    branch_name: str,
) -> None:
    """
    Make ``branch_name`` the checked-out branch of ``directory``.

    Raises:
        GitPreconditionError: if the current branch cannot be read or the
            checkout fails; nothing has been mutated by the workflow yet.
    """
    current = await executor.run(["branch", "--show-current"], directory)
    if not current.success:
        raise GitPreconditionError("Failed to get current branch", current.stderr)

    if current.stdout.strip() == branch_name:
        return

    logger.info(f"Checking out {branch_name} in {directory} (was {current.stdout.strip()!r})")
    checkout = await executor.run(["checkout", branch_name], directory)
    if not checkout.success:
        raise GitPreconditionError(
            f"Failed to checkout branch: {checkout.stderr}", checkout.stderr
        )


class GitWorkflow:
    """Base for workflows that drive git and then persist status changes."""

    def __init__(
        self,
        session: AsyncSession,
        executor: GitCommandExecutor | None = None,
        locks: DirectoryLockService | None = None,
    ):
        self.session = session
        self.executor = executor or GitCommandExecutor()
        self.locks = locks or directory_locks
        self.commits = CommitRepository(session)
        self.tasks = TaskRepository(session)

    async def _persist(self, write: Awaitable[None], description: str) -> None:
        """
        Run a status write and commit it, logging instead of raising.

        The git operation already happened; a failed write leaves the store
        behind the working directory until the next manual reconciliation.
        """
        try:
            await write
            await self.session.commit()
        except Exception as e:
            logger.error(f"Failed to persist {description}: {e}", exc_info=True)
            await self.session.rollback()

    async def _find_commit(
        self,
        task_id: int | None,
        commit_id: int | None,
        commit_hash: str | None = None,
    ) -> Commit | None:
        """
        Resolve the tracked commit row by id, or by hash within a task.

        A commit id that belongs to a different task than ``task_id`` resolves
        to nothing.
        """
        if commit_id is not None:
            commit = await self.commits.get_by_id(commit_id)
            if commit is not None and task_id is not None and commit.task_id != task_id:
                logger.warning(
                    f"Commit {commit_id} belongs to task {commit.task_id}, not task {task_id}"
                )
                return None
            return commit
        if task_id is not None and commit_hash:
            return await self.commits.find_in_task(task_id, commit_hash)
        return None

    async def _set_commit_status(
        self,
        task_id: int | None,
        commit_id: int,
        commit_status: CommitStatus,
    ) -> Commit | None:
        commit = await self._find_commit(task_id, commit_id)
        if commit is None:
            logger.warning(f"Commit {commit_id} not found; status {commit_status.value} not recorded")
            return None
        return await self.commits.set_status(commit.id, commit_status)

    async def _start_task(self, task_id: int) -> None:
        """Move a pending task to in_progress once one of its commits moves."""
        task = await self.tasks.get_by_id(task_id)
        if task is not None and task.status == TaskStatus.PENDING:
            await self.tasks.set_status(task_id, TaskStatus.IN_PROGRESS)
