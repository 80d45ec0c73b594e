"""
Commit Repository

Database operations for commits tracked under tasks.
"""

import logging

from sqlalchemy import select

from pickflow.models import Commit
from pickflow.models.enums import CommitStatus
from pickflow.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class CommitRepository(BaseRepository[Commit]):
    """Repository for commit operations."""

    model = Commit

    async def list_for_task(self, task_id: int) -> list[Commit]:
        """List a task's commits, newest first."""
        result = await self.session.execute(
            select(self.model)
            .where(self.model.task_id == task_id)
            .order_by(self.model.created_at.desc(), self.model.id.desc())
        )
        return list(result.scalars().all())

    async def find_in_task(self, task_id: int, commit_hash: str) -> Commit | None:
        """Find the commit row for a hash within one task."""
        return await self.get(task_id=task_id, commit_hash=commit_hash)

    async def add_to_task(
        self,
        task_id: int,
        commit_hash: str,
        commit_message: str = "",
    ) -> Commit:
        """
        Attach a commit to a task in pending status.

        Callers check find_in_task() first; there is no unique constraint on
        (task_id, commit_hash).
        """
        commit = await self.create(
            Commit(
                task_id=task_id,
                commit_hash=commit_hash,
                commit_message=commit_message,
                status=CommitStatus.PENDING,
            )
        )
        logger.info(f"Attached commit {commit_hash} to task {task_id}")
        return commit

    async def set_status(self, commit_id: int, status: CommitStatus) -> Commit | None:
        commit = await self.get_by_id(commit_id)
        if commit is None:
            return None
        commit.status = status
        await self.session.flush()
        return commit

    async def update_details(
        self,
        commit: Commit,
        commit_message: str | None,
        commit_date: str | None,
        status: CommitStatus,
    ) -> Commit:
        """Overwrite message, date and status of a commit."""
        commit.commit_message = commit_message
        commit.commit_date = commit_date
        commit.status = status
        await self.session.flush()
        return commit

    async def all_pushed(self, task_id: int) -> bool:
        """Whether every commit of a task is pushed (true for no commits)."""
        commits = await self.list_for_task(task_id)
        return all(c.status == CommitStatus.PUSHED for c in commits)
