"""
Task Repository

Database operations for tasks, including commit counters for listings.
"""

import logging
from datetime import datetime
from typing import Any

from sqlalchemy import case, func, select
from sqlalchemy.orm import selectinload

from pickflow.models import Commit, Task
from pickflow.models.enums import CommitStatus, TaskStatus
from pickflow.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class TaskRepository(BaseRepository[Task]):
    """Repository for task operations."""

    model = Task

    async def list_with_counts(self) -> list[tuple[Task, int, int]]:
        """
        List tasks, newest first, with commit counters.

        Returns:
            Tuples of (task, commit_count, pushed_commit_count)
        """
        pushed = func.count(case((Commit.status == CommitStatus.PUSHED, Commit.id)))
        query = (
            select(Task, func.count(Commit.id), pushed)
            .outerjoin(Commit, Commit.task_id == Task.id)
            .group_by(Task.id)
            .order_by(Task.created_at.desc(), Task.id.desc())
        )
        result = await self.session.execute(query)
        return [(task, total or 0, done or 0) for task, total, done in result.all()]

    async def get_with_commits(self, task_id: int) -> Task | None:
        """Get a task with its commits loaded."""
        result = await self.session.execute(
            select(Task)
            .options(selectinload(Task.commits))
            .where(Task.id == task_id)
        )
        return result.scalar_one_or_none()

    async def create_task(
        self,
        name: str,
        directory: str,
        branch_name: str,
        description: str = "",
    ) -> Task:
        task = await self.create(
            Task(
                name=name,
                description=description,
                directory=directory,
                branch_name=branch_name,
                status=TaskStatus.PENDING,
            )
        )
        logger.info(f"Created task {task.id}: {name} -> {branch_name}")
        return task

    async def update_task(self, task: Task, **changes: Any) -> Task:
        """Apply non-None field changes to a task."""
        for field, value in changes.items():
            if value is not None:
                setattr(task, field, value)
        task.updated_at = datetime.utcnow()
        await self.session.flush()
        await self.session.refresh(task)
        return task

    async def set_status(self, task_id: int, status: TaskStatus) -> Task | None:
        task = await self.get_by_id(task_id)
        if task is None:
            return None
        task.status = status
        task.updated_at = datetime.utcnow()
        await self.session.flush()
        return task
