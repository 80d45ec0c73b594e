"""
Tasks Router

CRUD for tasks and the commits attached to them.
"""

import logging

from fastapi import APIRouter, HTTPException, status

from pickflow.core.database import DbSession
from pickflow.models import Task
from pickflow.models.contracts import (
    CommitCreate,
    CommitPublic,
    CommitStatusUpdate,
    MessageResponse,
    TaskCreate,
    TaskDetail,
    TaskPublic,
    TaskSummary,
    TaskUpdate,
)
from pickflow.models.enums import CommitStatus, TaskStatus
from pickflow.repositories import CommitRepository, TaskRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


async def _get_task_or_404(repo: TaskRepository, task_id: int) -> Task:
    task = await repo.get_by_id(task_id)
    if task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


async def _commit_list(commits: CommitRepository, task_id: int) -> list[CommitPublic]:
    return [CommitPublic.model_validate(c) for c in await commits.list_for_task(task_id)]


async def _sync_task_completion(
    tasks: TaskRepository, commits: CommitRepository, task_id: int
) -> None:
    """Complete the task when every commit is pushed, otherwise reopen it."""
    task = await tasks.get_by_id(task_id)
    if task is None:
        return
    if await commits.all_pushed(task_id):
        if task.status != TaskStatus.COMPLETED:
            await tasks.set_status(task_id, TaskStatus.COMPLETED)
            logger.info(f"Task {task_id} completed: all commits pushed")
    elif task.status == TaskStatus.COMPLETED:
        await tasks.set_status(task_id, TaskStatus.IN_PROGRESS)


# =============================================================================
# Task Endpoints
# =============================================================================


@router.get("", response_model=list[TaskSummary], summary="List tasks")
async def list_tasks(db: DbSession) -> list[TaskSummary]:
    """List tasks, newest first, with total and pushed commit counts."""
    rows = await TaskRepository(db).list_with_counts()
    return [
        TaskSummary.model_validate(task).model_copy(
            update={"commit_count": total, "completed_commits": pushed}
        )
        for task, total, pushed in rows
    ]


@router.get("/{task_id}", response_model=TaskDetail, summary="Get a task with its commits")
async def get_task(task_id: int, db: DbSession) -> TaskDetail:
    task = await TaskRepository(db).get_with_commits(task_id)
    if task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return TaskDetail.model_validate(task)


@router.post(
    "",
    response_model=TaskPublic,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
)
async def create_task(request: TaskCreate, db: DbSession) -> TaskPublic:
    task = await TaskRepository(db).create_task(
        name=request.name,
        description=request.description,
        directory=request.directory,
        branch_name=request.branch_name,
    )
    await db.commit()
    return TaskPublic.model_validate(task)


@router.put("/{task_id}", response_model=TaskPublic, summary="Update a task")
async def update_task(task_id: int, request: TaskUpdate, db: DbSession) -> TaskPublic:
    """Partial update. A task can only be completed once all its commits are pushed."""
    repo = TaskRepository(db)
    task = await _get_task_or_404(repo, task_id)
    if request.status == TaskStatus.COMPLETED and not await CommitRepository(db).all_pushed(
        task_id
    ):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Task has commits that are not pushed",
        )
    task = await repo.update_task(task, **request.model_dump(exclude_unset=True))
    await db.commit()
    return TaskPublic.model_validate(task)


@router.delete("/{task_id}", response_model=MessageResponse, summary="Delete a task")
async def delete_task(task_id: int, db: DbSession) -> MessageResponse:
    """Delete a task; its commits go with it."""
    repo = TaskRepository(db)
    task = await _get_task_or_404(repo, task_id)
    await repo.delete(task)
    await db.commit()
    logger.info(f"Deleted task {task_id}")
    return MessageResponse(message="Task deleted successfully")


# =============================================================================
# Commit Endpoints
# =============================================================================


@router.post(
    "/{task_id}/commits",
    response_model=list[CommitPublic],
    status_code=status.HTTP_201_CREATED,
    summary="Attach a commit to a task",
)
async def add_commit(task_id: int, request: CommitCreate, db: DbSession) -> list[CommitPublic]:
    """
    Attach a commit hash to a task in `pending` status.

    A completed task is reopened, so it completes again only after the new
    commit is pushed too.
    """
    tasks = TaskRepository(db)
    commits = CommitRepository(db)
    task = await _get_task_or_404(tasks, task_id)

    if await commits.find_in_task(task_id, request.commit_hash) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Commit already exists")

    await commits.add_to_task(task_id, request.commit_hash, request.commit_message)
    if task.status == TaskStatus.COMPLETED:
        await tasks.set_status(task_id, TaskStatus.IN_PROGRESS)
    await db.commit()
    return await _commit_list(commits, task_id)


@router.put(
    "/{task_id}/commits/{commit_id}",
    response_model=list[CommitPublic],
    summary="Set a commit's status",
)
async def update_commit_status(
    task_id: int,
    commit_id: int,
    request: CommitStatusUpdate,
    db: DbSession,
) -> list[CommitPublic]:
    commits = CommitRepository(db)
    commit = await commits.get_by_id(commit_id)
    if commit is None or commit.task_id != task_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Commit not found")

    await commits.set_status(commit_id, request.status)
    await _sync_task_completion(TaskRepository(db), commits, task_id)
    await db.commit()
    return await _commit_list(commits, task_id)


@router.delete(
    "/{task_id}/commits/{commit_id}",
    response_model=list[CommitPublic],
    summary="Remove a commit from a task",
)
async def delete_commit(task_id: int, commit_id: int, db: DbSession) -> list[CommitPublic]:
    """Remove a commit that has not been pushed yet."""
    await _get_task_or_404(TaskRepository(db), task_id)
    commits = CommitRepository(db)
    commit = await commits.get_by_id(commit_id)
    if commit is None or commit.task_id != task_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Commit not found")
    if commit.status == CommitStatus.PUSHED:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Pushed commits cannot be deleted",
        )

    await commits.delete(commit)
    await db.commit()
    return await _commit_list(commits, task_id)
