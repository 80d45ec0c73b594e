"""
Task and commit contract models for Pickflow.
"""

from datetime import datetime

from pydantic import Field, field_serializer

from pickflow.models.contracts.base import ApiModel
from pickflow.models.enums import CommitStatus, TaskStatus


# ==================== COMMIT MODELS ====================


class CommitCreate(ApiModel):
    """Input for attaching a git commit to a task."""
    commit_hash: str = Field(..., min_length=1)
    commit_message: str = ""


class CommitStatusUpdate(ApiModel):
    """Input for setting a commit's status directly."""
    status: CommitStatus


class CommitPublic(ApiModel):
    """Commit output for API responses."""
    id: int
    task_id: int
    commit_hash: str
    commit_message: str | None = None
    commit_date: str | None = None
    status: CommitStatus
    created_at: datetime | None = None

    @field_serializer("created_at")
    def serialize_dt(self, dt: datetime | None) -> str | None:
        return dt.isoformat() if dt else None


# ==================== TASK MODELS ====================


class TaskCreate(ApiModel):
    """Input for creating a task."""
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    directory: str = Field(..., min_length=1)
    branch_name: str = Field(..., min_length=1, max_length=255)


class TaskUpdate(ApiModel):
    """Input for updating a task (all fields optional)."""
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    directory: str | None = Field(None, min_length=1)
    branch_name: str | None = Field(None, min_length=1, max_length=255)
    status: TaskStatus | None = None


class TaskPublic(ApiModel):
    """Task output for API responses."""
    id: int
    name: str
    description: str | None = None
    directory: str
    branch_name: str
    status: TaskStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_serializer("created_at", "updated_at")
    def serialize_dt(self, dt: datetime | None) -> str | None:
        return dt.isoformat() if dt else None


class TaskSummary(TaskPublic):
    """Task list entry with commit counters."""
    commit_count: int = 0
    completed_commits: int = 0


class TaskDetail(TaskPublic):
    """Task with its commits, newest first."""
    commits: list[CommitPublic] = Field(default_factory=list)
