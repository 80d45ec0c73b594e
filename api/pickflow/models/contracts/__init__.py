"""
Pydantic contracts (API request/response models).
"""

from pickflow.models.contracts.base import ApiModel, MessageResponse
from pickflow.models.contracts.git import (
    CherryPickControlRequest,
    CherryPickRequest,
    CherryPickResponse,
    ConflictStatusResponse,
    CurrentBranchResponse,
    GitBranchesResponse,
    GitCommitsResponse,
    GitCommitSummary,
    GitOperationResponse,
    GitStatusResponse,
    PushCommitRequest,
    PushRequest,
)
from pickflow.models.contracts.repositories import (
    RepositoryCreate,
    RepositoryPublic,
    RepositoryValidateRequest,
    RepositoryValidationResponse,
)
from pickflow.models.contracts.tasks import (
    CommitCreate,
    CommitPublic,
    CommitStatusUpdate,
    TaskCreate,
    TaskDetail,
    TaskPublic,
    TaskSummary,
    TaskUpdate,
)

__all__ = [
    # Base
    "ApiModel",
    "MessageResponse",
    # Git
    "GitStatusResponse",
    "GitBranchesResponse",
    "GitCommitSummary",
    "GitCommitsResponse",
    "CurrentBranchResponse",
    "CherryPickRequest",
    "CherryPickResponse",
    "CherryPickControlRequest",
    "GitOperationResponse",
    "ConflictStatusResponse",
    "PushRequest",
    "PushCommitRequest",
    # Repositories
    "RepositoryCreate",
    "RepositoryValidateRequest",
    "RepositoryValidationResponse",
    "RepositoryPublic",
    # Tasks
    "CommitCreate",
    "CommitStatusUpdate",
    "CommitPublic",
    "TaskCreate",
    "TaskUpdate",
    "TaskPublic",
    "TaskSummary",
    "TaskDetail",
]
