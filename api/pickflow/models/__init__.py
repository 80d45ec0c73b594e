"""
Pickflow Models

ORM models (database tables):
    from pickflow.models import Task, Commit, GitRepo
    from pickflow.models.orm.tasks import Task  # Granular access

Pydantic contracts (API request/response):
    from pickflow.models import TaskCreate, TaskPublic
    from pickflow.models.contracts.tasks import TaskCreate  # Granular access

Enums:
    from pickflow.models import CommitStatus
    from pickflow.models.enums import CommitStatus
"""

# ORM models (database tables)
from pickflow.models.orm import (
    Base,
    Commit,
    GitRepo,
    Task,
)

# Enums
from pickflow.models.enums import CommitStatus, TaskStatus

# Pydantic contracts
from pickflow.models.contracts import *  # noqa: F401,F403
from pickflow.models.contracts import __all__ as _contracts_all

__all__ = [
    # ORM
    "Base",
    "GitRepo",
    "Task",
    "Commit",
    # Enums
    "CommitStatus",
    "TaskStatus",
] + list(_contracts_all)
