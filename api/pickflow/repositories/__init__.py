# Data access layer - PostgreSQL repositories
from pickflow.repositories.base import BaseRepository
from pickflow.repositories.commits import CommitRepository
from pickflow.repositories.git_repos import GitRepoRepository
from pickflow.repositories.tasks import TaskRepository

__all__ = [
    "BaseRepository",
    "CommitRepository",
    "GitRepoRepository",
    "TaskRepository",
]
