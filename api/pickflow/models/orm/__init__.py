"""
SQLAlchemy ORM Models for Pickflow

Pure database models using SQLAlchemy 2.0 declarative style.
These models define the database schema and relationships.

For API schemas (Create/Update/Public), see pickflow.models.contracts
"""

from pickflow.models.orm.base import Base
from pickflow.models.orm.repositories import GitRepo
from pickflow.models.orm.tasks import Commit, Task

__all__ = [
    # Base
    "Base",
    # Repositories
    "GitRepo",
    # Tasks
    "Task",
    "Commit",
]
