"""
Enumeration types used across the application.
"""

from enum import Enum


class TaskStatus(str, Enum):
    """Task lifecycle status"""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class CommitStatus(str, Enum):
    """Commit lifecycle status within a task"""
    PENDING = "pending"
    READY_TO_PUSH = "ready_to_push"
    CONFLICT = "conflict"
    PUSHED = "pushed"
