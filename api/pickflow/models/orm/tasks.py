"""
Task and Commit ORM models.

A Task groups the commits that must be cherry-picked onto one branch of one
working directory. Commits are deleted together with their task.
"""

from datetime import datetime

from sqlalchemy import DateTime, Enum as SQLAlchemyEnum, ForeignKey, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pickflow.models.enums import CommitStatus, TaskStatus
from pickflow.models.orm.base import Base


class Task(Base):
    """Task database table."""

    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", server_default="")
    directory: Mapped[str] = mapped_column(Text, nullable=False)
    branch_name: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[TaskStatus] = mapped_column(
        SQLAlchemyEnum(
            TaskStatus,
            name="task_status",
            native_enum=False,
            length=20,
            values_callable=lambda x: [e.value for e in x],
        ),
        default=TaskStatus.PENDING,
        server_default=TaskStatus.PENDING.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, server_default=text("NOW()")
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        server_default=text("NOW()"),
        onupdate=datetime.utcnow,
    )

    # Relationships
    commits: Mapped[list["Commit"]] = relationship(
        back_populates="task",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Commit.created_at.desc()",
    )

    __table_args__ = (
        Index("ix_tasks_directory", "directory"),
        Index("ix_tasks_status", "status"),
    )


class Commit(Base):
    """Commit attached to a task.

    Uniqueness of (task_id, commit_hash) is checked by CommitRepository
    before insert rather than by a constraint.
    """

    __tablename__ = "commits"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    task_id: Mapped[int] = mapped_column(ForeignKey("tasks.id", ondelete="CASCADE"))
    commit_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    commit_message: Mapped[str | None] = mapped_column(Text, default=None)
    commit_date: Mapped[str | None] = mapped_column(String(64), default=None)
    status: Mapped[CommitStatus] = mapped_column(
        SQLAlchemyEnum(
            CommitStatus,
            name="commit_status",
            native_enum=False,
            length=20,
            values_callable=lambda x: [e.value for e in x],
        ),
        default=CommitStatus.PENDING,
        server_default=CommitStatus.PENDING.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, server_default=text("NOW()")
    )

    # Relationships
    task: Mapped["Task"] = relationship(back_populates="commits")

    __table_args__ = (
        Index("ix_commits_task_id", "task_id"),
        Index("ix_commits_status", "status"),
    )
