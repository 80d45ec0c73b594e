"""Create repositories, tasks and commits tables

Revision ID: initial_schema
Revises:
Create Date: 2026-10-17

Status columns are plain strings (non-native enums) so new states need no
type migration.
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "repositories",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("path", sa.Text(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("NOW()")),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.text("NOW()")),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("path", name="uq_repositories_path"),
    )
    op.create_index("ix_repositories_is_active", "repositories", ["is_active"])

    op.create_table(
        "tasks",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("directory", sa.Text(), nullable=False),
        sa.Column("branch_name", sa.String(255), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("NOW()")),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.text("NOW()")),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_tasks_directory", "tasks", ["directory"])
    op.create_index("ix_tasks_status", "tasks", ["status"])

    op.create_table(
        "commits",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("task_id", sa.Integer(), nullable=False),
        sa.Column("commit_hash", sa.String(64), nullable=False),
        sa.Column("commit_message", sa.Text(), nullable=True),
        sa.Column("commit_date", sa.String(64), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("NOW()")),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["task_id"], ["tasks.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_commits_task_id", "commits", ["task_id"])
    op.create_index("ix_commits_status", "commits", ["status"])


def downgrade() -> None:
    op.drop_index("ix_commits_status", table_name="commits")
    op.drop_index("ix_commits_task_id", table_name="commits")
    op.drop_table("commits")
    op.drop_index("ix_tasks_status", table_name="tasks")
    op.drop_index("ix_tasks_directory", table_name="tasks")
    op.drop_table("tasks")
    op.drop_index("ix_repositories_is_active", table_name="repositories")
    op.drop_table("repositories")
