"""
Git workflow contract models for Pickflow.
"""

from pydantic import Field

from pickflow.models.contracts.base import ApiModel


# ==================== READ-ONLY GIT QUERIES ====================


class GitStatusResponse(ApiModel):
    """Porcelain status of a working directory"""
    success: bool
    output: str = Field(default="", description="`git status --porcelain` stdout")
    error: str = Field(default="", description="stderr from git")


class GitBranchesResponse(ApiModel):
    """Local and remote branches of a working directory"""
    success: bool
    branches: list[str] = Field(default_factory=list)
    error: str = ""


class GitCommitSummary(ApiModel):
    """One line of `git log --oneline`"""
    hash: str
    message: str


class GitCommitsResponse(ApiModel):
    """Recent commits of a working directory"""
    success: bool
    commits: list[GitCommitSummary] = Field(default_factory=list)
    error: str = ""


class CurrentBranchResponse(ApiModel):
    """Branch currently checked out in a working directory"""
    success: bool
    branch: str = ""
    error: str = ""


# ==================== CHERRY-PICK WORKFLOW ====================


class CherryPickRequest(ApiModel):
    """Request to cherry-pick one commit onto a branch"""
    commit_hash: str = Field(..., min_length=1, description="Commit to apply")
    branch_name: str = Field(..., min_length=1, description="Branch to apply it on")
    directory: str = Field(..., min_length=1, description="Working directory")
    task_id: int | None = Field(None, description="Task owning the commit row")
    commit_id: int | None = Field(None, description="Commit row to update")


class CherryPickResponse(ApiModel):
    """Outcome of a cherry-pick"""
    success: bool
    message: str | None = None
    error: str | None = None
    output: str | None = None
    has_conflict: bool | None = None
    conflict_message: str | None = None
    hint: str | None = None


class CherryPickControlRequest(ApiModel):
    """Request to continue or abort an in-progress cherry-pick"""
    directory: str = Field(..., min_length=1, description="Working directory")
    task_id: int | None = None
    commit_id: int | None = None


class GitOperationResponse(ApiModel):
    """Outcome of a mutating git operation"""
    success: bool
    message: str | None = None
    error: str | None = None
    output: str | None = None


class ConflictStatusResponse(ApiModel):
    """Read-only diagnosis of an in-progress cherry-pick"""
    success: bool = True
    cherry_pick_in_progress: bool = False
    has_unmerged_paths: bool = False
    has_conflicts: bool = False
    all_conflicts_fixed: bool = False
    conflicted_files: list[str] = Field(default_factory=list)
    current_commit: str = ""
    current_branch: str = ""
    status_message: str = ""
    detailed_message: str = ""
    user_action: str = ""
    formatted_status_output: str = ""
    can_continue: bool = False
    needs_resolution: bool = False
    raw_status_output: str = ""


# ==================== PUSH WORKFLOW ====================


class PushRequest(ApiModel):
    """Request to push a branch to origin"""
    branch_name: str = Field(..., min_length=1)
    directory: str = Field(..., min_length=1)
    task_id: int | None = None


class PushCommitRequest(ApiModel):
    """Request to push a branch on behalf of one tracked commit"""
    commit_hash: str = Field(..., min_length=1)
    branch_name: str = Field(..., min_length=1)
    directory: str = Field(..., min_length=1)
    task_id: int | None = None
    commit_id: int = Field(..., description="Commit row to mark pushed")
