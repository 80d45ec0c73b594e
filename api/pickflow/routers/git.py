"""
Git Router

Git operations on a caller-supplied working directory: read-only listings,
the cherry-pick/conflict workflow, and pushing task branches.

Every endpoint requires an explicit ``directory``; there is no fallback to
the process cwd or to the active repository.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from pickflow.core.database import DbSession
from pickflow.core.exceptions import GitPreconditionError
from pickflow.models.contracts import (
    CherryPickControlRequest,
    CherryPickRequest,
    CherryPickResponse,
    ConflictStatusResponse,
    CurrentBranchResponse,
    GitBranchesResponse,
    GitCommitsResponse,
    GitOperationResponse,
    GitStatusResponse,
    PushCommitRequest,
    PushRequest,
)
from pickflow.services.cherry_pick import CherryPickWorkflow
from pickflow.services.git_executor import GitExecutor
from pickflow.services.git_queries import GitQueryService
from pickflow.services.git_workflow import WorkflowResult
from pickflow.services.push import PushWorkflow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/git", tags=["Git"])


Directory = Annotated[str, Query(min_length=1, description="Git working directory")]


# =============================================================================
# Helper Functions
# =============================================================================


def _respond(result: WorkflowResult) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.content())


def _precondition_failed(e: GitPreconditionError) -> JSONResponse:
    logger.warning(f"Git precondition failed: {e.message}")
    body = GitOperationResponse(success=False, error=e.message)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


# =============================================================================
# Read-only Endpoints
# =============================================================================


@router.get("/status", response_model=GitStatusResponse, summary="Porcelain status")
async def get_status(directory: Directory, executor: GitExecutor) -> GitStatusResponse:
    return await GitQueryService(executor).status(directory)


@router.get("/branches", response_model=GitBranchesResponse, summary="List branches")
async def get_branches(directory: Directory, executor: GitExecutor) -> GitBranchesResponse:
    return await GitQueryService(executor).branches(directory)


@router.get("/commits", response_model=GitCommitsResponse, summary="Recent commits")
async def get_commits(
    directory: Directory,
    executor: GitExecutor,
    limit: int = Query(default=20, ge=1, le=500, description="Number of commits"),
) -> GitCommitsResponse:
    return await GitQueryService(executor).commits(directory, limit)


@router.get(
    "/current-branch",
    response_model=CurrentBranchResponse,
    summary="Checked-out branch",
)
async def get_current_branch(directory: Directory, executor: GitExecutor) -> CurrentBranchResponse:
    return await GitQueryService(executor).current_branch(directory)


@router.get(
    "/conflict-status",
    response_model=ConflictStatusResponse,
    summary="Diagnose an in-progress cherry-pick",
    description="Parses `git status` to describe conflicts. Never mutates anything.",
)
async def get_conflict_status(
    directory: Directory,
    db: DbSession,
    executor: GitExecutor,
) -> JSONResponse:
    return _respond(await CherryPickWorkflow(db, executor).conflict_status(directory))


# =============================================================================
# Cherry-pick Workflow
# =============================================================================


@router.post(
    "/cherry-pick",
    response_model=CherryPickResponse,
    summary="Cherry-pick a commit onto a branch",
    responses={
        409: {"model": CherryPickResponse, "description": "Local changes would be overwritten"},
        500: {"model": CherryPickResponse, "description": "Cherry-pick failed"},
    },
)
async def cherry_pick(
    request: CherryPickRequest,
    db: DbSession,
    executor: GitExecutor,
) -> JSONResponse:
    """
    Cherry-pick ``commitHash`` onto ``branchName``.

    Conflicts are reported as success with ``hasConflict`` set and the
    commit moved to `conflict`; a clean apply moves it to `ready_to_push`.
    """
    workflow = CherryPickWorkflow(db, executor)
    try:
        result = await workflow.cherry_pick(
            commit_hash=request.commit_hash,
            branch_name=request.branch_name,
            directory=request.directory,
            task_id=request.task_id,
            commit_id=request.commit_id,
        )
    except GitPreconditionError as e:
        return _precondition_failed(e)
    return _respond(result)


@router.post(
    "/cherry-pick-continue",
    response_model=GitOperationResponse,
    summary="Continue a cherry-pick after resolving conflicts",
)
async def cherry_pick_continue(
    request: CherryPickControlRequest,
    db: DbSession,
    executor: GitExecutor,
) -> JSONResponse:
    workflow = CherryPickWorkflow(db, executor)
    return _respond(
        await workflow.continue_cherry_pick(
            request.directory, task_id=request.task_id, commit_id=request.commit_id
        )
    )


@router.post(
    "/cherry-pick-abort",
    response_model=GitOperationResponse,
    summary="Abort an in-progress cherry-pick",
)
async def cherry_pick_abort(
    request: CherryPickControlRequest,
    db: DbSession,
    executor: GitExecutor,
) -> JSONResponse:
    workflow = CherryPickWorkflow(db, executor)
    return _respond(
        await workflow.abort_cherry_pick(
            request.directory, task_id=request.task_id, commit_id=request.commit_id
        )
    )


# =============================================================================
# Push Workflow
# =============================================================================


@router.post("/push", response_model=GitOperationResponse, summary="Push a branch to origin")
async def push(
    request: PushRequest,
    db: DbSession,
    executor: GitExecutor,
) -> JSONResponse:
    workflow = PushWorkflow(db, executor)
    try:
        result = await workflow.push(
            request.branch_name, request.directory, task_id=request.task_id
        )
    except GitPreconditionError as e:
        return _precondition_failed(e)
    return _respond(result)


@router.post(
    "/push-commit",
    response_model=GitOperationResponse,
    summary="Push a branch and mark one tracked commit pushed",
)
async def push_commit(
    request: PushCommitRequest,
    db: DbSession,
    executor: GitExecutor,
) -> JSONResponse:
    workflow = PushWorkflow(db, executor)
    try:
        result = await workflow.push(
            request.branch_name,
            request.directory,
            task_id=request.task_id,
            commit_id=request.commit_id,
        )
    except GitPreconditionError as e:
        return _precondition_failed(e)
    return _respond(result)
