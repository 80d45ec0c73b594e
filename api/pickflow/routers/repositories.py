"""
Repositories Router

Registry of local git working directories. At most one repository is active
at a time; the first one registered becomes active automatically.
"""

import logging

from fastapi import APIRouter, HTTPException, status

from pickflow.core.database import DbSession
from pickflow.models import GitRepo
from pickflow.models.contracts import (
    MessageResponse,
    RepositoryCreate,
    RepositoryPublic,
    RepositoryValidateRequest,
    RepositoryValidationResponse,
)
from pickflow.repositories import GitRepoRepository
from pickflow.services.git_executor import GitExecutor
from pickflow.services.repo_validation import validate_git_repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/repositories", tags=["Repositories"])


async def _get_repo_or_404(repo: GitRepoRepository, repo_id: int) -> GitRepo:
    entity = await repo.get_by_id(repo_id)
    if entity is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Repository not found")
    return entity


@router.get("", response_model=list[RepositoryPublic], summary="List repositories")
async def list_repositories(db: DbSession) -> list[RepositoryPublic]:
    repos = await GitRepoRepository(db).list_all()
    return [RepositoryPublic.model_validate(r) for r in repos]


@router.get("/active", response_model=RepositoryPublic, summary="Get the active repository")
async def get_active_repository(db: DbSession) -> RepositoryPublic:
    active = await GitRepoRepository(db).get_active()
    if active is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="No active repository found"
        )
    return RepositoryPublic.model_validate(active)


@router.post(
    "/validate",
    response_model=RepositoryValidationResponse,
    summary="Check that a path is a git working directory",
)
async def validate_repository(
    request: RepositoryValidateRequest,
    executor: GitExecutor,
) -> RepositoryValidationResponse:
    verdict = await validate_git_repository(request.path, executor)
    return RepositoryValidationResponse(valid=verdict.valid, error=verdict.error)


@router.post(
    "",
    response_model=RepositoryPublic,
    status_code=status.HTTP_201_CREATED,
    summary="Register a repository",
)
async def create_repository(
    request: RepositoryCreate,
    db: DbSession,
    executor: GitExecutor,
) -> RepositoryPublic:
    """Validate ``path`` and register it under ``name``."""
    verdict = await validate_git_repository(request.path, executor)
    if not verdict.valid:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=verdict.error)

    repo = GitRepoRepository(db)
    if await repo.get_by_path(request.path) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Repository with this path already exists",
        )

    entity = await repo.create_repo(name=request.name, path=request.path)
    await db.commit()
    return RepositoryPublic.model_validate(entity)


@router.post(
    "/{repo_id}/activate",
    response_model=RepositoryPublic,
    summary="Make a repository the active one",
)
async def activate_repository(repo_id: int, db: DbSession) -> RepositoryPublic:
    repo = GitRepoRepository(db)
    entity = await _get_repo_or_404(repo, repo_id)
    entity = await repo.set_active(entity)
    await db.commit()
    logger.info(f"Activated repository {entity.name} ({entity.path})")
    return RepositoryPublic.model_validate(entity)


@router.delete("/{repo_id}", response_model=MessageResponse, summary="Remove a repository")
async def delete_repository(repo_id: int, db: DbSession) -> MessageResponse:
    """Unregister a repository. Files on disk are untouched."""
    repo = GitRepoRepository(db)
    entity = await _get_repo_or_404(repo, repo_id)
    await repo.delete(entity)
    await db.commit()
    return MessageResponse(message="Repository deleted successfully")
