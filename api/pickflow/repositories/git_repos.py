"""
GitRepo Repository

Database operations for the registry of local git working directories.
"""

import logging
from datetime import datetime

from sqlalchemy import func, select, update

from pickflow.models import GitRepo
from pickflow.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class GitRepoRepository(BaseRepository[GitRepo]):
    """Repository for registered working directories."""

    model = GitRepo

    async def list_all(self) -> list[GitRepo]:
        """List repositories, newest first."""
        result = await self.session.execute(
            select(self.model).order_by(self.model.created_at.desc(), self.model.id.desc())
        )
        return list(result.scalars().all())

    async def get_active(self) -> GitRepo | None:
        """Get the active repository, if any."""
        return await self.get(is_active=True)

    async def get_by_path(self, path: str) -> GitRepo | None:
        """Get a repository by its unique path."""
        return await self.get(path=path)

    async def count(self) -> int:
        result = await self.session.execute(select(func.count(self.model.id)))
        return result.scalar() or 0

    async def create_repo(self, name: str, path: str) -> GitRepo:
        """
        Register a repository.

        The first repository ever registered becomes the active one.
        """
        is_first = await self.count() == 0
        repo = await self.create(GitRepo(name=name, path=path, is_active=is_first))
        logger.info(f"Registered repository {name} at {path} (active={is_first})")
        return repo

    async def set_active(self, repo: GitRepo) -> GitRepo:
        """
        Make one repository the active one.

        Clears every flag, then sets the target's, in the caller's
        transaction so the single-active invariant holds at commit.
        """
        await self.session.execute(
            update(self.model)
            .where(self.model.is_active.is_(True))
            .values(is_active=False)
        )
        await self.session.execute(
            update(self.model)
            .where(self.model.id == repo.id)
            .values(is_active=True, updated_at=datetime.utcnow())
        )
        await self.session.flush()
        await self.session.refresh(repo)
        return repo
