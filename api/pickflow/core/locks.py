"""
Working Directory Lock Service

Serializes mutating git workflows that target the same working directory.

Git's index and working tree are shared, process-wide state with no locking
of their own, so two cherry-picks against one checkout can interleave. Locks
here are in-process asyncio locks keyed by the resolved directory path; they
do not coordinate across multiple server processes.

Lock Flow:
1. Workflow resolves the directory to an absolute path
2. Acquires that directory's lock (waits if another request holds it)
3. Runs its subprocess chain and status updates
4. Releases the lock on completion (success or failure)
"""

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

logger = logging.getLogger(__name__)


class DirectoryLockService:
    """
    Registry of per-directory asyncio locks.

    Provides:
    - Exclusive access to one working directory at a time
    - Independent locks for different directories
    - Lock status inspection without acquiring
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}

    @staticmethod
    def _key(directory: str) -> str:
        return os.path.realpath(os.path.abspath(directory))

    def _get_lock(self, directory: str) -> asyncio.Lock:
        key = self._key(directory)
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    def is_locked(self, directory: str) -> bool:
        """Check whether a workflow currently holds the directory."""
        lock = self._locks.get(self._key(directory))
        return lock is not None and lock.locked()

    @asynccontextmanager
    async def hold(self, directory: str, operation: str) -> AsyncIterator[None]:
        """
        Hold the lock for a directory for the duration of the block.

        Args:
            directory: Working directory the operation mutates
            operation: Description of the operation, for logging
        """
        lock = self._get_lock(directory)
        if lock.locked():
            logger.info(f"Waiting for lock on {directory} ({operation})")
        async with lock:
            logger.debug(f"Lock acquired: {directory} ({operation})")
            try:
                yield
            finally:
                logger.debug(f"Lock released: {directory} ({operation})")


directory_locks = DirectoryLockService()
