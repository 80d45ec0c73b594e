"""
Git Command Executor

Runs the git binary as a subprocess in a caller-supplied working directory.

A non-zero exit is never raised: git's exit code and stderr text are the
only signals separating "nothing to do", "conflict" and "real failure", so
they are returned as data for the workflow controllers to classify. There
are no retries and no timeout.
"""

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Annotated, Sequence

from fastapi import Depends

from pickflow.config import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GitCommandResult:
    """Captured result of one git invocation."""

    stdout: str
    stderr: str
    success: bool


class GitCommandExecutor:
    """
    Spawns git and captures its output.

    Side effect: whatever the git command does to the working directory
    (HEAD, index, working tree).
    """

    def __init__(self, binary: str | None = None, extra_path: str | None = None):
        settings = get_settings()
        self.binary = binary or settings.git_binary
        self.extra_path = settings.git_extra_path if extra_path is None else extra_path

    def _env(self, overrides: dict[str, str] | None) -> dict[str, str]:
        env = dict(os.environ)
        if self.extra_path:
            path = env.get("PATH", "")
            env["PATH"] = f"{path}:{self.extra_path}" if path else self.extra_path
        if overrides:
            env.update(overrides)
        return env

    async def run(
        self,
        args: Sequence[str],
        cwd: str,
        env: dict[str, str] | None = None,
    ) -> GitCommandResult:
        """
        Run ``git <args>`` in ``cwd`` to completion.

        Args:
            args: Arguments after the binary name
            cwd: Working directory to run in
            env: Extra environment variables for this invocation

        Returns:
            GitCommandResult with trimmed output; success is exactly
            "exit code is zero"
        """
        argv = [self.binary, *args]
        logger.debug(f"Running {' '.join(argv)} in {cwd}")

        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                cwd=cwd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=self._env(env),
            )
            stdout, stderr = await proc.communicate()
        except OSError as e:
            # Missing binary or unusable cwd
            logger.warning(f"Failed to spawn {argv[0]} in {cwd}: {e}")
            return GitCommandResult(
                stdout="",
                stderr=f"Failed to execute git command: {e}",
                success=False,
            )

        result = GitCommandResult(
            stdout=stdout.decode("utf-8", errors="replace").strip(),
            stderr=stderr.decode("utf-8", errors="replace").strip(),
            success=proc.returncode == 0,
        )
        if not result.success:
            logger.info(
                f"git {' '.join(args)} exited {proc.returncode} in {cwd}: {result.stderr}"
            )
        return result


def get_git_executor() -> GitCommandExecutor:
    """FastAPI dependency for the git executor (overridden in tests)."""
    return GitCommandExecutor()


GitExecutor = Annotated[GitCommandExecutor, Depends(get_git_executor)]
