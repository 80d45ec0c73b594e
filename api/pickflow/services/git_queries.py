"""
Read-only git queries used by the git router.
"""

from pickflow.models.contracts import (
    CurrentBranchResponse,
    GitBranchesResponse,
    GitCommitsResponse,
    GitCommitSummary,
    GitStatusResponse,
)
from pickflow.services.git_executor import GitCommandExecutor
from pickflow.services.git_output import parse_branches, parse_oneline_log


class GitQueryService:
    """Status, branch and log listings for a working directory."""

    def __init__(self, executor: GitCommandExecutor | None = None):
        self.executor = executor or GitCommandExecutor()

    async def status(self, directory: str) -> GitStatusResponse:
        result = await self.executor.run(["status", "--porcelain"], directory)
        return GitStatusResponse(
            success=result.success, output=result.stdout, error=result.stderr
        )

    async def branches(self, directory: str) -> GitBranchesResponse:
        result = await self.executor.run(["branch", "-a"], directory)
        return GitBranchesResponse(
            success=result.success,
            branches=parse_branches(result.stdout),
            error=result.stderr,
        )

    async def commits(self, directory: str, limit: int = 20) -> GitCommitsResponse:
        result = await self.executor.run(["log", "--oneline", f"-{limit}"], directory)
        return GitCommitsResponse(
            success=result.success,
            commits=[GitCommitSummary(**c) for c in parse_oneline_log(result.stdout)],
            error=result.stderr,
        )

    async def current_branch(self, directory: str) -> CurrentBranchResponse:
        result = await self.executor.run(["branch", "--show-current"], directory)
        return CurrentBranchResponse(
            success=result.success, branch=result.stdout, error=result.stderr
        )
