"""
Scripted stand-in for GitCommandExecutor.

Results are queued per git subcommand (the first argument, or the first two
for `cherry-pick --continue` style calls) and every invocation is recorded,
so tests can assert on the exact command sequence a workflow produced.
"""

from collections import defaultdict, deque
from typing import Sequence

from pickflow.services.git_executor import GitCommandExecutor, GitCommandResult


def ok(stdout: str = "", stderr: str = "") -> GitCommandResult:
    return GitCommandResult(stdout=stdout, stderr=stderr, success=True)


def fail(stderr: str = "", stdout: str = "") -> GitCommandResult:
    return GitCommandResult(stdout=stdout, stderr=stderr, success=False)


class ScriptedGitExecutor(GitCommandExecutor):
    """Returns queued results instead of spawning git."""

    def __init__(self) -> None:
        super().__init__(binary="git", extra_path="")
        self.calls: list[dict] = []
        self._scripts: dict[str, deque[GitCommandResult]] = defaultdict(deque)

    @staticmethod
    def _key(args: Sequence[str]) -> str:
        if len(args) > 1 and args[1].startswith("--") and args[0] in ("cherry-pick", "branch"):
            return f"{args[0]} {args[1]}"
        return args[0]

    def script(self, command: str, *results: GitCommandResult) -> "ScriptedGitExecutor":
        """Queue results for a subcommand, e.g. ``script("push", ok())``."""
        self._scripts[command].extend(results)
        return self

    @property
    def commands(self) -> list[list[str]]:
        return [call["args"] for call in self.calls]

    async def run(
        self,
        args: Sequence[str],
        cwd: str,
        env: dict[str, str] | None = None,
    ) -> GitCommandResult:
        self.calls.append({"args": list(args), "cwd": cwd, "env": env})
        queue = self._scripts.get(self._key(args))
        if queue:
            return queue.popleft()
        return ok()
