"""
Push Workflow

Pushes a task branch to origin and records the result: the pushed commit
becomes `pushed`, and the task becomes `completed` once every one of its
commits is pushed.
"""

import logging

from fastapi import status

from pickflow.models.contracts import GitOperationResponse
from pickflow.models.enums import CommitStatus, TaskStatus
from pickflow.services.git_output import is_push_successful
from pickflow.services.git_workflow import GitWorkflow, WorkflowResult, ensure_branch

logger = logging.getLogger(__name__)


class PushWorkflow(GitWorkflow):
    """Push controller."""

    async def push(
        self,
        branch_name: str,
        directory: str,
        task_id: int | None = None,
        commit_id: int | None = None,
    ) -> WorkflowResult:
        """
        Push ``branch_name`` to origin with upstream tracking.

        Raises:
            GitPreconditionError: branch lookup or checkout failed
        """
        async with self.locks.hold(directory, f"push {branch_name}"):
            await ensure_branch(self.executor, directory, branch_name)

            remote = await self.executor.run(["remote", "get-url", "origin"], directory)
            remote_url = remote.stdout if remote.success else ""

            result = await self.executor.run(["push", "-u", "origin", branch_name], directory)
            if not is_push_successful(result, remote_url):
                logger.warning(f"Push of {branch_name} from {directory} rejected: {result.stderr}")
                return WorkflowResult(
                    status.HTTP_500_INTERNAL_SERVER_ERROR,
                    GitOperationResponse(
                        success=False,
                        error=f"Push failed: {result.stderr}",
                    ),
                )

            if commit_id is not None or task_id is not None:
                await self._persist(
                    self._record_push(task_id, commit_id),
                    f"push of {branch_name}",
                )

            message = "Commit push successful" if commit_id is not None else "Push successful"
            return WorkflowResult(
                status.HTTP_200_OK,
                GitOperationResponse(success=True, message=message, output=result.stdout),
            )

    async def _record_push(self, task_id: int | None, commit_id: int | None) -> None:
        if commit_id is not None:
            commit = await self._set_commit_status(task_id, commit_id, CommitStatus.PUSHED)
            if commit is not None and task_id is None:
                task_id = commit.task_id

        if task_id is None:
            return

        if await self.commits.all_pushed(task_id):
            await self.tasks.set_status(task_id, TaskStatus.COMPLETED)
            logger.info(f"Task {task_id} completed: all commits pushed")
