"""
Cherry-Pick Workflow

Drives one tracked commit through `git cherry-pick` and the conflict
resolution loop:

    pending --cherry-pick--> ready_to_push
    pending --cherry-pick--> conflict --continue--> ready_to_push
                             conflict --abort-----> pending

Every mutating operation holds the working directory's lock for its whole
subprocess chain.
"""

import logging

from fastapi import status

from pickflow.models.contracts import (
    CherryPickResponse,
    ConflictStatusResponse,
    GitOperationResponse,
)
from pickflow.models.enums import CommitStatus
from pickflow.services.git_output import (
    LOG_SUBJECT_DATE_FORMAT,
    CherryPickOutcome,
    classify_cherry_pick,
    parse_cherry_pick_summary,
    parse_conflict_status,
    parse_subject_and_date,
)
from pickflow.services.git_workflow import GitWorkflow, WorkflowResult, ensure_branch

logger = logging.getLogger(__name__)

CONFLICT_MESSAGE = "Cherry-pick has conflicts that need manual resolution"
CONFLICT_DETAIL = "There are conflicts, please fix them before pushing"
CONFLICT_HINT = "After resolving conflicts, you can push or delete this commit"


class CherryPickWorkflow(GitWorkflow):
    """Cherry-pick controller: apply, continue, abort and inspect."""

    async def cherry_pick(
        self,
        commit_hash: str,
        branch_name: str,
        directory: str,
        task_id: int | None = None,
        commit_id: int | None = None,
    ) -> WorkflowResult:
        """
        Apply ``commit_hash`` onto ``branch_name`` in ``directory``.

        Raises:
            GitPreconditionError: branch lookup or checkout failed
        """
        async with self.locks.hold(directory, f"cherry-pick {commit_hash}"):
            await ensure_branch(self.executor, directory, branch_name)
            result = await self.executor.run(["cherry-pick", commit_hash], directory)
            outcome = classify_cherry_pick(result)
            logger.info(f"Cherry-pick {commit_hash} onto {branch_name}: {outcome.value}")

            if outcome == CherryPickOutcome.LOCAL_CHANGES:
                return WorkflowResult(
                    status.HTTP_409_CONFLICT,
                    CherryPickResponse(
                        success=False,
                        error="Local changes conflict",
                        message=result.stderr,
                    ),
                )

            if outcome == CherryPickOutcome.CONFLICT:
                await self._persist(
                    self._record_conflict(task_id, commit_id, commit_hash, directory),
                    f"conflict status for {commit_hash}",
                )
                return WorkflowResult(
                    status.HTTP_200_OK,
                    CherryPickResponse(
                        success=True,
                        has_conflict=True,
                        message=CONFLICT_MESSAGE,
                        conflict_message=CONFLICT_DETAIL,
                        output=result.stderr,
                        hint=CONFLICT_HINT,
                    ),
                )

            if outcome == CherryPickOutcome.NOTHING_TO_COMMIT:
                # the emptied pick stays in progress until skipped
                skip = await self.executor.run(["cherry-pick", "--skip"], directory)
                if not skip.success:
                    logger.warning(f"Could not skip empty cherry-pick in {directory}: {skip.stderr}")
                return WorkflowResult(
                    status.HTTP_200_OK,
                    CherryPickResponse(
                        success=True,
                        message="Nothing to commit, cherry-pick already applied",
                        output=result.stdout,
                    ),
                )

            if outcome == CherryPickOutcome.FAILED:
                return WorkflowResult(
                    status.HTTP_500_INTERNAL_SERVER_ERROR,
                    CherryPickResponse(
                        success=False,
                        error=f"Cherry-pick failed: {result.stderr}",
                    ),
                )

            await self._persist(
                self._record_applied(task_id, commit_id, commit_hash, result.stdout),
                f"ready_to_push status for {commit_hash}",
            )
            return WorkflowResult(
                status.HTTP_200_OK,
                CherryPickResponse(
                    success=True,
                    message="Cherry-pick successful",
                    output=result.stdout,
                ),
            )

    async def _record_conflict(
        self,
        task_id: int | None,
        commit_id: int | None,
        commit_hash: str,
        directory: str,
    ) -> None:
        commit = await self._find_commit(task_id, commit_id, commit_hash)
        if commit is None:
            return

        # git's own subject and committer date replace whatever was stored
        log = await self.executor.run(
            ["log", f"--format={LOG_SUBJECT_DATE_FORMAT}", "-1", commit_hash], directory
        )
        subject, date = parse_subject_and_date(log.stdout) if log.success else ("", "")

        await self.commits.update_details(
            commit,
            commit_message=subject or commit.commit_message,
            commit_date=date or commit.commit_date,
            status=CommitStatus.CONFLICT,
        )
        await self._start_task(commit.task_id)

    async def _record_applied(
        self,
        task_id: int | None,
        commit_id: int | None,
        commit_hash: str,
        stdout: str,
    ) -> None:
        commit = await self._find_commit(task_id, commit_id, commit_hash)
        if commit is None:
            return

        subject, date = parse_cherry_pick_summary(stdout)
        await self.commits.update_details(
            commit,
            commit_message=subject or commit.commit_message,
            commit_date=date or commit.commit_date,
            status=CommitStatus.READY_TO_PUSH,
        )
        await self._start_task(commit.task_id)

    async def continue_cherry_pick(
        self,
        directory: str,
        task_id: int | None = None,
        commit_id: int | None = None,
    ) -> WorkflowResult:
        """Stage the resolved tree and finish the in-progress cherry-pick."""
        async with self.locks.hold(directory, "cherry-pick --continue"):
            add = await self.executor.run(["add", "."], directory)
            if not add.success:
                return WorkflowResult(
                    status.HTTP_500_INTERNAL_SERVER_ERROR,
                    GitOperationResponse(
                        success=False,
                        error=f"Failed to add resolved files: {add.stderr}",
                    ),
                )

            # GIT_EDITOR=true keeps the prepared message instead of opening an editor
            result = await self.executor.run(
                ["cherry-pick", "--continue"], directory, env={"GIT_EDITOR": "true"}
            )
            if not result.success:
                return WorkflowResult(
                    status.HTTP_500_INTERNAL_SERVER_ERROR,
                    GitOperationResponse(
                        success=False,
                        error=f"Failed to continue cherry-pick: {result.stderr}",
                    ),
                )

            if commit_id is not None:
                await self._persist(
                    self._set_commit_status(task_id, commit_id, CommitStatus.READY_TO_PUSH),
                    f"ready_to_push status for commit {commit_id}",
                )
            elif task_id is not None:
                logger.warning(f"Cherry-pick continued for task {task_id} without a commit id")

            return WorkflowResult(
                status.HTTP_200_OK,
                GitOperationResponse(
                    success=True,
                    message="Cherry-pick continued successfully",
                    output=result.stdout,
                ),
            )

    async def abort_cherry_pick(
        self,
        directory: str,
        task_id: int | None = None,
        commit_id: int | None = None,
    ) -> WorkflowResult:
        """Abort the in-progress cherry-pick and return the commit to pending."""
        async with self.locks.hold(directory, "cherry-pick --abort"):
            result = await self.executor.run(["cherry-pick", "--abort"], directory)
            if not result.success:
                return WorkflowResult(
                    status.HTTP_500_INTERNAL_SERVER_ERROR,
                    GitOperationResponse(
                        success=False,
                        error=f"Failed to abort cherry-pick: {result.stderr}",
                    ),
                )

            if commit_id is not None:
                await self._persist(
                    self._set_commit_status(task_id, commit_id, CommitStatus.PENDING),
                    f"pending status for commit {commit_id}",
                )
            elif task_id is not None:
                logger.warning(f"Cherry-pick aborted for task {task_id} without a commit id")

            return WorkflowResult(
                status.HTTP_200_OK,
                GitOperationResponse(
                    success=True,
                    message="Cherry-pick aborted successfully",
                    output=result.stdout,
                ),
            )

    async def conflict_status(self, directory: str) -> WorkflowResult:
        """Describe the cherry-pick state of ``directory``. Read-only."""
        result = await self.executor.run(["status"], directory)
        if not result.success:
            return WorkflowResult(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                GitOperationResponse(
                    success=False,
                    error=f"Failed to get git status: {result.stderr}",
                ),
            )

        parsed = parse_conflict_status(result.stdout)
        return WorkflowResult(
            status.HTTP_200_OK,
            ConflictStatusResponse.model_validate(parsed),
        )
