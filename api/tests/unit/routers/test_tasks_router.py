"""
Tests for the tasks router.

Repositories are replaced with AsyncMocks; requests go through FastAPI.
"""

from unittest.mock import AsyncMock

import pytest

from pickflow.models.enums import CommitStatus, TaskStatus
from tests.helpers.factories import make_commit, make_task


@pytest.fixture
def task_repo(monkeypatch):
    repo = AsyncMock()
    monkeypatch.setattr("pickflow.routers.tasks.TaskRepository", lambda session: repo)
    return repo


@pytest.fixture
def commit_repo(monkeypatch):
    repo = AsyncMock()
    repo.find_in_task = AsyncMock(return_value=None)
    repo.list_for_task = AsyncMock(return_value=[])
    repo.all_pushed = AsyncMock(return_value=False)
    monkeypatch.setattr("pickflow.routers.tasks.CommitRepository", lambda session: repo)
    return repo


class TestTaskEndpoints:
    @pytest.mark.asyncio
    async def test_list_includes_counters(self, client, task_repo):
        task_repo.list_with_counts.return_value = [(make_task(), 3, 1)]

        response = await client.get("/api/tasks")

        assert response.status_code == 200
        [entry] = response.json()
        assert entry["branchName"] == "release/1.2"
        assert entry["commitCount"] == 3
        assert entry["completedCommits"] == 1
        assert entry["createdAt"] == "2026-01-15T10:30:00"

    @pytest.mark.asyncio
    async def test_get_with_commits(self, client, task_repo):
        task_repo.get_with_commits.return_value = make_task(
            commits=[make_commit(status=CommitStatus.CONFLICT)]
        )

        response = await client.get("/api/tasks/1")

        assert response.status_code == 200
        body = response.json()
        assert body["commits"][0]["commitHash"] == "abc1234"
        assert body["commits"][0]["status"] == "conflict"

    @pytest.mark.asyncio
    async def test_get_unknown_task(self, client, task_repo):
        task_repo.get_with_commits.return_value = None

        response = await client.get("/api/tasks/99")

        assert response.status_code == 404
        assert response.json()["detail"] == "Task not found"

    @pytest.mark.asyncio
    async def test_create(self, client, task_repo, mock_session):
        task_repo.create_task.return_value = make_task(id=5)

        response = await client.post(
            "/api/tasks",
            json={
                "name": "Backport login fix",
                "directory": "/srv/repos/app",
                "branchName": "release/1.2",
            },
        )

        assert response.status_code == 201
        assert response.json()["id"] == 5
        assert response.json()["status"] == "pending"
        task_repo.create_task.assert_awaited_once_with(
            name="Backport login fix",
            description="",
            directory="/srv/repos/app",
            branch_name="release/1.2",
        )
        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_requires_fields(self, client, task_repo):
        response = await client.post("/api/tasks", json={"description": "no name"})

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "name, directory, branchName are required",
        }
        task_repo.create_task.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_passes_only_supplied_fields(self, client, task_repo):
        task = make_task()
        task_repo.get_by_id.return_value = task
        task_repo.update_task.return_value = make_task(name="Renamed")

        response = await client.put("/api/tasks/1", json={"name": "Renamed"})

        assert response.status_code == 200
        assert response.json()["name"] == "Renamed"
        task_repo.update_task.assert_awaited_once_with(task, name="Renamed")

    @pytest.mark.asyncio
    async def test_cannot_complete_with_unpushed_commits(self, client, task_repo, commit_repo):
        task_repo.get_by_id.return_value = make_task(status=TaskStatus.IN_PROGRESS)

        response = await client.put("/api/tasks/1", json={"status": "completed"})

        assert response.status_code == 409
        assert response.json()["detail"] == "Task has commits that are not pushed"
        commit_repo.all_pushed.assert_awaited_once_with(1)
        task_repo.update_task.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_complete_when_all_commits_pushed(self, client, task_repo, commit_repo):
        task = make_task(status=TaskStatus.IN_PROGRESS)
        task_repo.get_by_id.return_value = task
        task_repo.update_task.return_value = make_task(status=TaskStatus.COMPLETED)
        commit_repo.all_pushed.return_value = True

        response = await client.put("/api/tasks/1", json={"status": "completed"})

        assert response.status_code == 200
        assert response.json()["status"] == "completed"
        task_repo.update_task.assert_awaited_once_with(task, status=TaskStatus.COMPLETED)

    @pytest.mark.asyncio
    async def test_delete(self, client, task_repo, mock_session):
        task = make_task()
        task_repo.get_by_id.return_value = task

        response = await client.delete("/api/tasks/1")

        assert response.status_code == 200
        assert response.json() == {"message": "Task deleted successfully"}
        task_repo.delete.assert_awaited_once_with(task)

    @pytest.mark.asyncio
    async def test_delete_unknown(self, client, task_repo):
        task_repo.get_by_id.return_value = None

        response = await client.delete("/api/tasks/1")

        assert response.status_code == 404


class TestCommitEndpoints:
    @pytest.mark.asyncio
    async def test_add_commit(self, client, task_repo, commit_repo):
        task_repo.get_by_id.return_value = make_task(status=TaskStatus.IN_PROGRESS)
        commit_repo.list_for_task.return_value = [make_commit()]

        response = await client.post(
            "/api/tasks/1/commits",
            json={"commitHash": "abc1234", "commitMessage": "Fix login redirect"},
        )

        assert response.status_code == 201
        assert response.json()[0]["status"] == "pending"
        commit_repo.add_to_task.assert_awaited_once_with(1, "abc1234", "Fix login redirect")
        task_repo.set_status.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_commit_reopens_completed_task(self, client, task_repo, commit_repo):
        task_repo.get_by_id.return_value = make_task(status=TaskStatus.COMPLETED)

        response = await client.post("/api/tasks/1/commits", json={"commitHash": "def5678"})

        assert response.status_code == 201
        task_repo.set_status.assert_awaited_once_with(1, TaskStatus.IN_PROGRESS)

    @pytest.mark.asyncio
    async def test_duplicate_commit_is_409(self, client, task_repo, commit_repo):
        task_repo.get_by_id.return_value = make_task()
        commit_repo.find_in_task.return_value = make_commit()

        response = await client.post("/api/tasks/1/commits", json={"commitHash": "abc1234"})

        assert response.status_code == 409
        commit_repo.add_to_task.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_commit_to_unknown_task(self, client, task_repo, commit_repo):
        task_repo.get_by_id.return_value = None

        response = await client.post("/api/tasks/9/commits", json={"commitHash": "abc1234"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_set_commit_status(self, client, task_repo, commit_repo):
        commit_repo.get_by_id.return_value = make_commit(id=10, task_id=1)
        task_repo.get_by_id.return_value = make_task(status=TaskStatus.IN_PROGRESS)

        response = await client.put("/api/tasks/1/commits/10", json={"status": "ready_to_push"})

        assert response.status_code == 200
        commit_repo.set_status.assert_awaited_once_with(10, CommitStatus.READY_TO_PUSH)
        task_repo.set_status.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_last_pushed_commit_completes_task(self, client, task_repo, commit_repo):
        commit_repo.get_by_id.return_value = make_commit(id=10, task_id=1)
        commit_repo.all_pushed.return_value = True
        task_repo.get_by_id.return_value = make_task(status=TaskStatus.IN_PROGRESS)

        response = await client.put("/api/tasks/1/commits/10", json={"status": "pushed"})

        assert response.status_code == 200
        commit_repo.all_pushed.assert_awaited_once_with(1)
        task_repo.set_status.assert_awaited_once_with(1, TaskStatus.COMPLETED)

    @pytest.mark.asyncio
    async def test_unpushing_a_commit_reopens_completed_task(
        self, client, task_repo, commit_repo
    ):
        commit_repo.get_by_id.return_value = make_commit(
            id=10, task_id=1, status=CommitStatus.PUSHED
        )
        task_repo.get_by_id.return_value = make_task(status=TaskStatus.COMPLETED)

        response = await client.put("/api/tasks/1/commits/10", json={"status": "ready_to_push"})

        assert response.status_code == 200
        task_repo.set_status.assert_awaited_once_with(1, TaskStatus.IN_PROGRESS)

    @pytest.mark.asyncio
    async def test_set_status_of_other_tasks_commit(self, client, commit_repo):
        commit_repo.get_by_id.return_value = make_commit(id=10, task_id=2)

        response = await client.put("/api/tasks/1/commits/10", json={"status": "pushed"})

        assert response.status_code == 404
        commit_repo.set_status.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_status_is_400(self, client, commit_repo):
        response = await client.put("/api/tasks/1/commits/10", json={"status": "merged"})

        assert response.status_code == 400
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_delete_conflicted_commit(self, client, task_repo, commit_repo):
        task_repo.get_by_id.return_value = make_task()
        commit = make_commit(status=CommitStatus.CONFLICT)
        commit_repo.get_by_id.return_value = commit

        response = await client.delete("/api/tasks/1/commits/10")

        assert response.status_code == 200
        commit_repo.delete.assert_awaited_once_with(commit)

    @pytest.mark.asyncio
    async def test_pushed_commit_cannot_be_deleted(self, client, task_repo, commit_repo):
        task_repo.get_by_id.return_value = make_task()
        commit_repo.get_by_id.return_value = make_commit(status=CommitStatus.PUSHED)

        response = await client.delete("/api/tasks/1/commits/10")

        assert response.status_code == 409
        commit_repo.delete.assert_not_awaited()
