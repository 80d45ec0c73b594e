"""
Tests for the git router.

Requests go through the full FastAPI stack with a scripted git executor.
"""

import pytest

from tests.helpers.factories import make_cherry_pick_request, make_push_request
from tests.helpers.fake_git import fail, ok


class TestRequestValidation:
    @pytest.mark.asyncio
    async def test_status_requires_directory(self, client, git):
        response = await client.get("/api/git/status")

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "directory is required"}
        assert git.calls == []

    @pytest.mark.asyncio
    async def test_empty_directory_is_missing(self, client, git):
        response = await client.get("/api/git/branches", params={"directory": ""})

        assert response.status_code == 400
        assert response.json()["error"] == "directory is required"

    @pytest.mark.asyncio
    async def test_cherry_pick_lists_missing_fields(self, client, git):
        response = await client.post("/api/git/cherry-pick", json={"directory": "/srv/repos/app"})

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "commitHash, branchName are required",
        }
        assert git.calls == []

    @pytest.mark.asyncio
    async def test_push_commit_requires_commit_id(self, client, git):
        body = make_push_request(commitHash="abc1234")

        response = await client.post("/api/git/push-commit", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "commitId is required"


class TestReadOnlyEndpoints:
    @pytest.mark.asyncio
    async def test_status(self, client, git):
        git.script("status", ok("?? notes.txt"))

        response = await client.get("/api/git/status", params={"directory": "/srv/repos/app"})

        assert response.status_code == 200
        assert response.json() == {"success": True, "output": "?? notes.txt", "error": ""}
        assert git.calls[0]["cwd"] == "/srv/repos/app"

    @pytest.mark.asyncio
    async def test_commits(self, client, git):
        git.script("log", ok("abc1234 Fix login redirect"))

        response = await client.get(
            "/api/git/commits", params={"directory": "/srv/repos/app", "limit": 5}
        )

        assert response.json()["commits"] == [{"hash": "abc1234", "message": "Fix login redirect"}]
        assert git.commands == [["log", "--oneline", "-5"]]

    @pytest.mark.asyncio
    async def test_current_branch(self, client, git):
        git.script("branch --show-current", ok("release/1.2"))

        response = await client.get(
            "/api/git/current-branch", params={"directory": "/srv/repos/app"}
        )

        assert response.json() == {"success": True, "branch": "release/1.2", "error": ""}

    @pytest.mark.asyncio
    async def test_conflict_status_is_read_only(self, client, git):
        git.script("status", ok("On branch main\nnothing to commit, working tree clean"))

        response = await client.get(
            "/api/git/conflict-status", params={"directory": "/srv/repos/app"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["cherryPickInProgress"] is False
        assert body["statusMessage"] == "No cherry-pick operation in progress"
        assert git.commands == [["status"]]


class TestCherryPickEndpoints:
    @pytest.mark.asyncio
    async def test_conflict_is_success_with_flag(self, client, git):
        git.script("branch --show-current", ok("release/1.2"))
        git.script("cherry-pick", fail("CONFLICT (content): Merge conflict in src/login.py"))

        response = await client.post("/api/git/cherry-pick", json=make_cherry_pick_request())

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["hasConflict"] is True
        assert "error" not in body

    @pytest.mark.asyncio
    async def test_local_changes_is_409(self, client, git):
        git.script("branch --show-current", ok("release/1.2"))
        git.script(
            "cherry-pick",
            fail("error: Your local changes to the following files would be overwritten"),
        )

        response = await client.post("/api/git/cherry-pick", json=make_cherry_pick_request())

        assert response.status_code == 409
        assert response.json()["error"] == "Local changes conflict"

    @pytest.mark.asyncio
    async def test_checkout_failure_is_500(self, client, git):
        git.script("branch --show-current", ok("main"))
        git.script("checkout", fail("error: pathspec 'release/1.2' did not match"))

        response = await client.post("/api/git/cherry-pick", json=make_cherry_pick_request())

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Failed to checkout branch: error: pathspec 'release/1.2' did not match",
        }

    @pytest.mark.asyncio
    async def test_snake_case_body_is_accepted(self, client, git):
        git.script("branch --show-current", ok("release/1.2"))
        git.script("cherry-pick", ok("[release/1.2 9f8e7d6] Fix login redirect"))

        response = await client.post(
            "/api/git/cherry-pick",
            json={
                "commit_hash": "abc1234",
                "branch_name": "release/1.2",
                "directory": "/srv/repos/app",
            },
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Cherry-pick successful"

    @pytest.mark.asyncio
    async def test_continue(self, client, git):
        response = await client.post(
            "/api/git/cherry-pick-continue", json={"directory": "/srv/repos/app"}
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Cherry-pick continued successfully"
        assert git.commands == [["add", "."], ["cherry-pick", "--continue"]]

    @pytest.mark.asyncio
    async def test_abort_requires_directory(self, client, git):
        response = await client.post("/api/git/cherry-pick-abort", json={"taskId": 1})

        assert response.status_code == 400
        assert response.json()["error"] == "directory is required"


class TestPushEndpoints:
    @pytest.mark.asyncio
    async def test_push_failure_is_500(self, client, git):
        git.script("branch --show-current", ok("release/1.2"))
        git.script("push", fail("fatal: 'origin' does not appear to be a git repository"))

        response = await client.post("/api/git/push", json=make_push_request())

        assert response.status_code == 500
        assert response.json()["error"].startswith("Push failed: fatal: 'origin'")

    @pytest.mark.asyncio
    async def test_push_success(self, client, git):
        git.script("branch --show-current", ok("release/1.2"))
        git.script("push", ok(stderr="Everything up-to-date"))

        response = await client.post("/api/git/push", json=make_push_request())

        assert response.status_code == 200
        assert response.json()["message"] == "Push successful"


class TestRoot:
    @pytest.mark.asyncio
    async def test_root(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["name"] == "Pickflow API"
