"""Shared fixtures for router tests"""

import httpx
import pytest
import pytest_asyncio

from pickflow.core.database import get_db
from pickflow.main import create_app
from pickflow.services.git_executor import get_git_executor


@pytest.fixture
def app(mock_session, git):
    """Application with the database session and git executor replaced."""
    app = create_app()

    async def override_get_db():
        yield mock_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_git_executor] = lambda: git
    return app


@pytest_asyncio.fixture
async def client(app):
    """HTTP client bound to the app; lifespan is not run."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
