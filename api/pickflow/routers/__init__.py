# FastAPI Routers
from pickflow.routers.git import router as git_router
from pickflow.routers.tasks import router as tasks_router
from pickflow.routers.repositories import router as repositories_router

__all__ = [
    "git_router",
    "tasks_router",
    "repositories_router",
]
