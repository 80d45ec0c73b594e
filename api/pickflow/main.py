"""
Pickflow API - FastAPI Application

Main entry point for the FastAPI application.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pickflow import __version__
from pickflow.config import get_settings
from pickflow.core.database import close_db, init_db
from pickflow.routers import git_router, repositories_router, tasks_router

# Configure logging
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# Suppress noisy third-party loggers
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

# pydantic error types that mean "the field was not supplied"
MISSING_ERROR_TYPES = {"missing", "string_too_short"}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    # Startup
    logger.info("Starting Pickflow API...")
    settings = get_settings()

    logger.info("Initializing database connection...")
    await init_db()
    logger.info("Database connection established")

    logger.info(f"Pickflow API started in {settings.environment} mode")

    yield

    # Shutdown
    logger.info("Shutting down Pickflow API...")
    await close_db()
    logger.info("Pickflow API shutdown complete")


def format_validation_error(exc: RequestValidationError) -> str:
    """
    Render validation errors as one line.

    Missing or empty fields collapse into "a, b are required"; anything else
    is reported as "<field>: <pydantic message>".
    """
    missing: list[str] = []
    other: list[str] = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query")]
        name = ".".join(loc) or "body"
        if error.get("type") in MISSING_ERROR_TYPES:
            if name not in missing:
                missing.append(name)
        else:
            other.append(f"{name}: {error.get('msg', 'invalid value')}")

    parts = []
    if missing:
        verb = "is" if len(missing) == 1 else "are"
        parts.append(f"{', '.join(missing)} {verb} required")
    parts.extend(other)
    return "; ".join(parts)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    message = format_validation_error(exc)
    logger.info(f"Rejected {request.method} {request.url.path}: {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": message},
    )


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Pickflow API",
        description="Cherry-pick task tracking over local git repositories",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Register routers
    app.include_router(git_router)
    app.include_router(repositories_router)
    app.include_router(tasks_router)

    # Root endpoint
    @app.get("/")
    async def root():
        return {
            "name": "Pickflow API",
            "version": __version__,
            "docs": "/docs",
        }

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "pickflow.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
    )
