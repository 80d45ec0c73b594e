"""
Repository registry contract models for Pickflow.
"""

from datetime import datetime

from pydantic import Field, field_serializer

from pickflow.models.contracts.base import ApiModel


class RepositoryCreate(ApiModel):
    """Input for registering a working directory."""
    name: str = Field(..., min_length=1, max_length=255)
    path: str = Field(..., min_length=1)


class RepositoryValidateRequest(ApiModel):
    """Input for validating a path as a git repository."""
    path: str = Field(..., min_length=1)


class RepositoryValidationResponse(ApiModel):
    """Validation verdict for a path."""
    valid: bool
    error: str | None = None


class RepositoryPublic(ApiModel):
    """Registered repository output for API responses."""
    id: int
    name: str
    path: str
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_serializer("created_at", "updated_at")
    def serialize_dt(self, dt: datetime | None) -> str | None:
        return dt.isoformat() if dt else None
