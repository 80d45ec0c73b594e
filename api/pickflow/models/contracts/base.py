"""
Base models for Pickflow contracts.

The JSON API speaks camelCase; Python code uses snake_case. Every contract
derives from ApiModel so both spellings are accepted on input and camelCase
is emitted on output.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base contract with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(ApiModel):
    """Plain acknowledgement"""
    message: str = Field(..., description="Human-readable result")
