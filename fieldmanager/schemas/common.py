"""
Field Manager Backend: Shared Schema Pieces
===========================================

What:  Base model with the wire naming convention, shared validators, and
       the error / health response models used by every router.

Wire Format:
    JSON keys are camelCase (`phoneNumber`, `userId`, `fieldId`).
    Requests may also use the Python attribute names (`phone_number`)
    because populate_by_name is on. FastAPI serializes response_model
    output by alias, so responses are always camelCase.
"""

from typing import Annotated, Optional

from fastapi import Path
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for every request/response schema of the API."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


def require_text(value: str) -> str:
    """Rejects empty and whitespace-only strings; returns the value unchanged."""
    if not value or not value.strip():
        raise ValueError("must not be empty")
    return value


# ══════════════════════════════════════════════════════════════════════════
# Ids and Column Limits
# ══════════════════════════════════════════════════════════════════════════

# Ids are INTEGER columns: the largest value every backend can hold
MAX_ID = 2**31 - 1

NAME_MAX_LENGTH = 200
TYPE_MAX_LENGTH = 100
PHONE_MAX_LENGTH = 32
EMAIL_MAX_LENGTH = 320

# Path parameter for /users/{user_id} and friends; out of range → 400
PathId = Annotated[int, Path(ge=1, le=MAX_ID)]

# userId / fieldId inside request bodies
ReferenceId = Annotated[int, Field(ge=1, le=MAX_ID)]


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class FieldErrorDetail(BaseModel):
    """One failed input field: dotted location and the validator's message."""
    field: str = Field(description="Offending field, e.g. 'phoneNumber'")
    message: str = Field(description="What is wrong with it")


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "User with ID 999 not found",
            "request_id": "5c1f0a9e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
