"""
Field Manager Backend: Field Schemas
====================================

What:  Request and response DTOs for the Field resource.
"""

from pydantic import Field, field_validator

from fieldmanager.schemas.common import NAME_MAX_LENGTH, ApiModel, ReferenceId, require_text


class FieldRequest(ApiModel):
    """
    Payload for creating or updating a field.

    userId must name an existing user on create (checked by FieldService,
    404 otherwise). On update it is stored as given.
    """

    name: str = Field(max_length=NAME_MAX_LENGTH, description="Name of the field", examples=["North Plot"])
    user_id: ReferenceId = Field(description="ID of the user who manages this field", examples=[1])

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        return require_text(v)


class FieldResponse(ApiModel):
    """A field as returned by the API: {id, name, userId}."""

    id: int = Field(description="Unique field identifier")
    name: str
    user_id: int
