"""Request and response DTOs for the DeviceController resource."""

from pydantic import Field, field_validator

from fieldmanager.schemas.common import TYPE_MAX_LENGTH, ApiModel, ReferenceId, require_text


class DeviceControllerRequest(ApiModel):
    """Payload for creating or updating a device controller. fieldId is not checked against existing fields."""

    type: str = Field(max_length=TYPE_MAX_LENGTH, description="Kind of device", examples=["Irrigation", "Sensor"])
    field_id: ReferenceId = Field(description="ID of the field the device is installed on", examples=[1])

    @field_validator("type")
    @classmethod
    def type_not_blank(cls, v: str) -> str:
        return require_text(v)


class DeviceControllerResponse(ApiModel):
    """A device controller as returned by the API: {id, type, fieldId}."""

    id: int = Field(description="Unique device controller identifier")
    type: str
    field_id: int
