"""
Field Manager Backend: Field Service (Field Resource Handler)
=============================================================

What:  Business logic for the Field resource: list, get, create, update,
       delete, and listing the DeviceControllers installed on a field.
Who:   Called by the /api/fields route handlers.

Referential Checks:
    create_field() refuses a userId that does not name an existing user
    (NotFoundError "User with ID {id} not found", nothing written).
    update_field() stores the new userId without that check.

Delete:
    delete_field() removes the field row only. Device controllers that point
    at it keep their field_id and stay listed under /api/devicecontrollers.
"""

import logging
from typing import List

from fastapi import Depends

from fieldmanager.exceptions import ConcurrencyError, NotFoundError
from fieldmanager.models import Field
from fieldmanager.persistence import PersistenceGateway, get_gateway
from fieldmanager.schemas.device_controller import DeviceControllerResponse
from fieldmanager.schemas.field import FieldRequest, FieldResponse

logger = logging.getLogger(__name__)


class FieldService:
    """Resource handler for Fields."""

    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway

    async def list_fields(self) -> List[FieldResponse]:
        fields = await self.gateway.list_fields()
        return [FieldResponse.model_validate(field) for field in fields]

    async def get_field(self, field_id: int) -> FieldResponse:
        field = await self.gateway.get_field(field_id)
        if field is None:
            raise NotFoundError(resource="Field", resource_id=field_id)
        return FieldResponse.model_validate(field)

    async def create_field(self, payload: FieldRequest) -> FieldResponse:
        """
        Persist a new field for an existing user.

        Raises:
            NotFoundError: payload.user_id does not name a user
        """
        if not await self.gateway.user_exists(payload.user_id):
            logger.warning("Field rejected: user %s does not exist", payload.user_id)
            raise NotFoundError(resource="User", resource_id=payload.user_id)

        field = Field(name=payload.name, user_id=payload.user_id)
        self.gateway.add(field)
        await self.gateway.save()
        logger.info("Field %s created for user %s", field.id, field.user_id)
        return FieldResponse.model_validate(field)

    async def update_field(self, field_id: int, payload: FieldRequest) -> None:
        field = await self.gateway.get_field(field_id)
        if field is None:
            raise NotFoundError(resource="Field", resource_id=field_id)

        # userId is taken as given here; only create checks the owner exists
        field.name = payload.name
        field.user_id = payload.user_id

        try:
            await self.gateway.save()
        except ConcurrencyError:
            if not await self.gateway.field_exists(field_id):
                raise NotFoundError(resource="Field", resource_id=field_id)
            raise
        logger.info("Field %s updated", field_id)

    async def delete_field(self, field_id: int) -> None:
        field = await self.gateway.get_field(field_id)
        if field is None:
            raise NotFoundError(resource="Field", resource_id=field_id)

        await self.gateway.delete(field)
        await self.gateway.save()
        logger.info("Field %s deleted", field_id)

    async def list_device_controllers_for_field(
        self, field_id: int
    ) -> List[DeviceControllerResponse]:
        hosted = await self.gateway.get_field_with_controllers(field_id)
        if hosted is None:
            raise NotFoundError(resource="Field", resource_id=field_id)
        return [DeviceControllerResponse.model_validate(c) for c in hosted.controllers]


def get_field_service(gateway: PersistenceGateway = Depends(get_gateway)) -> FieldService:
    return FieldService(gateway)
