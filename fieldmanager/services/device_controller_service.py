"""
Field Manager Backend: DeviceController Service
===============================================

What:  Business logic for the DeviceController resource: list, get,
       create, update, delete.
Who:   Called by the /api/devicecontrollers route handlers.

Field References:
    fieldId is stored as sent. Nothing checks that it names a Field, so a
    controller can be created for, or moved to, a field that does not exist.
"""

import logging
from typing import List

from fastapi import Depends

from fieldmanager.exceptions import ConcurrencyError, NotFoundError
from fieldmanager.models import DeviceController
from fieldmanager.persistence import PersistenceGateway, get_gateway
from fieldmanager.schemas.device_controller import (
    DeviceControllerRequest,
    DeviceControllerResponse,
)

logger = logging.getLogger(__name__)

RESOURCE = "DeviceController"


class DeviceControllerService:
    """Resource handler for DeviceControllers."""

    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway

    async def list_controllers(self) -> List[DeviceControllerResponse]:
        controllers = await self.gateway.list_controllers()
        return [DeviceControllerResponse.model_validate(c) for c in controllers]

    async def get_controller(self, controller_id: int) -> DeviceControllerResponse:
        controller = await self.gateway.get_controller(controller_id)
        if controller is None:
            raise NotFoundError(resource=RESOURCE, resource_id=controller_id)
        return DeviceControllerResponse.model_validate(controller)

    async def create_controller(
        self, payload: DeviceControllerRequest
    ) -> DeviceControllerResponse:
        controller = DeviceController(type=payload.type, field_id=payload.field_id)
        self.gateway.add(controller)
        await self.gateway.save()
        logger.info(
            "DeviceController %s (%s) created on field %s",
            controller.id, controller.type, controller.field_id,
        )
        return DeviceControllerResponse.model_validate(controller)

    async def update_controller(
        self, controller_id: int, payload: DeviceControllerRequest
    ) -> None:
        controller = await self.gateway.get_controller(controller_id)
        if controller is None:
            raise NotFoundError(resource=RESOURCE, resource_id=controller_id)

        controller.type = payload.type
        controller.field_id = payload.field_id

        try:
            await self.gateway.save()
        except ConcurrencyError:
            if not await self.gateway.controller_exists(controller_id):
                raise NotFoundError(resource=RESOURCE, resource_id=controller_id)
            raise
        logger.info("DeviceController %s updated", controller_id)

    async def delete_controller(self, controller_id: int) -> None:
        controller = await self.gateway.get_controller(controller_id)
        if controller is None:
            raise NotFoundError(resource=RESOURCE, resource_id=controller_id)

        await self.gateway.delete(controller)
        await self.gateway.save()
        logger.info("DeviceController %s deleted", controller_id)


def get_device_controller_service(
    gateway: PersistenceGateway = Depends(get_gateway),
) -> DeviceControllerService:
    return DeviceControllerService(gateway)
