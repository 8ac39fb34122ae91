"""
Field Manager Backend: DeviceController Route Handlers
======================================================

Routes (under settings.api_prefix):
    GET    /devicecontrollers                 → 200 list
    GET    /devicecontrollers/{controller_id} → 200 | 404
    POST   /devicecontrollers                 → 201 + Location | 400
    PUT    /devicecontrollers/{controller_id} → 204 | 400 | 404
    DELETE /devicecontrollers/{controller_id} → 204 | 404
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from fieldmanager.config import settings
from fieldmanager.schemas.common import ErrorResponse, PathId
from fieldmanager.schemas.device_controller import (
    DeviceControllerRequest,
    DeviceControllerResponse,
)
from fieldmanager.services.device_controller_service import (
    DeviceControllerService,
    get_device_controller_service,
)

router = APIRouter(
    prefix=f"{settings.api_prefix}/devicecontrollers",
    tags=["Device Controllers"],
)

NOT_FOUND = {404: {"description": "Device controller not found", "model": ErrorResponse}}
INVALID = {400: {"description": "Invalid payload", "model": ErrorResponse}}


@router.get("", response_model=List[DeviceControllerResponse], summary="List all device controllers")
async def list_controllers(
    service: DeviceControllerService = Depends(get_device_controller_service),
) -> List[DeviceControllerResponse]:
    return await service.list_controllers()


@router.get(
    "/{controller_id}",
    response_model=DeviceControllerResponse,
    responses=NOT_FOUND,
    summary="Get a device controller by ID",
)
async def get_controller(
    controller_id: PathId,
    service: DeviceControllerService = Depends(get_device_controller_service),
) -> DeviceControllerResponse:
    return await service.get_controller(controller_id)


@router.post(
    "",
    response_model=DeviceControllerResponse,
    status_code=status.HTTP_201_CREATED,
    responses=INVALID,
    summary="Create a device controller",
)
async def create_controller(
    payload: DeviceControllerRequest,
    request: Request,
    response: Response,
    service: DeviceControllerService = Depends(get_device_controller_service),
) -> DeviceControllerResponse:
    created = await service.create_controller(payload)
    response.headers["Location"] = str(
        request.url_for("get_controller", controller_id=created.id)
    )
    return created


@router.put(
    "/{controller_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**NOT_FOUND, **INVALID},
    summary="Update a device controller",
)
async def update_controller(
    controller_id: PathId,
    payload: DeviceControllerRequest,
    service: DeviceControllerService = Depends(get_device_controller_service),
) -> Response:
    await service.update_controller(controller_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{controller_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=NOT_FOUND,
    summary="Delete a device controller",
)
async def delete_controller(
    controller_id: PathId,
    service: DeviceControllerService = Depends(get_device_controller_service),
) -> Response:
    await service.delete_controller(controller_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
