"""
Field Manager Backend: Field Route Handlers
===========================================

Routes (under settings.api_prefix):
    GET    /fields                              → 200 list
    GET    /fields/{field_id}                   → 200 | 404
    POST   /fields                              → 201 + Location | 400 | 404 (unknown userId)
    PUT    /fields/{field_id}                   → 204 | 400 | 404
    DELETE /fields/{field_id}                   → 204 | 404
    GET    /fields/{field_id}/devicecontrollers → 200 list | 404
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from fieldmanager.config import settings
from fieldmanager.schemas.common import ErrorResponse, PathId
from fieldmanager.schemas.device_controller import DeviceControllerResponse
from fieldmanager.schemas.field import FieldRequest, FieldResponse
from fieldmanager.services.field_service import FieldService, get_field_service

router = APIRouter(prefix=f"{settings.api_prefix}/fields", tags=["Fields"])

NOT_FOUND = {404: {"description": "Field (or referenced user) not found", "model": ErrorResponse}}
INVALID = {400: {"description": "Invalid payload", "model": ErrorResponse}}


@router.get("", response_model=List[FieldResponse], summary="List all fields")
async def list_fields(service: FieldService = Depends(get_field_service)) -> List[FieldResponse]:
    return await service.list_fields()


@router.get(
    "/{field_id}",
    response_model=FieldResponse,
    responses=NOT_FOUND,
    summary="Get a field by ID",
)
async def get_field(
    field_id: PathId,
    service: FieldService = Depends(get_field_service),
) -> FieldResponse:
    return await service.get_field(field_id)


@router.post(
    "",
    response_model=FieldResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**NOT_FOUND, **INVALID},
    summary="Create a field for an existing user",
)
async def create_field(
    payload: FieldRequest,
    request: Request,
    response: Response,
    service: FieldService = Depends(get_field_service),
) -> FieldResponse:
    created = await service.create_field(payload)
    response.headers["Location"] = str(request.url_for("get_field", field_id=created.id))
    return created


@router.put(
    "/{field_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**NOT_FOUND, **INVALID},
    summary="Update a field",
)
async def update_field(
    field_id: PathId,
    payload: FieldRequest,
    service: FieldService = Depends(get_field_service),
) -> Response:
    await service.update_field(field_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{field_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=NOT_FOUND,
    summary="Delete a field",
)
async def delete_field(
    field_id: PathId,
    service: FieldService = Depends(get_field_service),
) -> Response:
    await service.delete_field(field_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{field_id}/devicecontrollers",
    response_model=List[DeviceControllerResponse],
    responses=NOT_FOUND,
    summary="List the device controllers installed on a field",
)
async def list_device_controllers_for_field(
    field_id: PathId,
    service: FieldService = Depends(get_field_service),
) -> List[DeviceControllerResponse]:
    return await service.list_device_controllers_for_field(field_id)
