"""
Field Manager Backend: User Route Handlers
==========================================

What:  HTTP surface of the User resource.
How:   Thin handlers: parse the path/body, call UserService, set status
       codes and the Location header. Errors are raised as application
       exceptions and rendered by the global handlers in main.py.

Routes (under settings.api_prefix):
    GET    /users                 → 200 list
    GET    /users/{user_id}       → 200 | 404
    POST   /users                 → 201 + Location | 400
    PUT    /users/{user_id}       → 204 | 400 | 404
    DELETE /users/{user_id}       → 204 | 404
    GET    /users/{user_id}/fields→ 200 list | 404
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from fieldmanager.config import settings
from fieldmanager.schemas.common import ErrorResponse, PathId
from fieldmanager.schemas.field import FieldResponse
from fieldmanager.schemas.user import UserRequest, UserResponse
from fieldmanager.services.user_service import UserService, get_user_service

router = APIRouter(prefix=f"{settings.api_prefix}/users", tags=["Users"])

NOT_FOUND = {404: {"description": "User not found", "model": ErrorResponse}}
INVALID = {400: {"description": "Invalid payload", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[UserResponse],
    summary="List all users",
)
async def list_users(service: UserService = Depends(get_user_service)) -> List[UserResponse]:
    return await service.list_users()


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses=NOT_FOUND,
    summary="Get a user by ID",
)
async def get_user(
    user_id: PathId,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return await service.get_user(user_id)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses=INVALID,
    summary="Create a user",
    description="Creates a user. The ID is generated; the Location header points at the new user.",
)
async def create_user(
    payload: UserRequest,
    request: Request,
    response: Response,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    created = await service.create_user(payload)
    response.headers["Location"] = str(request.url_for("get_user", user_id=created.id))
    return created


@router.put(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**NOT_FOUND, **INVALID},
    summary="Update a user",
    description="Overwrites name, phone number and email. The ID cannot be changed.",
)
async def update_user(
    user_id: PathId,
    payload: UserRequest,
    service: UserService = Depends(get_user_service),
) -> Response:
    await service.update_user(user_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=NOT_FOUND,
    summary="Delete a user and all of their fields",
)
async def delete_user(
    user_id: PathId,
    service: UserService = Depends(get_user_service),
) -> Response:
    await service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{user_id}/fields",
    response_model=List[FieldResponse],
    responses=NOT_FOUND,
    summary="List the fields owned by a user",
)
async def list_fields_for_user(
    user_id: PathId,
    service: UserService = Depends(get_user_service),
) -> List[FieldResponse]:
    return await service.list_fields_for_user(user_id)
