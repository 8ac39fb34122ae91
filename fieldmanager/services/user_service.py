"""
Field Manager Backend: User Service (User Resource Handler)
===========================================================

What:  Business logic for the User resource: list, get, create, update,
       delete, and listing the Fields a user owns.
How:   Each operation is one lookup → validate → mutate → save sequence
       against the PersistenceGateway it was constructed with.
Who:   Called by the /api/users route handlers.

Delete Cascade:
    Deleting a user first removes all of the user's Fields, then the user,
    and commits both in a single save(). Device controllers on those Fields
    are not touched: device_controllers.field_id is not a foreign key.
"""

import logging
from typing import List

from fastapi import Depends

from fieldmanager.exceptions import ConcurrencyError, NotFoundError
from fieldmanager.models import User
from fieldmanager.persistence import PersistenceGateway, get_gateway
from fieldmanager.schemas.field import FieldResponse
from fieldmanager.schemas.user import UserRequest, UserResponse

logger = logging.getLogger(__name__)


class UserService:
    """
    Resource handler for Users.

    Error Handling:
        Missing users raise NotFoundError("User", id). Storage failures come
        out of PersistenceGateway.save() as ConflictError / DatabaseError and
        propagate unchanged. A ConcurrencyError on update is turned into
        NotFoundError when the user has been deleted meanwhile.
    """

    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway

    async def list_users(self) -> List[UserResponse]:
        users = await self.gateway.list_users()
        return [UserResponse.model_validate(user) for user in users]

    async def get_user(self, user_id: int) -> UserResponse:
        user = await self.gateway.get_user(user_id)
        if user is None:
            raise NotFoundError(resource="User", resource_id=user_id)
        return UserResponse.model_validate(user)

    async def create_user(self, payload: UserRequest) -> UserResponse:
        """
        Persist a new user from a validated payload.

        The id is generated by the database; any id the client sent was
        already dropped by the schema.
        """
        user = User(
            name=payload.name,
            phone_number=payload.phone_number,
            email=payload.email,
        )
        self.gateway.add(user)
        await self.gateway.save()
        logger.info("User %s created", user.id)
        return UserResponse.model_validate(user)

    async def update_user(self, user_id: int, payload: UserRequest) -> None:
        """Overwrite name, phone number and email. The id is never touched."""
        user = await self.gateway.get_user(user_id)
        if user is None:
            raise NotFoundError(resource="User", resource_id=user_id)

        user.name = payload.name
        user.phone_number = payload.phone_number
        user.email = payload.email

        try:
            await self.gateway.save()
        except ConcurrencyError:
            if not await self.gateway.user_exists(user_id):
                raise NotFoundError(resource="User", resource_id=user_id)
            raise
        logger.info("User %s updated", user_id)

    async def delete_user(self, user_id: int) -> None:
        """Remove the user's Fields, then the user, in one transaction."""
        owned = await self.gateway.get_user_with_fields(user_id)
        if owned is None:
            raise NotFoundError(resource="User", resource_id=user_id)

        removed = await self.gateway.delete_fields_of_user(user_id)
        await self.gateway.delete(owned.user)
        await self.gateway.save()
        logger.info("User %s deleted with %d field(s)", user_id, removed)

    async def list_fields_for_user(self, user_id: int) -> List[FieldResponse]:
        owned = await self.gateway.get_user_with_fields(user_id)
        if owned is None:
            raise NotFoundError(resource="User", resource_id=user_id)
        return [FieldResponse.model_validate(field) for field in owned.fields]


def get_user_service(gateway: PersistenceGateway = Depends(get_gateway)) -> UserService:
    """FastAPI dependency building a UserService around the request's gateway."""
    return UserService(gateway)
