"""
Field Manager Backend: Persistence Gateway
==========================================

What:  The single storage abstraction the resource services talk to.
How:   Wraps one AsyncSession per request. Offers bare entity accessors,
       explicit child queries, explicit "entity with children" queries and
       a save() that commits once and translates storage failures into
       application exceptions.
Who:   Built by the get_gateway() dependency; handed to UserService,
       FieldService and DeviceControllerService at construction.

No Navigation Properties:
    The models carry foreign-key columns only. Related rows are loaded on
    purpose, through the query methods below, never by lazy attribute
    access:

        fields_by_user_id(user_id)          → List[Field]
        controllers_by_field_id(field_id)   → List[DeviceController]
        get_user_with_fields(user_id)       → UserWithFields | None
        get_field_with_controllers(field_id)→ FieldWithControllers | None

Failure Translation (save):
    StaleDataError  → ConcurrencyError  (UPDATE matched no row)
    IntegrityError  → ConflictError     (e.g. unknown foreign key)
    SQLAlchemyError → DatabaseError
    The transaction is rolled back before the exception leaves save().
"""

import logging
from typing import List, NamedTuple, Optional, Type, TypeVar

from fastapi import Depends
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError
from sqlalchemy.sql import Select

from fieldmanager.database import Base, get_db_session
from fieldmanager.exceptions import ConcurrencyError, ConflictError, DatabaseError
from fieldmanager.models import DeviceController, Field, User

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=Base)


class UserWithFields(NamedTuple):
    user: User
    fields: List[Field]


class FieldWithControllers(NamedTuple):
    field: Field
    controllers: List[DeviceController]


class PersistenceGateway:
    """Entity collections and transactional save over one AsyncSession."""

    def __init__(self, session: AsyncSession):
        self._session = session

    # ── Query helpers ─────────────────────────────────────────────────────

    async def _all(self, statement: Select) -> list:
        try:
            result = await self._session.execute(statement)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Query failed: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not read from the database. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def _one_or_none(self, statement: Select):
        try:
            result = await self._session.execute(statement)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Query failed: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not read from the database. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def _get(self, model: Type[EntityT], entity_id: int) -> Optional[EntityT]:
        return await self._one_or_none(select(model).where(model.id == entity_id))

    async def _exists(self, model: Type[Base], entity_id: int) -> bool:
        found = await self._one_or_none(select(model.id).where(model.id == entity_id))
        return found is not None

    # ── Users ─────────────────────────────────────────────────────────────

    async def list_users(self) -> List[User]:
        return await self._all(select(User).order_by(User.id))

    async def get_user(self, user_id: int) -> Optional[User]:
        return await self._get(User, user_id)

    async def user_exists(self, user_id: int) -> bool:
        return await self._exists(User, user_id)

    async def get_user_with_fields(self, user_id: int) -> Optional[UserWithFields]:
        """The user plus every Field it owns, or None when the user is missing."""
        user = await self.get_user(user_id)
        if user is None:
            return None
        return UserWithFields(user=user, fields=await self.fields_by_user_id(user_id))

    # ── Fields ────────────────────────────────────────────────────────────

    async def list_fields(self) -> List[Field]:
        return await self._all(select(Field).order_by(Field.id))

    async def get_field(self, field_id: int) -> Optional[Field]:
        return await self._get(Field, field_id)

    async def field_exists(self, field_id: int) -> bool:
        return await self._exists(Field, field_id)

    async def fields_by_user_id(self, user_id: int) -> List[Field]:
        return await self._all(
            select(Field).where(Field.user_id == user_id).order_by(Field.id)
        )

    async def get_field_with_controllers(self, field_id: int) -> Optional[FieldWithControllers]:
        """The field plus its DeviceControllers, or None when the field is missing."""
        field = await self.get_field(field_id)
        if field is None:
            return None
        return FieldWithControllers(
            field=field, controllers=await self.controllers_by_field_id(field_id)
        )

    # ── Device controllers ────────────────────────────────────────────────

    async def list_controllers(self) -> List[DeviceController]:
        return await self._all(select(DeviceController).order_by(DeviceController.id))

    async def get_controller(self, controller_id: int) -> Optional[DeviceController]:
        return await self._get(DeviceController, controller_id)

    async def controller_exists(self, controller_id: int) -> bool:
        return await self._exists(DeviceController, controller_id)

    async def controllers_by_field_id(self, field_id: int) -> List[DeviceController]:
        return await self._all(
            select(DeviceController)
            .where(DeviceController.field_id == field_id)
            .order_by(DeviceController.id)
        )

    # ── Mutations ─────────────────────────────────────────────────────────

    def add(self, entity: Base) -> None:
        """Stage a new entity; its id is assigned by save()."""
        self._session.add(entity)

    async def delete(self, entity: Base) -> None:
        """Stage removal of an entity loaded through this gateway."""
        await self._session.delete(entity)

    async def delete_fields_of_user(self, user_id: int) -> int:
        """
        Remove every Field owned by a user inside the current transaction.

        Runs as one DELETE statement right away, so the user row it hangs
        off can be removed afterwards in the same save(). Returns the number
        of rows removed. On failure the transaction is left for the request
        session (get_db_session) to roll back.
        """
        try:
            result = await self._session.execute(
                delete(Field).where(Field.user_id == user_id)
            )
        except SQLAlchemyError as e:
            logger.error("Deleting fields of user %s failed: %s", user_id, str(e), exc_info=True)
            raise DatabaseError(context={"user_id": user_id, "error_type": type(e).__name__})
        return result.rowcount or 0

    async def save(self) -> None:
        """
        Write all staged changes and commit them as one transaction.

        Raises:
            ConcurrencyError: an UPDATE matched no row (deleted meanwhile)
            ConflictError: the database rejected the change (integrity rule)
            DatabaseError: any other storage failure
        """
        try:
            await self._session.flush()
            await self._session.commit()
        except StaleDataError as e:
            await self._session.rollback()
            logger.warning("Concurrent modification detected: %s", str(e))
            raise ConcurrencyError(context={"original_error": str(e)})
        except IntegrityError as e:
            await self._session.rollback()
            logger.warning("Integrity violation on save: %s", str(e.orig))
            raise ConflictError(
                message="The change conflicts with existing data; a referenced record may not exist.",
                context={"original_error": type(e.orig).__name__ if e.orig else "IntegrityError"},
            )
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error("Save failed: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})


async def get_gateway(db: AsyncSession = Depends(get_db_session)) -> PersistenceGateway:
    """FastAPI dependency: one gateway per request over the request's session."""
    return PersistenceGateway(db)
