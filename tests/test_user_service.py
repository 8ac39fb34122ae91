"""
Field Manager Backend: User Service Unit Tests
==============================================

What:  Tests for UserService business logic against a mocked gateway.
How:   No database: mock_gateway returns ORM objects built in memory.

What we test:
    ✅ list/get shaping into UserResponse
    ✅ create assigns the generated id and never a client one
    ✅ update overwrites only name/phone/email
    ✅ delete removes the user's fields before the user, one save
    ✅ not-found and lost-race paths
"""

import pytest

from fieldmanager.exceptions import ConcurrencyError, NotFoundError
from fieldmanager.models import Field, User
from fieldmanager.persistence import UserWithFields
from fieldmanager.schemas.user import UserRequest
from fieldmanager.services.user_service import UserService


def make_user(user_id=1, name="Alice"):
    return User(id=user_id, name=name, phone_number="+15551234567", email="a@example.com")


class TestUserServiceRead:
    """Tests for list_users, get_user and list_fields_for_user."""

    @pytest.mark.asyncio
    async def test_list_users_empty(self, mock_gateway):
        mock_gateway.list_users.return_value = []

        result = await UserService(mock_gateway).list_users()

        assert result == []

    @pytest.mark.asyncio
    async def test_list_users_shapes_every_user(self, mock_gateway):
        mock_gateway.list_users.return_value = [make_user(1, "Alice"), make_user(2, "Bob")]

        result = await UserService(mock_gateway).list_users()

        assert [u.id for u in result] == [1, 2]
        assert result[1].name == "Bob"
        assert result[0].phone_number == "+15551234567"

    @pytest.mark.asyncio
    async def test_get_user_found(self, mock_gateway):
        mock_gateway.get_user.return_value = make_user(7)

        result = await UserService(mock_gateway).get_user(7)

        assert result.id == 7
        assert result.email == "a@example.com"
        mock_gateway.get_user.assert_awaited_once_with(7)

    @pytest.mark.asyncio
    async def test_get_user_not_found(self, mock_gateway):
        mock_gateway.get_user.return_value = None

        with pytest.raises(NotFoundError, match="User with ID 42 not found"):
            await UserService(mock_gateway).get_user(42)

    @pytest.mark.asyncio
    async def test_list_fields_for_user(self, mock_gateway):
        user = make_user(3)
        mock_gateway.get_user_with_fields.return_value = UserWithFields(
            user=user,
            fields=[Field(id=10, name="North Plot", user_id=3), Field(id=11, name="South", user_id=3)],
        )

        result = await UserService(mock_gateway).list_fields_for_user(3)

        assert [(f.id, f.name, f.user_id) for f in result] == [(10, "North Plot", 3), (11, "South", 3)]

    @pytest.mark.asyncio
    async def test_list_fields_for_user_without_fields_is_empty(self, mock_gateway):
        mock_gateway.get_user_with_fields.return_value = UserWithFields(user=make_user(3), fields=[])

        assert await UserService(mock_gateway).list_fields_for_user(3) == []

    @pytest.mark.asyncio
    async def test_list_fields_for_missing_user(self, mock_gateway):
        mock_gateway.get_user_with_fields.return_value = None

        with pytest.raises(NotFoundError, match="User with ID 99 not found"):
            await UserService(mock_gateway).list_fields_for_user(99)


class TestUserServiceWrite:
    """Tests for create_user, update_user and delete_user."""

    @pytest.mark.asyncio
    async def test_create_user_persists_and_returns_generated_id(self, mock_gateway, saved_entities):
        payload = UserRequest(name="Alice", phone_number="+15551234567", email="a@example.com")

        result = await UserService(mock_gateway).create_user(payload)

        assert result.id == 1
        assert (result.name, result.phone_number, result.email) == (
            "Alice", "+15551234567", "a@example.com",
        )
        assert len(saved_entities) == 1
        assert isinstance(saved_entities[0], User)
        mock_gateway.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_user_ignores_client_id(self, mock_gateway, saved_entities):
        payload = UserRequest.model_validate(
            {"id": 500, "name": "Alice", "phoneNumber": "+15551234567", "email": "a@example.com"}
        )

        result = await UserService(mock_gateway).create_user(payload)

        assert result.id == 1

    @pytest.mark.asyncio
    async def test_update_user_overwrites_contact_fields_only(self, mock_gateway):
        user = make_user(5)
        mock_gateway.get_user.return_value = user
        payload = UserRequest(name="Alicia", phone_number="555-123-4567", email="alicia@example.com")

        await UserService(mock_gateway).update_user(5, payload)

        assert user.id == 5
        assert user.name == "Alicia"
        assert user.phone_number == "555-123-4567"
        assert user.email == "alicia@example.com"
        mock_gateway.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_missing_user(self, mock_gateway):
        mock_gateway.get_user.return_value = None
        payload = UserRequest(name="X", phone_number="+15551234567", email="x@example.com")

        with pytest.raises(NotFoundError):
            await UserService(mock_gateway).update_user(5, payload)
        mock_gateway.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_lost_race_to_delete_is_not_found(self, mock_gateway):
        mock_gateway.get_user.return_value = make_user(5)
        mock_gateway.save.side_effect = ConcurrencyError()
        mock_gateway.user_exists.return_value = False
        payload = UserRequest(name="X", phone_number="+15551234567", email="x@example.com")

        with pytest.raises(NotFoundError, match="User with ID 5 not found"):
            await UserService(mock_gateway).update_user(5, payload)

    @pytest.mark.asyncio
    async def test_update_conflict_on_existing_user_propagates(self, mock_gateway):
        mock_gateway.get_user.return_value = make_user(5)
        mock_gateway.save.side_effect = ConcurrencyError()
        mock_gateway.user_exists.return_value = True
        payload = UserRequest(name="X", phone_number="+15551234567", email="x@example.com")

        with pytest.raises(ConcurrencyError):
            await UserService(mock_gateway).update_user(5, payload)

    @pytest.mark.asyncio
    async def test_delete_user_removes_fields_then_user(self, mock_gateway):
        user = make_user(2)
        fields = [Field(id=i, name=f"F{i}", user_id=2) for i in (1, 2, 3)]
        mock_gateway.get_user_with_fields.return_value = UserWithFields(user=user, fields=fields)
        mock_gateway.delete_fields_of_user.return_value = 3

        calls = []
        mock_gateway.delete_fields_of_user.side_effect = lambda uid: calls.append(("fields", uid)) or 3
        mock_gateway.delete.side_effect = lambda entity: calls.append(("entity", entity))
        mock_gateway.save.side_effect = lambda: calls.append(("save",))

        await UserService(mock_gateway).delete_user(2)

        assert calls == [("fields", 2), ("entity", user), ("save",)]

    @pytest.mark.asyncio
    async def test_delete_missing_user(self, mock_gateway):
        mock_gateway.get_user_with_fields.return_value = None

        with pytest.raises(NotFoundError):
            await UserService(mock_gateway).delete_user(8)
        mock_gateway.delete.assert_not_awaited()
        mock_gateway.save.assert_not_awaited()
