"""Exception messages and the HTTP mapping each class carries."""

import pytest

from fieldmanager.exceptions import (
    ConcurrencyError,
    ConflictError,
    DatabaseError,
    FieldManagerError,
    NotFoundError,
)


class TestNotFoundError:

    def test_message_names_resource_and_id(self):
        exc = NotFoundError("DeviceController", 12)
        assert exc.message == "DeviceController with ID 12 not found"
        assert str(exc) == exc.message
        assert exc.context == {"resource": "DeviceController", "resource_id": 12}

    def test_message_without_id(self):
        assert NotFoundError("Field").message == "The requested Field was not found"


class TestHttpMapping:

    @pytest.mark.parametrize(
        "exc, status_code, error_code",
        [
            (NotFoundError("User", 1), 404, "not_found"),
            (ConflictError(), 409, "conflict"),
            (ConcurrencyError(), 409, "concurrency_conflict"),
            (DatabaseError(), 500, "server_error"),
            (FieldManagerError(), 500, "server_error"),
        ],
    )
    def test_status_and_code(self, exc, status_code, error_code):
        assert exc.status_code == status_code
        assert exc.error_code == error_code

    def test_concurrency_is_a_conflict(self):
        assert isinstance(ConcurrencyError(), ConflictError)

    def test_default_and_custom_messages(self):
        assert ConflictError().message.startswith("The request conflicts")
        assert ConflictError("custom").message == "custom"

    def test_context_is_copied(self):
        ctx = {"a": 1}
        exc = DatabaseError(context=ctx)
        exc.context["b"] = 2
        assert ctx == {"a": 1}
