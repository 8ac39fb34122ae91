"""
Field Manager Backend: Application Exceptions
=============================================

Services and the persistence gateway raise these; the handler registered in
main.py turns them into the JSON error body. Each class names the HTTP
status and the machine-readable `error` code it is rendered with.

    FieldManagerError            500 server_error
    ├── NotFoundError            404 not_found
    ├── ConflictError            409 conflict
    │   └── ConcurrencyError     409 concurrency_conflict
    └── DatabaseError            500 server_error

`message` is safe to show to API clients. `context` is for the logs only.
"""

from typing import Any, Dict, Optional, Union


class FieldManagerError(Exception):
    status_code = 500
    error_code = "server_error"
    default_message = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.context = dict(context or {})
        super().__init__(self.message)


class NotFoundError(FieldManagerError):
    """
    A User, Field or DeviceController id matched nothing.

    Also raised for the owning user named by a new Field's userId.

        >>> NotFoundError("User", 999).message
        'User with ID 999 not found'
    """

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[Union[int, str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if resource_id is None:
            message = f"The requested {resource} was not found"
        else:
            message = f"{resource} with ID {resource_id} not found"
        super().__init__(message, {**(context or {}), "resource": resource, "resource_id": resource_id})
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(FieldManagerError):
    """The database refused a write, e.g. a fieldId that names no field."""

    status_code = 409
    error_code = "conflict"
    default_message = "The request conflicts with the current state of the data"


class ConcurrencyError(ConflictError):
    """
    An UPDATE or DELETE matched no row at save time.

    Services re-check existence and report NotFoundError when the row was
    deleted by another request in the meantime.
    """

    error_code = "concurrency_conflict"
    default_message = "The resource was modified by another request. Reload and try again."


class DatabaseError(FieldManagerError):
    """Storage failure; clients get a generic message, the cause goes to the log."""

    default_message = "A database error occurred. Please try again later."
