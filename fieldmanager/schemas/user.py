"""
Field Manager Backend: User Schemas
===================================

What:  Request and response DTOs for the User resource.
Who:   UserRequest is the body of POST /api/users and PUT /api/users/{id};
       UserResponse is returned by the list/get/create endpoints.

Validation:
    - name: required, not blank, at most 200 characters
    - phoneNumber: digits with an optional leading '+', and spaces, dashes,
      dots or parentheses as separators; 7 to 15 digits in total
    - email: a syntactically valid address, checked by email-validator
      without DNS lookups

    Phone numbers and emails are stored exactly as sent. email-validator's
    normalized form (lower-cased domain) is used for the check only, so a
    created user reads back with the same email the client submitted.

    An `id` key in a request body is ignored: ids come from the database.
"""

import re
from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, Field, field_validator

from fieldmanager.schemas.common import (
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PHONE_MAX_LENGTH,
    ApiModel,
    require_text,
)

PHONE_PATTERN = re.compile(r"^\+?[0-9][0-9 ().\-]*$")
PHONE_MIN_DIGITS = 7
PHONE_MAX_DIGITS = 15


def validate_phone_number(value: str) -> str:
    """Checks the phone-number format; returns the value unchanged."""
    candidate = value.strip()
    if not PHONE_PATTERN.match(candidate):
        raise ValueError("Phone number format is invalid.")
    digits = sum(ch.isdigit() for ch in candidate)
    if not PHONE_MIN_DIGITS <= digits <= PHONE_MAX_DIGITS:
        raise ValueError(
            f"Phone number must contain between {PHONE_MIN_DIGITS} and {PHONE_MAX_DIGITS} digits."
        )
    return value


def validate_email_address(value: str) -> str:
    """Syntax check only; returns the address as submitted, not normalized."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"Email address is invalid: {e}") from e
    return value


EmailAddress = Annotated[str, AfterValidator(validate_email_address)]


class UserRequest(ApiModel):
    """Payload for creating or updating a user."""

    name: str = Field(
        max_length=NAME_MAX_LENGTH,
        description="Full name of the user",
        examples=["Alice"],
    )
    phone_number: str = Field(
        max_length=PHONE_MAX_LENGTH,
        description="Phone number used for notifications",
        examples=["+15551234567"],
    )
    email: EmailAddress = Field(
        max_length=EMAIL_MAX_LENGTH,
        description="Email address used for updates",
        examples=["a@example.com"],
    )

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        return require_text(v)

    @field_validator("phone_number")
    @classmethod
    def phone_number_format(cls, v: str) -> str:
        return validate_phone_number(v)


class UserResponse(ApiModel):
    """A user as returned by the API: {id, name, phoneNumber, email}."""

    id: int = Field(description="Unique user identifier")
    name: str
    phone_number: str
    email: str
