"""Annotated types with centralized validation.

Usage:
    from identity_service.domain.types import Email, Password

    class RegistrationRequest(BaseModel):
        email: Email
        password: Password
"""

from typing import Annotated

from pydantic import AfterValidator, Field

from identity_service.domain.validators import (
    validate_email,
    validate_password,
    validate_username,
    validate_verification_code,
)

Email = Annotated[
    str,
    Field(max_length=255, description="Email address", examples=["alice@x.com"]),
    AfterValidator(validate_email),
]
"""Email address, normalized to lowercase."""

Password = Annotated[
    str,
    Field(description="Password (8-128 characters)", examples=["password123"]),
    AfterValidator(validate_password),
]

Username = Annotated[
    str,
    Field(description="Username (letters, digits, @ . _ -)", examples=["alice"]),
    AfterValidator(validate_username),
]

VerificationCode = Annotated[
    str,
    Field(description="6-digit one-time code", examples=["042317"]),
    AfterValidator(validate_verification_code),
]
"""Six digit numeric code; leading zeros are significant."""
