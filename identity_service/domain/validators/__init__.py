"""Validator functions used by the annotated domain types."""

from identity_service.domain.validators.functions import (
    validate_email,
    validate_password,
    validate_username,
    validate_verification_code,
)

__all__ = [
    "validate_email",
    "validate_password",
    "validate_username",
    "validate_verification_code",
]
