"""Core errors package.

Usage:
    from identity_service.core.errors import DomainError, ValidationError
"""

from identity_service.core.errors.common_errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from identity_service.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "AuthenticationError",
]
