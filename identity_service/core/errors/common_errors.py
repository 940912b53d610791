"""Generic error classes shared across layers.

- ValidationError: malformed input, fixable by the caller
- NotFoundError: resource not found
- ConflictError: uniqueness or state conflicts
- AuthenticationError: the caller could not be authenticated
"""

from dataclasses import dataclass

from identity_service.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found."""

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Resource conflict (duplicate value).

    Attributes:
        resource_type: Type of resource in conflict.
        conflicting_field: Field that collided (email, username).
    """

    resource_type: str
    conflicting_field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Authentication failure."""

    pass
