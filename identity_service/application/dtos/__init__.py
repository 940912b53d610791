"""Application DTOs."""

from identity_service.application.dtos.identity_dtos import (
    AccountProfile,
    AuthenticatedSession,
    IssuedSession,
    RegisteredAccount,
)

__all__ = [
    "AccountProfile",
    "AuthenticatedSession",
    "IssuedSession",
    "RegisteredAccount",
]
