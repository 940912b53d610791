"""Repository implementations (adapters for the domain repository protocols)."""

from identity_service.infrastructure.persistence.repositories.account_repository import (
    AccountRepository,
)
from identity_service.infrastructure.persistence.repositories.session_repository import (
    SessionRepository,
)

__all__ = ["AccountRepository", "SessionRepository"]
