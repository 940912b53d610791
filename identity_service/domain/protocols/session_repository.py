"""SessionRepository protocol for session persistence."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from identity_service.domain.entities import Session


class SessionRepository(Protocol):
    """Session repository protocol (port)."""

    async def save(self, session: Session) -> None:
        """Insert a new session."""
        ...

    async def find_by_token_hash(self, token_hash: str) -> Session | None:
        """Find a session by the hash of its bearer token."""
        ...

    async def find_by_id(self, session_id: UUID) -> Session | None:
        """Find a session by ID."""
        ...

    async def list_active(self, account_id: UUID, now: datetime) -> list[Session]:
        """Active, unexpired sessions of an account, newest first."""
        ...

    async def revoke(self, session_id: UUID, now: datetime) -> bool:
        """Deactivate one session.

        Returns:
            True if an active session was revoked.
        """
        ...

    async def revoke_all_for_account(self, account_id: UUID, now: datetime) -> int:
        """Deactivate every active session of an account.

        Returns:
            Number of sessions revoked.
        """
        ...
