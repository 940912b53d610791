"""Audit log protocol (port) for login history.

The audit trail is append-only. Recording is fire-and-forget from the
caller's point of view: implementations MUST NOT raise, because a failing
audit sink degrades the trail but never aborts a login or registration.
"""

from typing import Protocol

from identity_service.domain.entities import LoginHistoryEntry


class AuditLogProtocol(Protocol):
    """Append-only login history sink.

    Implementations:
        - LoginHistoryAuditAdapter: database table, independent session
        - InMemoryAuditLog: tests
    """

    async def record(self, entry: LoginHistoryEntry) -> None:
        """Append one entry. Never raises."""
        ...
