"""Login history entry (immutable audit record)."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from uuid_extensions import uuid7

from identity_service.domain.enums import LoginFailureReason


@dataclass(frozen=True, slots=True, kw_only=True)
class LoginHistoryEntry:
    """One login attempt, successful or not.

    Append-only: entries are never updated or deleted.

    Attributes:
        account_id: Resolved account (None when the identifier did not resolve).
        success: Whether a session was issued.
        failure_reason: Why the attempt was rejected (None on success).
        ip_address: Client IP address.
        user_agent: Client user agent.
        occurred_at: When the attempt happened.
        id: Entry identifier.
    """

    account_id: UUID | None
    success: bool
    failure_reason: LoginFailureReason | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    id: UUID = field(default_factory=uuid7)
