"""Session domain entity.

A session is the proof of an authenticated context. Only the hash of its
bearer token is held; the raw token exists once, in the response that
issued it.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID


@dataclass(slots=True, kw_only=True)
class Session:
    """Authenticated session bound to a device/IP context.

    Business Rules:
        - A session is valid only while active and before expires_at
        - Multiple concurrent sessions per account are allowed
        - Revocation (sign-out, password change) is the only mutation

    Attributes:
        id: Unique session identifier.
        account_id: Owning account.
        token_hash: SHA-256 hex digest of the bearer token.
        device_info: Client-supplied device description.
        ip_address: Client IP at creation.
        user_agent: Client user agent at creation.
        created_at: Creation timestamp.
        expires_at: Hard expiry.
        is_active: False once revoked.
        revoked_at: When the session was revoked.
    """

    id: UUID
    account_id: UUID
    token_hash: str
    expires_at: datetime
    device_info: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    is_active: bool = True
    revoked_at: datetime | None = None

    def is_expired(self, now: datetime) -> bool:
        """True once ``now`` is past expires_at."""
        return now >= self.expires_at

    def is_valid(self, now: datetime) -> bool:
        """Active and not expired.

        An expired session is invalid even while is_active is still True.
        """
        return self.is_active and not self.is_expired(now)
