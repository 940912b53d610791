"""One-time code slot value object.

An account owns one slot per CodePurpose. The slot holds the digest of the
currently valid code (never the code itself), its expiry, the number of
failed submissions against it and when a code was last sent.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta


@dataclass(frozen=True, slots=True, kw_only=True)
class OneTimeCode:
    """State of a one-time code slot.

    Attributes:
        code_hash: Keyed digest of the outstanding code (None when no code is outstanding).
        expires_at: Expiry of the outstanding code.
        attempts: Failed submissions since the code was issued.
        last_sent_at: When a code was last issued for this slot (resend throttling).

    Example:
        >>> slot = OneTimeCode.empty()
        >>> slot.is_outstanding()
        False
    """

    code_hash: str | None = None
    expires_at: datetime | None = None
    attempts: int = 0
    last_sent_at: datetime | None = None

    @classmethod
    def empty(cls) -> "OneTimeCode":
        """Slot with no outstanding code and no history."""
        return cls()

    def is_outstanding(self) -> bool:
        """True while a code has been issued and not yet consumed."""
        return self.code_hash is not None

    def is_expired(self, now: datetime) -> bool:
        """True once ``now`` is past the code expiry.

        A slot without expiry counts as expired.
        """
        if self.expires_at is None:
            return True
        return now > self.expires_at

    def is_exhausted(self, max_attempts: int) -> bool:
        """True once the attempt ceiling is reached."""
        return self.attempts >= max_attempts

    def can_resend(self, now: datetime, interval: timedelta) -> bool:
        """True if the minimum resend interval has elapsed."""
        if self.last_sent_at is None:
            return True
        return now - self.last_sent_at >= interval

    def consumed(self) -> "OneTimeCode":
        """Slot after successful use: code cleared, send history kept."""
        return replace(self, code_hash=None, expires_at=None, attempts=0)
