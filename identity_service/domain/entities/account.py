"""Account domain entity (aggregate root).

Pure business logic, no framework dependencies.

Verification-code fields and lockout counters are owned fields of the
account: they share its consistency boundary and are written together with
account state.

Invariants:
    - account_status == ACTIVE implies email_verified
    - a verified account never carries an outstanding verification code
    - account_locked blocks session issuance regardless of password correctness
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from identity_service.domain.enums import AccountStatus, CodePurpose
from identity_service.domain.value_objects import OneTimeCode


@dataclass
class Account:
    """Account domain entity with verification and lockout rules.

    Attributes:
        id: Unique account identifier.
        email: Unique email address (lowercase).
        username: Unique username (defaults to the email address).
        password_hash: Bcrypt hash, algorithm, cost factor and salt embedded.
        first_name: Given name.
        last_name: Family name.
        account_status: Lifecycle status.
        email_verified: Whether the email address has been proven.
        verification: Email verification code slot.
        password_reset: Password reset code slot.
        failed_login_attempts: Consecutive failed logins.
        account_locked: Lockout flag set by the login attempt guard.
        locked_until: End of the automatic unlock window (None = manual unlock only).
        password_last_changed: When the password hash was last replaced.
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.

    Example:
        >>> account = Account(
        ...     id=uuid7(),
        ...     email="alice@x.com",
        ...     username="alice@x.com",
        ...     password_hash="$2b$12$...",
        ...     first_name="Alice",
        ...     last_name="Liddell",
        ... )
        >>> account.account_status
        <AccountStatus.PENDING_VERIFICATION: 'pending_verification'>
    """

    id: UUID
    email: str
    username: str
    password_hash: str
    first_name: str
    last_name: str
    account_status: AccountStatus = AccountStatus.PENDING_VERIFICATION
    email_verified: bool = False
    verification: OneTimeCode = field(default_factory=OneTimeCode.empty)
    password_reset: OneTimeCode = field(default_factory=OneTimeCode.empty)
    failed_login_attempts: int = 0
    account_locked: bool = False
    locked_until: datetime | None = None
    password_last_changed: datetime = field(default_factory=lambda: datetime.now(UTC))
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if self.account_status == AccountStatus.ACTIVE and not self.email_verified:
            raise ValueError("An active account must have a verified email")
        if self.email_verified and self.verification.is_outstanding():
            raise ValueError("A verified account cannot hold a verification code")

    def is_locked(self, now: datetime) -> bool:
        """Check whether the lockout is in force at ``now``.

        A lock with a ``locked_until`` in the past has lapsed and no longer
        blocks logins (it is cleared on the next attempt).
        """
        if not self.account_locked:
            return False
        if self.locked_until is None:
            return True
        return now < self.locked_until

    def lock_has_lapsed(self, now: datetime) -> bool:
        """True when the account is flagged locked but its window has passed."""
        return self.account_locked and not self.is_locked(now)

    def is_disabled(self) -> bool:
        """Suspended and inactive accounts cannot sign in."""
        return self.account_status in (AccountStatus.SUSPENDED, AccountStatus.INACTIVE)

    def code_slot(self, purpose: CodePurpose) -> OneTimeCode:
        """Return the code slot for a purpose."""
        if purpose == CodePurpose.EMAIL_VERIFICATION:
            return self.verification
        return self.password_reset

    def replace_code_slot(self, purpose: CodePurpose, slot: OneTimeCode) -> None:
        """Replace the code slot for a purpose."""
        if purpose == CodePurpose.EMAIL_VERIFICATION:
            self.verification = slot
        else:
            self.password_reset = slot

    def mark_email_verified(self, now: datetime) -> None:
        """Transition pending_verification -> active.

        Sets the verified flag and the status together and clears the
        verification code so the code cannot be reused.
        """
        self.email_verified = True
        if self.account_status == AccountStatus.PENDING_VERIFICATION:
            self.account_status = AccountStatus.ACTIVE
        self.verification = self.verification.consumed()
        self.updated_at = now

    def change_password_hash(self, password_hash: str, now: datetime) -> None:
        """Replace the password hash and stamp the change time."""
        self.password_hash = password_hash
        self.password_last_changed = now
        self.updated_at = now

    def unlock(self, now: datetime) -> None:
        """Clear the lockout flag and the failed-login counter."""
        self.account_locked = False
        self.locked_until = None
        self.failed_login_attempts = 0
        self.updated_at = now
