"""AccountRepository protocol for account persistence."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from identity_service.core.result import Result
from identity_service.domain.entities import Account
from identity_service.domain.enums import CodePurpose
from identity_service.domain.errors import DuplicateIdentityError
from identity_service.domain.policies import LockoutDecision, LoginAttemptGuard


class AccountRepository(Protocol):
    """Account repository protocol (port).

    Store errors are raised by implementations and handled by the caller.
    """

    async def create(self, account: Account) -> Result[None, DuplicateIdentityError]:
        """Insert a new account.

        Uniqueness of email and username is enforced by the store itself;
        a conflict is reported as Failure(DuplicateIdentityError) instead of
        being pre-checked with a read.
        """
        ...

    async def find_by_id(self, account_id: UUID) -> Account | None:
        """Find account by ID."""
        ...

    async def find_by_email(self, email: str) -> Account | None:
        """Find account by email (case-insensitive)."""
        ...

    async def find_by_identifier(self, identifier: str) -> Account | None:
        """Find account by email or username (case-insensitive)."""
        ...

    async def update(self, account: Account) -> None:
        """Persist profile, status and code-slot fields of an existing account.

        Lockout counters are not written here; they change only through
        record_failed_login, reset_failed_logins and clear_lockout. A code
        slot's attempt counter is written only when that slot's code was
        minted or consumed; otherwise it changes only through
        claim_code_attempt.
        """
        ...

    async def record_failed_login(
        self, account_id: UUID, guard: LoginAttemptGuard, locked_until: datetime | None
    ) -> LockoutDecision:
        """Apply one failed login atomically.

        Reads the current counter, asks the guard for the new counters and
        writes them in a single atomic step scoped to the account row.

        Args:
            account_id: Account that failed to authenticate.
            guard: Lockout policy.
            locked_until: Unlock time to store if this failure locks the account.

        Returns:
            The decision that was persisted.
        """
        ...

    async def reset_failed_logins(self, account_id: UUID) -> None:
        """Reset failed_login_attempts to 0."""
        ...

    async def clear_lockout(self, account_id: UUID) -> None:
        """Unlock the account and reset failed_login_attempts to 0."""
        ...

    async def claim_code_attempt(
        self, account_id: UUID, purpose: CodePurpose, max_attempts: int
    ) -> int | None:
        """Atomically count one submission against a code slot.

        The counter is incremented only while it is below max_attempts, in a
        single conditional write, so concurrent submissions can never claim
        more than max_attempts between them.

        Returns:
            The attempt count after the increment, or None when the ceiling
            was already reached.
        """
        ...
