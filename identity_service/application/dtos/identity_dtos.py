"""Identity DTOs (Data Transfer Objects).

Result dataclasses carried from AccountLifecycle back to the presentation
layer.

DTOs:
    - AccountProfile: public view of an account (no hashes, no counters)
    - IssuedSession: a freshly minted session with its raw bearer token
    - AuthenticatedSession: result of login and email verification
    - RegisteredAccount: result of registration
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from identity_service.domain.entities import Account
from identity_service.domain.enums import AccountStatus


@dataclass(frozen=True, kw_only=True)
class AccountProfile:
    """Public view of an account.

    Attributes:
        id: Account identifier.
        email: Email address.
        username: Username.
        first_name: Given name.
        last_name: Family name.
        account_status: Lifecycle status.
        email_verified: Whether the email has been proven.
        created_at: Registration time.
    """

    id: UUID
    email: str
    username: str
    first_name: str
    last_name: str
    account_status: AccountStatus
    email_verified: bool
    created_at: datetime

    @classmethod
    def from_account(cls, account: Account) -> "AccountProfile":
        return cls(
            id=account.id,
            email=account.email,
            username=account.username,
            first_name=account.first_name,
            last_name=account.last_name,
            account_status=account.account_status,
            email_verified=account.email_verified,
            created_at=account.created_at,
        )


@dataclass(frozen=True, kw_only=True)
class IssuedSession:
    """Newly issued session.

    The raw token is returned exactly once; only its hash is stored.

    Attributes:
        session_id: Session identifier.
        token: Opaque bearer token.
        expires_at: Hard expiry.
    """

    session_id: UUID
    token: str
    expires_at: datetime


@dataclass(frozen=True, kw_only=True)
class AuthenticatedSession:
    """Account plus the session issued for it."""

    account: AccountProfile
    session: IssuedSession


@dataclass(frozen=True, kw_only=True)
class RegisteredAccount:
    """Response from registration.

    Attributes:
        account: The created account.
        requires_verification: Always True; sign-in needs the emailed code first.
    """

    account: AccountProfile
    requires_verification: bool = True
