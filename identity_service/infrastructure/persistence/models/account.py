"""Account database model.

Security:
    - password_hash: NEVER stores plaintext passwords (bcrypt hashed)
    - *_code_hash: keyed digests of one-time codes, never the codes
    - failed_login_attempts / account_locked: written only through atomic
      statements in AccountRepository
"""

from datetime import datetime

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from identity_service.infrastructure.persistence.base import BaseMutableModel, UTCDateTime


class AccountModel(BaseMutableModel):
    """Account model for identity, verification and lockout state.

    Fields:
        id, created_at, updated_at: from BaseMutableModel
        email: Unique email address (lowercase)
        username: Unique username (lowercase, defaults to the email)
        password_hash: Bcrypt hash
        first_name, last_name: Profile names
        account_status: pending_verification | active | suspended | inactive
        email_verified: Email ownership proven
        verification_code_hash, verification_code_expires,
        verification_attempts, last_verification_attempt: email code slot
        reset_code_hash, reset_code_expires, reset_attempts,
        last_reset_request: password reset code slot
        failed_login_attempts: Consecutive failed logins
        account_locked: Lockout flag
        locked_until: Auto-unlock time (null = manual unlock only)
        password_last_changed: Last password change

    Indexes:
        - ix_accounts_email (unique)
        - ix_accounts_username (unique)
    """

    __tablename__ = "accounts"

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Email address (unique, lowercase)",
    )

    username: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Username (unique, lowercase)",
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password",
    )

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)

    account_status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default="pending_verification",
        index=True,
    )

    email_verified: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Email verification status (must be True to login)",
    )

    # Email verification code slot
    verification_code_hash: Mapped[str | None] = mapped_column(String(64), nullable=True)
    verification_code_expires: Mapped[datetime | None] = mapped_column(
        UTCDateTime, nullable=True
    )
    verification_attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_verification_attempt: Mapped[datetime | None] = mapped_column(
        UTCDateTime,
        nullable=True,
        comment="When a verification code was last sent (resend throttling)",
    )

    # Password reset code slot
    reset_code_hash: Mapped[str | None] = mapped_column(String(64), nullable=True)
    reset_code_expires: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    reset_attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_reset_request: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)

    # Lockout
    failed_login_attempts: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Consecutive failed logins (resets on success)",
    )
    account_locked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    locked_until: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)

    password_last_changed: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<AccountModel("
            f"id={self.id}, "
            f"email={self.email!r}, "
            f"status={self.account_status}, "
            f"locked={self.account_locked}"
            f")>"
        )
