"""Session database model.

Only the SHA-256 digest of the bearer token is stored.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from identity_service.infrastructure.persistence.base import BaseMutableModel, UTCDateTime


class SessionModel(BaseMutableModel):
    """Authenticated session.

    Indexes:
        - ix_sessions_token_hash (unique): bearer token lookup
        - ix_sessions_account_active: (account_id, is_active) for listing
          and mass revocation
    """

    __tablename__ = "sessions"

    account_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    )

    token_hash: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
        comment="SHA-256 hex digest of the bearer token",
    )

    device_info: Mapped[str | None] = mapped_column(String(255), nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String(500), nullable=True)

    expires_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    revoked_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)

    __table_args__ = (Index("ix_sessions_account_active", "account_id", "is_active"),)
