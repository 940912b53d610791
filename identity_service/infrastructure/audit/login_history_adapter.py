"""Database implementation of AuditLogProtocol.

Writes login history rows through a session of its own, committed
immediately, so that:
    - an audit failure never rolls back the login that produced it
    - a rolled-back login still leaves its audit row behind

Failures are logged and swallowed; the protocol contract is that recording
never raises.

Usage:
    adapter = LoginHistoryAuditAdapter(database, logger)
    await adapter.record(LoginHistoryEntry(account_id=..., success=True))
"""

from sqlalchemy.exc import SQLAlchemyError

from identity_service.domain.entities import LoginHistoryEntry
from identity_service.domain.protocols import LoggerProtocol
from identity_service.infrastructure.persistence.database import Database
from identity_service.infrastructure.persistence.models import LoginHistoryModel


class LoginHistoryAuditAdapter:
    """Append-only login history backed by the login_history table.

    Attributes:
        database: Database used to open an independent session per record.
    """

    def __init__(self, database: Database, logger: LoggerProtocol) -> None:
        self.database = database
        self._logger = logger

    async def record(self, entry: LoginHistoryEntry) -> None:
        """Insert one login history row. Never raises."""
        try:
            async with self.database.get_session() as session:
                session.add(
                    LoginHistoryModel(
                        id=entry.id,
                        account_id=entry.account_id,
                        success=entry.success,
                        failure_reason=(
                            entry.failure_reason.value if entry.failure_reason else None
                        ),
                        ip_address=entry.ip_address,
                        user_agent=entry.user_agent,
                        occurred_at=entry.occurred_at,
                    )
                )
        except SQLAlchemyError as e:
            self._logger.error(
                "login_history_record_failed",
                error=e,
                account_id=str(entry.account_id) if entry.account_id else None,
                success=entry.success,
            )
