"""Infrastructure dependency factories.

Application-scoped singletons (cached with lru_cache):
- Database (PostgreSQL in production, SQLite in tests)
- Logging (structlog console adapter)
- Password hashing (bcrypt), code digests (HMAC), session tokens
- Notifications (stub) and their background dispatcher
- Login history audit adapter

Request-scoped:
- Database session (get_db_session)
"""

from functools import lru_cache
from typing import TYPE_CHECKING, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from identity_service.core.config import settings
from identity_service.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from identity_service.application.services import NotificationDispatcher
    from identity_service.domain.policies import LoginAttemptGuard
    from identity_service.domain.protocols import (
        AuditLogProtocol,
        CodeHashingProtocol,
        LoggerProtocol,
        NotificationProtocol,
        PasswordHashingProtocol,
    )
    from identity_service.infrastructure.security import SessionTokenService


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Engine and connection pool are shared across the application.
    """
    return Database(database_url=settings.database_url, echo=settings.db_echo)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    Commits on success, rolls back on exception, always closes.

    Usage:
        @router.post("/accounts")
        async def create_account(session: AsyncSession = Depends(get_db_session)):
            ...
    """
    db = get_database()
    async with db.get_session() as session:
        yield session


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)
    """
    from identity_service.infrastructure.logging import ConsoleAdapter

    return ConsoleAdapter(use_json=not settings.is_development, level=settings.log_level)


@lru_cache()
def get_password_service() -> "PasswordHashingProtocol":
    """Get bcrypt password service singleton (cost factor from settings)."""
    from identity_service.infrastructure.security import BcryptPasswordService

    return BcryptPasswordService(cost_factor=settings.bcrypt_rounds)


@lru_cache()
def get_code_hasher() -> "CodeHashingProtocol":
    """Get one-time code hasher singleton keyed by the application secret."""
    from identity_service.infrastructure.security import HmacCodeHasher

    return HmacCodeHasher(secret_key=settings.secret_key)


@lru_cache()
def get_session_token_service() -> "SessionTokenService":
    from identity_service.infrastructure.security import SessionTokenService

    return SessionTokenService()


@lru_cache()
def get_login_guard() -> "LoginAttemptGuard":
    from identity_service.domain.policies import LoginAttemptGuard

    return LoginAttemptGuard(threshold=settings.lockout_threshold)


@lru_cache()
def get_notification_service() -> "NotificationProtocol":
    """Get notification service singleton.

    Only the stub exists; codes are revealed in the log in development.
    """
    from identity_service.infrastructure.notifications import StubNotificationService

    return StubNotificationService(
        logger=get_logger(),
        app_name=settings.app_name,
        code_ttl_minutes=settings.verification_code_ttl_minutes,
        reveal_codes=settings.is_development,
    )


@lru_cache()
def get_notification_dispatcher() -> "NotificationDispatcher":
    from identity_service.application.services import NotificationDispatcher

    return NotificationDispatcher(
        logger=get_logger(),
        timeout_seconds=settings.notification_timeout_seconds,
    )


@lru_cache()
def get_audit_log() -> "AuditLogProtocol":
    """Get login history adapter singleton.

    Opens its own database session per record, independent of the request
    session.
    """
    from identity_service.infrastructure.audit import LoginHistoryAuditAdapter

    return LoginHistoryAuditAdapter(database=get_database(), logger=get_logger())
