"""Identity dependency factories (request-scoped).

Repositories bind to the request's database session; services are built
per request around them and the application-scoped singletons.
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from identity_service.core.config import settings
from identity_service.core.container.infrastructure import (
    get_audit_log,
    get_code_hasher,
    get_db_session,
    get_logger,
    get_login_guard,
    get_notification_dispatcher,
    get_notification_service,
    get_password_service,
    get_session_token_service,
)

if TYPE_CHECKING:
    from identity_service.application.services import (
        AccountLifecycle,
        NotificationDispatcher,
        SessionManager,
    )
    from identity_service.domain.protocols import (
        AccountRepository,
        AuditLogProtocol,
        NotificationProtocol,
        SessionRepository,
    )


async def get_account_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "AccountRepository":
    from identity_service.infrastructure.persistence.repositories import (
        AccountRepository,
    )

    return AccountRepository(session=session)


async def get_session_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "SessionRepository":
    from identity_service.infrastructure.persistence.repositories import (
        SessionRepository,
    )

    return SessionRepository(session=session)


async def get_session_manager(
    session_repo: "SessionRepository" = Depends(get_session_repository),
) -> "SessionManager":
    from identity_service.application.services import SessionManager

    return SessionManager(
        session_repo=session_repo,
        token_service=get_session_token_service(),
        logger=get_logger(),
        ttl=settings.session_ttl,
    )


async def get_account_lifecycle(
    account_repo: "AccountRepository" = Depends(get_account_repository),
    session_manager: "SessionManager" = Depends(get_session_manager),
    audit_log: "AuditLogProtocol" = Depends(get_audit_log),
    notifier: "NotificationProtocol" = Depends(get_notification_service),
    dispatcher: "NotificationDispatcher" = Depends(get_notification_dispatcher),
) -> "AccountLifecycle":
    """Get AccountLifecycle (request-scoped).

    Creates a new instance per request with:
    - AccountRepository and SessionManager on the request session
    - VerificationCodeManager configured from settings
    - app-scoped hashing and logging singletons
    - audit, notification and dispatcher singletons injected through Depends
      so tests can override them

    Usage:
        @router.post("/sessions")
        async def create_session(
            lifecycle: AccountLifecycle = Depends(get_account_lifecycle),
        ):
            result = await lifecycle.login(command, context)
    """
    from identity_service.application.services import (
        AccountLifecycle,
        VerificationCodeManager,
    )

    code_manager = VerificationCodeManager(
        account_repo=account_repo,
        code_hasher=get_code_hasher(),
        ttl=settings.verification_code_ttl,
        max_attempts=settings.verification_max_attempts,
        resend_interval=settings.verification_resend_interval,
    )

    return AccountLifecycle(
        account_repo=account_repo,
        session_manager=session_manager,
        code_manager=code_manager,
        login_guard=get_login_guard(),
        password_service=get_password_service(),
        audit_log=audit_log,
        notifier=notifier,
        dispatcher=dispatcher,
        logger=get_logger(),
        lockout_duration=settings.lockout_duration,
    )
