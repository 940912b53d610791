"""Container module - centralized dependency injection.

Organized by scope:
- infrastructure: application-scoped singletons (database, logging,
  hashing, notifications, audit)
- identity: request-scoped repositories and services

    from identity_service.core.container import get_account_lifecycle
"""

from identity_service.core.container.identity import (
    get_account_lifecycle,
    get_account_repository,
    get_session_manager,
    get_session_repository,
)
from identity_service.core.container.infrastructure import (
    get_audit_log,
    get_code_hasher,
    get_database,
    get_db_session,
    get_logger,
    get_login_guard,
    get_notification_dispatcher,
    get_notification_service,
    get_password_service,
    get_session_token_service,
)

__all__ = [
    "get_account_lifecycle",
    "get_account_repository",
    "get_audit_log",
    "get_code_hasher",
    "get_database",
    "get_db_session",
    "get_logger",
    "get_login_guard",
    "get_notification_dispatcher",
    "get_notification_service",
    "get_password_service",
    "get_session_manager",
    "get_session_repository",
    "get_session_token_service",
]
