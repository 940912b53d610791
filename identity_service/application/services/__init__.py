"""Application services."""

from identity_service.application.services.account_lifecycle import AccountLifecycle
from identity_service.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from identity_service.application.services.session_manager import SessionManager
from identity_service.application.services.verification_code_manager import (
    VerificationCodeManager,
)

__all__ = [
    "AccountLifecycle",
    "NotificationDispatcher",
    "SessionManager",
    "VerificationCodeManager",
]
