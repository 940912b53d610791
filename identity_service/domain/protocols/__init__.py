"""Domain protocols (ports).

Infrastructure provides the adapters; implementations do not inherit from
these protocols (structural typing).
"""

from identity_service.domain.protocols.account_repository import AccountRepository
from identity_service.domain.protocols.audit_log_protocol import AuditLogProtocol
from identity_service.domain.protocols.code_hashing_protocol import CodeHashingProtocol
from identity_service.domain.protocols.logger_protocol import LoggerProtocol
from identity_service.domain.protocols.notification_protocol import NotificationProtocol
from identity_service.domain.protocols.password_hashing_protocol import (
    PasswordHashingProtocol,
)
from identity_service.domain.protocols.session_repository import SessionRepository
from identity_service.domain.protocols.session_token_protocol import SessionTokenProtocol

__all__ = [
    "AccountRepository",
    "AuditLogProtocol",
    "CodeHashingProtocol",
    "LoggerProtocol",
    "NotificationProtocol",
    "PasswordHashingProtocol",
    "SessionRepository",
    "SessionTokenProtocol",
]
