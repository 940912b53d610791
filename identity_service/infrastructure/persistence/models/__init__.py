"""Database models.

Domain entities (dataclasses) live in identity_service/domain/entities/;
these SQLAlchemy models map to tables and are converted by the repositories.
"""

from identity_service.infrastructure.persistence.models.account import AccountModel
from identity_service.infrastructure.persistence.models.login_history import (
    LoginHistoryModel,
)
from identity_service.infrastructure.persistence.models.session import SessionModel

__all__ = ["AccountModel", "LoginHistoryModel", "SessionModel"]
