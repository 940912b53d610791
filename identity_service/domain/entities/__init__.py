"""Domain entities."""

from identity_service.domain.entities.account import Account
from identity_service.domain.entities.login_history_entry import LoginHistoryEntry
from identity_service.domain.entities.session import Session

__all__ = ["Account", "LoginHistoryEntry", "Session"]
