"""Login history (audit trail) adapters."""

from identity_service.infrastructure.audit.login_history_adapter import (
    LoginHistoryAuditAdapter,
)

__all__ = ["LoginHistoryAuditAdapter"]
