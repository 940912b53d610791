"""Domain policies (pure decision functions)."""

from identity_service.domain.policies.login_attempt_guard import (
    LockoutDecision,
    LoginAttemptGuard,
)

__all__ = ["LockoutDecision", "LoginAttemptGuard"]
