"""Domain enums."""

from identity_service.domain.enums.account_status import AccountStatus
from identity_service.domain.enums.code_purpose import CodePurpose
from identity_service.domain.enums.login_failure_reason import LoginFailureReason

__all__ = ["AccountStatus", "CodePurpose", "LoginFailureReason"]
