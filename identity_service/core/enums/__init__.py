"""Core enums."""

from identity_service.core.enums.environment import Environment
from identity_service.core.enums.error_code import ErrorCode

__all__ = ["Environment", "ErrorCode"]
