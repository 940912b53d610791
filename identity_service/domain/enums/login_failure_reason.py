"""Reasons recorded in login history for rejected attempts."""

from enum import Enum


class LoginFailureReason(str, Enum):
    """Why a login attempt was rejected.

    Values are stored verbatim in the ``login_history.failure_reason`` column.
    """

    IDENTITY_NOT_FOUND = "identity_not_found"
    LOCKED = "locked"
    UNVERIFIED = "unverified"
    DISABLED = "disabled"
    BAD_PASSWORD = "bad_password"
