"""Purposes a one-time code can be issued for."""

from enum import Enum


class CodePurpose(str, Enum):
    """Each purpose owns a separate code slot on the account."""

    EMAIL_VERIFICATION = "email_verification"
    PASSWORD_RESET = "password_reset"
