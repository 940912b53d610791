"""Centralized validation functions.

Pure functions that raise ValueError on invalid input, reused through the
Annotated types in ``identity_service.domain.types``.
"""

import re

from email_validator import EmailNotValidError
from email_validator import validate_email as check_email_syntax

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9@._-]+$")
CODE_PATTERN = re.compile(r"^\d{6}$")


def validate_email(v: str) -> str:
    """Validate email format and normalize it.

    Args:
        v: Email address to validate.

    Returns:
        Email stripped of surrounding whitespace and lowercased.

    Raises:
        ValueError: If email format is invalid.

    Example:
        >>> validate_email("  Alice@X.com ")
        'alice@x.com'
    """
    try:
        result = check_email_syntax(v.strip(), check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError("Invalid email format") from e
    return result.normalized.lower()


def validate_password(v: str) -> str:
    """Validate password length (8-128 characters).

    Returns:
        Password unchanged.

    Raises:
        ValueError: If the password is too short or too long.
    """
    if len(v) < 8:
        raise ValueError("Password must be at least 8 characters long")
    if len(v) > 128:
        raise ValueError("Password must be at most 128 characters long")
    return v


def validate_username(v: str) -> str:
    """Validate username characters and length.

    Usernames may contain letters, digits and ``@._-`` so that an email
    address is always a valid username.

    Raises:
        ValueError: If the username is empty, too long or has other characters.
    """
    cleaned = v.strip()
    if not cleaned or len(cleaned) > 100:
        raise ValueError("Username must be 1-100 characters long")
    if not USERNAME_PATTERN.match(cleaned):
        raise ValueError("Username may only contain letters, digits and @ . _ -")
    return cleaned.lower()


def validate_verification_code(v: str) -> str:
    """Validate a 6-digit numeric code (leading zeros allowed).

    Raises:
        ValueError: If the code is not exactly six digits.
    """
    cleaned = v.strip()
    if not CODE_PATTERN.match(cleaned):
        raise ValueError("Verification code must be 6 digits")
    return cleaned
