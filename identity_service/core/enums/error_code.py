"""Machine-readable error codes.

Codes follow the ENTITY_REASON naming convention and are the stable
contract between the application layer and the HTTP layer, which maps
each code to a status code and problem type.
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes."""

    # Validation
    VALIDATION_FAILED = "validation_failed"
    INVALID_EMAIL = "invalid_email"
    INVALID_PASSWORD = "invalid_password"
    PASSWORD_MISMATCH = "password_mismatch"
    TERMS_NOT_ACCEPTED = "terms_not_accepted"
    INVALID_USERNAME = "invalid_username"

    # Conflicts
    DUPLICATE_IDENTITY = "duplicate_identity"

    # Authentication
    INVALID_CREDENTIALS = "invalid_credentials"
    VERIFICATION_REQUIRED = "verification_required"
    ACCOUNT_LOCKED = "account_locked"
    ACCOUNT_DISABLED = "account_disabled"
    SESSION_INVALID = "session_invalid"

    # One-time codes
    INVALID_CODE = "invalid_code"
    CODE_EXPIRED = "code_expired"
    TOO_MANY_ATTEMPTS = "too_many_attempts"

    # Resources
    ACCOUNT_NOT_FOUND = "account_not_found"

    # Infrastructure
    STORE_UNAVAILABLE = "store_unavailable"
    AUDIT_RECORD_FAILED = "audit_record_failed"
    NOTIFICATION_FAILED = "notification_failed"
