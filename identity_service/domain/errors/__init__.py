"""Identity domain errors."""

from identity_service.domain.errors.identity_errors import (
    AccountDisabledError,
    AccountLockedError,
    CodeExpiredError,
    DuplicateIdentityError,
    InvalidCodeError,
    InvalidCredentialsError,
    SessionInvalidError,
    StoreUnavailableError,
    TooManyAttemptsError,
    VerificationRequiredError,
)

__all__ = [
    "AccountDisabledError",
    "AccountLockedError",
    "CodeExpiredError",
    "DuplicateIdentityError",
    "InvalidCodeError",
    "InvalidCredentialsError",
    "SessionInvalidError",
    "StoreUnavailableError",
    "TooManyAttemptsError",
    "VerificationRequiredError",
]
