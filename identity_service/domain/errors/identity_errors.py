"""Identity and session errors.

Returned inside ``Failure`` by the lifecycle operations. Messages are
user-safe: InvalidCredentialsError deliberately reads the same whether the
identifier was unknown or the password was wrong.

Usage:
    match result:
        case Failure(error=AccountLockedError()):
            ...
"""

from dataclasses import dataclass
from datetime import datetime

from identity_service.core.enums import ErrorCode
from identity_service.core.errors import AuthenticationError, ConflictError, DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class DuplicateIdentityError(ConflictError):
    """Email or username already registered."""

    code: ErrorCode = ErrorCode.DUPLICATE_IDENTITY
    message: str = "An account with this email or username already exists"
    resource_type: str = "account"


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidCredentialsError(AuthenticationError):
    """Unknown identifier or wrong password (indistinguishable)."""

    code: ErrorCode = ErrorCode.INVALID_CREDENTIALS
    message: str = "Invalid email or password"


@dataclass(frozen=True, slots=True, kw_only=True)
class VerificationRequiredError(AuthenticationError):
    """Credentials check blocked because the email is not verified.

    Attributes:
        email: Address the client can pass to the resend operation.
        requires_verification: Always True, surfaced to the client.
    """

    code: ErrorCode = ErrorCode.VERIFICATION_REQUIRED
    message: str = "Email address has not been verified"
    email: str = ""
    requires_verification: bool = True


@dataclass(frozen=True, slots=True, kw_only=True)
class AccountLockedError(AuthenticationError):
    """Account locked after repeated failed logins.

    Attributes:
        locked_until: When the lock lapses (None = manual unlock required).
    """

    code: ErrorCode = ErrorCode.ACCOUNT_LOCKED
    message: str = "Account is locked due to too many failed login attempts"
    locked_until: datetime | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AccountDisabledError(AuthenticationError):
    """Account suspended or deactivated by an administrator."""

    code: ErrorCode = ErrorCode.ACCOUNT_DISABLED
    message: str = "Account is not active"


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidCodeError(DomainError):
    """Submitted code does not match (or no code is outstanding)."""

    code: ErrorCode = ErrorCode.INVALID_CODE
    message: str = "Invalid verification code"


@dataclass(frozen=True, slots=True, kw_only=True)
class CodeExpiredError(DomainError):
    """Code submitted after its lifetime."""

    code: ErrorCode = ErrorCode.CODE_EXPIRED
    message: str = "Verification code has expired. Please request a new one"


@dataclass(frozen=True, slots=True, kw_only=True)
class TooManyAttemptsError(DomainError):
    """Attempt ceiling reached; a new code must be requested."""

    code: ErrorCode = ErrorCode.TOO_MANY_ATTEMPTS
    message: str = "Too many attempts. Please request a new code"


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionInvalidError(AuthenticationError):
    """Session token unknown, revoked or expired."""

    code: ErrorCode = ErrorCode.SESSION_INVALID
    message: str = "Session is invalid or has expired"


@dataclass(frozen=True, slots=True, kw_only=True)
class StoreUnavailableError(DomainError):
    """Durable store failed. Internal details stay in the logs."""

    code: ErrorCode = ErrorCode.STORE_UNAVAILABLE
    message: str = "The service is temporarily unavailable"
