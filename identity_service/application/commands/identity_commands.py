"""Identity commands (write operations).

Commands are immutable data containers (frozen, keyword-only). Handlers
in AccountLifecycle execute the business logic and return Result types.

Registration input arrives as a loosely-typed form; ``parse_registration``
turns it into either a validated RegisterAccount or a ValidationError
before anything touches the store.
"""

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from identity_service.core.enums import ErrorCode
from identity_service.core.errors import ValidationError
from identity_service.core.result import Failure, Result, Success
from identity_service.domain.types import Email, Password, Username


@dataclass(frozen=True, kw_only=True)
class RequestContext:
    """Client context captured at the boundary.

    Attributes:
        ip_address: Client IP address.
        user_agent: Client user agent header.
        device_info: Client-supplied device description.
    """

    ip_address: str | None = None
    user_agent: str | None = None
    device_info: str | None = None


@dataclass(frozen=True, kw_only=True)
class RegisterAccount:
    """Register a new account.

    The account starts in pending_verification and cannot sign in until the
    emailed code is confirmed.

    Attributes:
        email: Normalized email address.
        password: Plaintext password (hashed by the handler).
        first_name: Given name.
        last_name: Family name.
        username: Optional username; the email address is used when omitted.
    """

    email: str
    password: str
    first_name: str
    last_name: str
    username: str | None = None


@dataclass(frozen=True, kw_only=True)
class VerifyEmail:
    """Confirm an email address with the emailed 6-digit code."""

    email: str
    code: str


@dataclass(frozen=True, kw_only=True)
class ResendVerification:
    """Send a fresh verification code (always acknowledged)."""

    email: str


@dataclass(frozen=True, kw_only=True)
class Login:
    """Authenticate with email or username and password.

    Attributes:
        identifier: Email address or username.
        password: Plaintext password.
    """

    identifier: str
    password: str


@dataclass(frozen=True, kw_only=True)
class RequestPasswordReset:
    """Send a password reset code (always acknowledged)."""

    email: str


@dataclass(frozen=True, kw_only=True)
class ConfirmPasswordReset:
    """Replace the password using an emailed reset code.

    All sessions of the account are revoked on success.
    """

    email: str
    code: str
    new_password: str


@dataclass(frozen=True, kw_only=True)
class ChangePassword:
    """Change the password of an authenticated account.

    All sessions of the account are revoked on success.
    """

    account_id: UUID
    current_password: str
    new_password: str


class _RegistrationForm(BaseModel):
    """Registration form as submitted by clients."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    email: Email
    password: Password
    confirm_password: str
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    agree_to_terms: bool = False
    username: Username | None = None

    @model_validator(mode="after")
    def check_confirmation(self) -> "_RegistrationForm":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        if not self.agree_to_terms:
            raise ValueError("Terms and conditions must be accepted")
        return self


_FIELD_CODES = {
    "email": ErrorCode.INVALID_EMAIL,
    "password": ErrorCode.INVALID_PASSWORD,
    "username": ErrorCode.INVALID_USERNAME,
}


def parse_registration(data: dict[str, Any]) -> Result[RegisterAccount, ValidationError]:
    """Validate a registration form.

    Args:
        data: Raw form fields (email, password, confirm_password, first_name,
            last_name, agree_to_terms, optional username).

    Returns:
        Success(RegisterAccount) when the form is valid, otherwise
        Failure(ValidationError) describing the first problem found.

    Example:
        >>> parse_registration({"email": "alice@x.com", ...})
        Success(value=RegisterAccount(email='alice@x.com', ...))
    """
    try:
        form = _RegistrationForm.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or None
        message = str(first["msg"]).removeprefix("Value error, ")
        if field is None:
            code = (
                ErrorCode.PASSWORD_MISMATCH
                if "match" in message
                else ErrorCode.TERMS_NOT_ACCEPTED
            )
        else:
            code = _FIELD_CODES.get(field, ErrorCode.VALIDATION_FAILED)
        return Failure(error=ValidationError(code=code, message=message, field=field))

    return Success(
        value=RegisterAccount(
            email=form.email,
            password=form.password,
            first_name=form.first_name,
            last_name=form.last_name,
            username=form.username,
        )
    )
