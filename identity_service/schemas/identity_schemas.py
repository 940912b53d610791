"""Identity request/response schemas.

Pydantic models for API request validation and response serialization.
Kept separate from domain entities; these are HTTP-layer concerns.

RESTful Endpoints:
    POST   /api/v1/accounts                    - Create account (registration)
    GET    /api/v1/accounts/me                 - Current account
    POST   /api/v1/accounts/me/password        - Change password
    POST   /api/v1/sessions                    - Create session (login)
    GET    /api/v1/sessions                    - List active sessions
    DELETE /api/v1/sessions/current            - Delete session (sign out)
    DELETE /api/v1/sessions                    - Delete all sessions
    POST   /api/v1/email-verifications         - Create verification (verify email)
    POST   /api/v1/email-verifications/resend  - Resend verification code
    POST   /api/v1/password-reset-codes        - Request reset code
    POST   /api/v1/password-resets             - Create reset (confirm)
"""

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from identity_service.application.dtos import (
    AccountProfile,
    AuthenticatedSession,
    IssuedSession,
)
from identity_service.domain.entities import Session
from identity_service.domain.types import Email, Password, VerificationCode

GENERIC_CODE_ACK = "If the address is registered, a code has been sent."


# =============================================================================
# Accounts
# =============================================================================


class AccountCreateRequest(BaseModel):
    """Request schema for account creation (registration).

    POST /api/v1/accounts
    Returns: 201 Created

    Field rules (password length and match, terms, username characters) are
    checked by the registration parser so every rejection reads the same.
    """

    email: str = Field(..., examples=["alice@x.com"])
    password: str = Field(..., examples=["password123"])
    confirm_password: str = Field(..., examples=["password123"])
    first_name: str = Field(..., examples=["Alice"])
    last_name: str = Field(..., examples=["Liddell"])
    agree_to_terms: bool = Field(default=False)
    username: str | None = Field(default=None, examples=["alice"])


class AccountResponse(BaseModel):
    """Public account representation."""

    id: UUID
    email: str
    username: str
    first_name: str
    last_name: str
    account_status: str
    email_verified: bool
    created_at: datetime

    @classmethod
    def from_profile(cls, profile: AccountProfile) -> "AccountResponse":
        return cls(
            id=profile.id,
            email=profile.email,
            username=profile.username,
            first_name=profile.first_name,
            last_name=profile.last_name,
            account_status=profile.account_status.value,
            email_verified=profile.email_verified,
            created_at=profile.created_at,
        )


class AccountCreateResponse(BaseModel):
    """Response schema for account creation (201 Created).

    The account must verify its email before creating a session.
    """

    id: UUID
    email: str
    username: str
    requires_verification: bool = True
    message: str = "Registration successful. Please check your email for a verification code."


class PasswordChangeRequest(BaseModel):
    """POST /api/v1/accounts/me/password"""

    current_password: str = Field(..., min_length=1, max_length=128)
    new_password: Password


# =============================================================================
# Sessions
# =============================================================================


class SessionCreateRequest(BaseModel):
    """Request schema for session creation (login).

    POST /api/v1/sessions

    The identifier may be an email address or a username; ``email`` and
    ``username`` are accepted as aliases.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"identifier": "alice@x.com", "password": "password123"}
        }
    )

    identifier: str = Field(
        ...,
        min_length=1,
        max_length=255,
        validation_alias=AliasChoices("identifier", "email", "username"),
    )
    password: str = Field(..., min_length=1, max_length=128)
    device_info: str | None = Field(default=None, max_length=255)


class SessionTokenResponse(BaseModel):
    """Issued bearer token (returned once)."""

    session_id: UUID
    token: str
    token_type: str = "bearer"
    expires_at: datetime

    @classmethod
    def from_issued(cls, issued: IssuedSession) -> "SessionTokenResponse":
        return cls(
            session_id=issued.session_id, token=issued.token, expires_at=issued.expires_at
        )


class AuthenticatedResponse(BaseModel):
    """Account plus session, returned by login and email verification."""

    account: AccountResponse
    session: SessionTokenResponse

    @classmethod
    def from_outcome(cls, outcome: AuthenticatedSession) -> "AuthenticatedResponse":
        return cls(
            account=AccountResponse.from_profile(outcome.account),
            session=SessionTokenResponse.from_issued(outcome.session),
        )


class SessionResponse(BaseModel):
    """One active session (token never included)."""

    id: UUID
    device_info: str | None
    ip_address: str | None
    user_agent: str | None
    created_at: datetime
    expires_at: datetime
    is_current: bool

    @classmethod
    def from_entity(cls, session: Session, current_session_id: UUID) -> "SessionResponse":
        return cls(
            id=session.id,
            device_info=session.device_info,
            ip_address=session.ip_address,
            user_agent=session.user_agent,
            created_at=session.created_at,
            expires_at=session.expires_at,
            is_current=session.id == current_session_id,
        )


class SessionListResponse(BaseModel):
    sessions: list[SessionResponse]
    total: int


class SessionsRevokedResponse(BaseModel):
    revoked_count: int


# =============================================================================
# Email verification and password reset
# =============================================================================


class EmailVerificationCreateRequest(BaseModel):
    """POST /api/v1/email-verifications"""

    email: Email
    code: VerificationCode
    device_info: str | None = Field(default=None, max_length=255)


class VerificationResendRequest(BaseModel):
    """POST /api/v1/email-verifications/resend"""

    email: Email


class PasswordResetCodeCreateRequest(BaseModel):
    """POST /api/v1/password-reset-codes"""

    email: Email


class PasswordResetCreateRequest(BaseModel):
    """POST /api/v1/password-resets"""

    email: Email
    code: VerificationCode
    new_password: Password


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
