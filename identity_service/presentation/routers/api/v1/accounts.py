"""Accounts resource router.

Endpoints:
    POST /api/v1/accounts              - Create account (registration)
    GET  /api/v1/accounts/me           - Current account profile
    POST /api/v1/accounts/me/password  - Change password
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from identity_service.application.commands import ChangePassword, parse_registration
from identity_service.application.services import AccountLifecycle
from identity_service.core.container import get_account_lifecycle
from identity_service.core.result import Failure, Success
from identity_service.presentation.routers.api.middleware.auth_dependencies import (
    CurrentSession,
    get_current_session,
)
from identity_service.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    ProblemDetails,
)
from identity_service.schemas.identity_schemas import (
    AccountCreateRequest,
    AccountCreateResponse,
    AccountResponse,
    MessageResponse,
    PasswordChangeRequest,
)

router = APIRouter(prefix="/accounts", tags=["Accounts"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=AccountCreateResponse,
    responses={
        400: {"description": "Invalid registration form", "model": ProblemDetails},
        409: {"description": "Email or username taken", "model": ProblemDetails},
    },
    summary="Create account",
)
async def create_account(
    request: Request,
    data: AccountCreateRequest,
    lifecycle: Annotated[AccountLifecycle, Depends(get_account_lifecycle)],
) -> AccountCreateResponse | JSONResponse:
    """Register a new account.

    POST /api/v1/accounts → 201 Created

    The account starts unverified; a 6-digit code is emailed and must be
    submitted to /email-verifications before a session can be created.
    """
    parsed = parse_registration(data.model_dump())
    if isinstance(parsed, Failure):
        return ErrorResponseBuilder.from_domain_error(parsed.error, request)

    result = await lifecycle.register(parsed.value)
    match result:
        case Success(value=registered):
            return AccountCreateResponse(
                id=registered.account.id,
                email=registered.account.email,
                username=registered.account.username,
                requires_verification=registered.requires_verification,
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)


@router.get(
    "/me",
    response_model=AccountResponse,
    responses={401: {"description": "Not authenticated", "model": ProblemDetails}},
    summary="Current account",
)
async def get_my_account(
    request: Request,
    current: Annotated[CurrentSession, Depends(get_current_session)],
    lifecycle: Annotated[AccountLifecycle, Depends(get_account_lifecycle)],
) -> AccountResponse | JSONResponse:
    result = await lifecycle.get_profile(current.account_id)
    match result:
        case Success(value=profile):
            return AccountResponse.from_profile(profile)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)


@router.post(
    "/me/password",
    response_model=MessageResponse,
    responses={
        400: {"description": "Invalid new password", "model": ProblemDetails},
        401: {"description": "Wrong current password", "model": ProblemDetails},
    },
    summary="Change password",
)
async def change_my_password(
    request: Request,
    data: PasswordChangeRequest,
    current: Annotated[CurrentSession, Depends(get_current_session)],
    lifecycle: Annotated[AccountLifecycle, Depends(get_account_lifecycle)],
) -> MessageResponse | JSONResponse:
    """Change the password; every session, including this one, is revoked."""
    result = await lifecycle.change_password(
        ChangePassword(
            account_id=current.account_id,
            current_password=data.current_password,
            new_password=data.new_password,
        )
    )
    match result:
        case Success():
            return MessageResponse(message="Password changed. Please sign in again.")
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)
