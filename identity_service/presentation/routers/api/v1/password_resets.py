"""Password reset resource routers.

Endpoints:
    POST /api/v1/password-reset-codes  - Request a reset code
    POST /api/v1/password-resets       - Reset the password with a code
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from identity_service.application.commands import ConfirmPasswordReset, RequestPasswordReset
from identity_service.application.services import AccountLifecycle
from identity_service.core.container import get_account_lifecycle
from identity_service.core.result import Failure, Success
from identity_service.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    ProblemDetails,
)
from identity_service.schemas.identity_schemas import (
    GENERIC_CODE_ACK,
    MessageResponse,
    PasswordResetCodeCreateRequest,
    PasswordResetCreateRequest,
)

reset_codes_router = APIRouter(prefix="/password-reset-codes", tags=["Password Resets"])
resets_router = APIRouter(prefix="/password-resets", tags=["Password Resets"])


@reset_codes_router.post("", response_model=MessageResponse, summary="Request reset code")
async def create_password_reset_code(
    request: Request,
    data: PasswordResetCodeCreateRequest,
    lifecycle: Annotated[AccountLifecycle, Depends(get_account_lifecycle)],
) -> MessageResponse | JSONResponse:
    """Always answers the same way whether or not the address is registered."""
    result = await lifecycle.request_password_reset(RequestPasswordReset(email=data.email))
    match result:
        case Success():
            return MessageResponse(message=GENERIC_CODE_ACK)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)


@resets_router.post(
    "",
    response_model=MessageResponse,
    responses={
        400: {"description": "Invalid or expired code", "model": ProblemDetails},
        429: {"description": "Too many attempts", "model": ProblemDetails},
    },
    summary="Reset password",
)
async def create_password_reset(
    request: Request,
    data: PasswordResetCreateRequest,
    lifecycle: Annotated[AccountLifecycle, Depends(get_account_lifecycle)],
) -> MessageResponse | JSONResponse:
    """Replace the password; all existing sessions are revoked."""
    result = await lifecycle.confirm_password_reset(
        ConfirmPasswordReset(email=data.email, code=data.code, new_password=data.new_password)
    )
    match result:
        case Success():
            return MessageResponse(message="Password has been reset. Please sign in.")
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)
