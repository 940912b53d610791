"""Email verifications resource router.

Endpoints:
    POST /api/v1/email-verifications         - Verify email (and sign in)
    POST /api/v1/email-verifications/resend  - Send a new code
"""

from dataclasses import replace
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from identity_service.application.commands import (
    RequestContext,
    ResendVerification,
    VerifyEmail,
)
from identity_service.application.services import AccountLifecycle
from identity_service.core.container import get_account_lifecycle
from identity_service.core.result import Failure, Success
from identity_service.presentation.routers.api.middleware.auth_dependencies import (
    get_request_context,
)
from identity_service.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    ProblemDetails,
)
from identity_service.schemas.identity_schemas import (
    GENERIC_CODE_ACK,
    AuthenticatedResponse,
    EmailVerificationCreateRequest,
    MessageResponse,
    VerificationResendRequest,
)

router = APIRouter(prefix="/email-verifications", tags=["Email Verifications"])


@router.post(
    "",
    response_model=AuthenticatedResponse,
    responses={
        400: {"description": "Invalid or expired code", "model": ProblemDetails},
        429: {"description": "Too many attempts", "model": ProblemDetails},
    },
    summary="Create email verification",
)
async def create_email_verification(
    request: Request,
    data: EmailVerificationCreateRequest,
    context: Annotated[RequestContext, Depends(get_request_context)],
    lifecycle: Annotated[AccountLifecycle, Depends(get_account_lifecycle)],
) -> AuthenticatedResponse | JSONResponse:
    """Verify the email address with the 6-digit code.

    POST /api/v1/email-verifications → 200 OK

    On success the account becomes active and a session is issued.
    """
    if data.device_info:
        context = replace(context, device_info=data.device_info)

    result = await lifecycle.verify_email(VerifyEmail(email=data.email, code=data.code), context)
    match result:
        case Success(value=outcome):
            return AuthenticatedResponse.from_outcome(outcome)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)


@router.post(
    "/resend",
    response_model=MessageResponse,
    summary="Resend verification code",
)
async def resend_verification_code(
    request: Request,
    data: VerificationResendRequest,
    lifecycle: Annotated[AccountLifecycle, Depends(get_account_lifecycle)],
) -> MessageResponse | JSONResponse:
    """Always answers the same way whether or not the address is registered."""
    result = await lifecycle.resend_verification(ResendVerification(email=data.email))
    match result:
        case Success():
            return MessageResponse(message=GENERIC_CODE_ACK)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)
