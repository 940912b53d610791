"""Sessions resource router.

Endpoints:
    POST   /api/v1/sessions          - Create session (login)
    GET    /api/v1/sessions          - List active sessions
    DELETE /api/v1/sessions/current  - Delete current session (sign out)
    DELETE /api/v1/sessions          - Delete all sessions (sign out everywhere)
"""

from dataclasses import replace
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from identity_service.application.commands import Login, RequestContext
from identity_service.application.services import AccountLifecycle
from identity_service.core.container import get_account_lifecycle
from identity_service.core.result import Failure, Success
from identity_service.presentation.routers.api.middleware.auth_dependencies import (
    CurrentSession,
    get_current_session,
    get_request_context,
)
from identity_service.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    ProblemDetails,
)
from identity_service.schemas.identity_schemas import (
    AuthenticatedResponse,
    SessionCreateRequest,
    SessionListResponse,
    SessionResponse,
    SessionsRevokedResponse,
)

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.post(
    "",
    response_model=AuthenticatedResponse,
    responses={
        401: {"description": "Invalid credentials or unverified email", "model": ProblemDetails},
        403: {"description": "Account disabled", "model": ProblemDetails},
        423: {"description": "Account locked", "model": ProblemDetails},
    },
    summary="Create session (login)",
)
async def create_session(
    request: Request,
    data: SessionCreateRequest,
    context: Annotated[RequestContext, Depends(get_request_context)],
    lifecycle: Annotated[AccountLifecycle, Depends(get_account_lifecycle)],
) -> AuthenticatedResponse | JSONResponse:
    """Sign in with email or username and password.

    POST /api/v1/sessions → 200 OK with account and bearer token.
    """
    if data.device_info:
        context = replace(context, device_info=data.device_info)

    result = await lifecycle.login(
        Login(identifier=data.identifier, password=data.password), context
    )
    match result:
        case Success(value=outcome):
            return AuthenticatedResponse.from_outcome(outcome)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)


@router.get("", response_model=SessionListResponse, summary="List active sessions")
async def list_sessions(
    request: Request,
    current: Annotated[CurrentSession, Depends(get_current_session)],
    lifecycle: Annotated[AccountLifecycle, Depends(get_account_lifecycle)],
) -> SessionListResponse | JSONResponse:
    result = await lifecycle.list_sessions(current.account_id)
    match result:
        case Success(value=sessions):
            return SessionListResponse(
                sessions=[
                    SessionResponse.from_entity(s, current.session_id) for s in sessions
                ],
                total=len(sessions),
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)


@router.delete(
    "/current",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete current session (sign out)",
)
async def delete_current_session(
    request: Request,
    current: Annotated[CurrentSession, Depends(get_current_session)],
    lifecycle: Annotated[AccountLifecycle, Depends(get_account_lifecycle)],
) -> Response:
    result = await lifecycle.sign_out(current.session_id)
    match result:
        case Success():
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)


@router.delete(
    "",
    response_model=SessionsRevokedResponse,
    summary="Delete all sessions (sign out everywhere)",
)
async def delete_all_sessions(
    request: Request,
    current: Annotated[CurrentSession, Depends(get_current_session)],
    lifecycle: Annotated[AccountLifecycle, Depends(get_account_lifecycle)],
) -> SessionsRevokedResponse | JSONResponse:
    result = await lifecycle.sign_out_everywhere(current.account_id)
    match result:
        case Success(value=count):
            return SessionsRevokedResponse(revoked_count=count)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)
