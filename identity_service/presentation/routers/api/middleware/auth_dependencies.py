"""Session authentication dependencies.

Protected routes resolve the bearer token to a live session through
AccountLifecycle.authenticate (SessionManager.validate underneath).

Usage:
    @router.get("/accounts/me")
    async def me(current: CurrentSession = Depends(get_current_session)):
        return {"account_id": str(current.account_id)}
"""

from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from identity_service.application.commands import RequestContext
from identity_service.application.services import AccountLifecycle
from identity_service.core.container import get_account_lifecycle
from identity_service.core.enums import ErrorCode
from identity_service.core.result import Success

# Missing credentials are reported by get_current_session itself (401)
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class CurrentSession:
    """Authenticated session of the caller.

    Attributes:
        session_id: Session resolved from the bearer token.
        account_id: Owning account.
    """

    session_id: UUID
    account_id: UUID


async def get_current_session(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    lifecycle: Annotated[AccountLifecycle, Depends(get_account_lifecycle)],
) -> CurrentSession:
    """Resolve the Authorization bearer token to a valid session.

    Raises:
        HTTPException 401: Token missing, unknown, revoked or expired.
        HTTPException 500: Session store unavailable.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    result = await lifecycle.authenticate(credentials.credentials)
    if isinstance(result, Success):
        return CurrentSession(session_id=result.value.id, account_id=result.value.account_id)

    if result.error.code == ErrorCode.STORE_UNAVAILABLE:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=result.error.message,
        )
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=result.error.message,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_request_context(request: Request) -> RequestContext:
    """Client context (IP, user agent, device) for audit and sessions."""
    return RequestContext(
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        device_info=request.headers.get("x-device-info"),
    )
