"""Error response builder for RFC 7807 Problem Details.

Converts domain errors returned inside ``Failure`` into JSON responses with
the matching HTTP status.

Exports:
    ErrorResponseBuilder
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from identity_service.core.config import settings
from identity_service.core.enums import ErrorCode
from identity_service.core.errors import DomainError, ValidationError
from identity_service.domain.errors import AccountLockedError, VerificationRequiredError
from identity_service.presentation.routers.api.middleware.trace_middleware import (
    get_trace_id,
)
from identity_service.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

_STATUS_AND_TITLE: dict[ErrorCode, tuple[int, str]] = {
    ErrorCode.VALIDATION_FAILED: (status.HTTP_400_BAD_REQUEST, "Validation Failed"),
    ErrorCode.INVALID_EMAIL: (status.HTTP_400_BAD_REQUEST, "Validation Failed"),
    ErrorCode.INVALID_PASSWORD: (status.HTTP_400_BAD_REQUEST, "Validation Failed"),
    ErrorCode.PASSWORD_MISMATCH: (status.HTTP_400_BAD_REQUEST, "Validation Failed"),
    ErrorCode.TERMS_NOT_ACCEPTED: (status.HTTP_400_BAD_REQUEST, "Validation Failed"),
    ErrorCode.INVALID_USERNAME: (status.HTTP_400_BAD_REQUEST, "Validation Failed"),
    ErrorCode.DUPLICATE_IDENTITY: (status.HTTP_409_CONFLICT, "Account Already Exists"),
    ErrorCode.INVALID_CREDENTIALS: (status.HTTP_401_UNAUTHORIZED, "Invalid Credentials"),
    ErrorCode.VERIFICATION_REQUIRED: (
        status.HTTP_401_UNAUTHORIZED,
        "Email Verification Required",
    ),
    ErrorCode.ACCOUNT_LOCKED: (status.HTTP_423_LOCKED, "Account Locked"),
    ErrorCode.ACCOUNT_DISABLED: (status.HTTP_403_FORBIDDEN, "Account Disabled"),
    ErrorCode.SESSION_INVALID: (status.HTTP_401_UNAUTHORIZED, "Authentication Required"),
    ErrorCode.INVALID_CODE: (status.HTTP_400_BAD_REQUEST, "Invalid Code"),
    ErrorCode.CODE_EXPIRED: (status.HTTP_400_BAD_REQUEST, "Code Expired"),
    ErrorCode.TOO_MANY_ATTEMPTS: (status.HTTP_429_TOO_MANY_REQUESTS, "Too Many Attempts"),
    ErrorCode.ACCOUNT_NOT_FOUND: (status.HTTP_404_NOT_FOUND, "Resource Not Found"),
}


class ErrorResponseBuilder:
    """Build RFC 7807 Problem Details error responses.

    Example:
        >>> match result:
        ...     case Failure(error=error):
        ...         return ErrorResponseBuilder.from_domain_error(error, request)
    """

    @staticmethod
    def status_for(code: ErrorCode) -> int:
        return _STATUS_AND_TITLE.get(code, (status.HTTP_500_INTERNAL_SERVER_ERROR, ""))[0]

    @staticmethod
    def from_domain_error(error: DomainError, request: Request) -> JSONResponse:
        """Convert a DomainError to an RFC 7807 JSON response.

        Args:
            error: Domain error from a Failure.
            request: Request (for the instance path).

        Returns:
            JSONResponse with ProblemDetails content.
        """
        status_code, title = _STATUS_AND_TITLE.get(
            error.code,
            (status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"),
        )

        extensions: dict[str, object] = {}
        match error:
            case VerificationRequiredError(email=email):
                extensions["requires_verification"] = True
                extensions["email"] = email
            case AccountLockedError(locked_until=locked_until) if locked_until is not None:
                extensions["locked_until"] = locked_until.isoformat()

        problem = ProblemDetails(
            type=f"{settings.api_base_url}/errors/{error.code.value}",
            title=title,
            status=status_code,
            detail=error.message,
            instance=str(request.url.path),
            trace_id=get_trace_id(),
            **extensions,
        )

        if isinstance(error, ValidationError) and error.field:
            problem.errors = [
                ErrorDetail(field=error.field, code=error.code.value, message=error.message)
            ]

        headers = (
            {"WWW-Authenticate": "Bearer"}
            if error.code == ErrorCode.SESSION_INVALID
            else None
        )
        return JSONResponse(
            status_code=status_code,
            content=problem.model_dump(mode="json", exclude_none=True),
            headers=headers,
        )
