"""RFC 7807 error handling for the v1 API."""

from identity_service.presentation.routers.api.v1.errors.error_response_builder import (
    ErrorResponseBuilder,
)
from identity_service.presentation.routers.api.v1.errors.exception_handlers import (
    register_exception_handlers,
)
from identity_service.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponseBuilder",
    "ProblemDetails",
    "register_exception_handlers",
]
