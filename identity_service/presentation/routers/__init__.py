"""HTTP routers."""

from identity_service.presentation.routers.api.v1 import v1_router
from identity_service.presentation.routers.system import system_router

__all__ = ["system_router", "v1_router"]
