"""API v1 router aggregation."""

from fastapi import APIRouter

from identity_service.presentation.routers.api.v1.accounts import router as accounts_router
from identity_service.presentation.routers.api.v1.email_verifications import (
    router as email_verifications_router,
)
from identity_service.presentation.routers.api.v1.password_resets import (
    reset_codes_router,
    resets_router,
)
from identity_service.presentation.routers.api.v1.sessions import router as sessions_router

v1_router = APIRouter()
v1_router.include_router(accounts_router)
v1_router.include_router(sessions_router)
v1_router.include_router(email_verifications_router)
v1_router.include_router(reset_codes_router)
v1_router.include_router(resets_router)

__all__ = ["v1_router"]
