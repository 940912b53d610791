"""
Main FastAPI application entry point.

Wires trace middleware, RFC 7807 exception handlers and the API v1 routers.
The lifespan hook waits for in-flight notifications and disposes of the
database engine on shutdown.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from identity_service.core.config import settings
from identity_service.core.container import (
    get_database,
    get_logger,
    get_notification_dispatcher,
)
from identity_service.presentation.routers import system_router, v1_router
from identity_service.presentation.routers.api.middleware.trace_middleware import (
    TraceMiddleware,
)
from identity_service.presentation.routers.api.v1.errors import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application lifetime.
    """
    logger = get_logger()
    logger.info(
        "application_started",
        environment=settings.environment.value,
        version=settings.app_version,
    )
    yield
    # Shutdown: let queued notifications finish, then release the pool
    dispatcher = get_notification_dispatcher()
    await dispatcher.drain()
    await get_database().close()
    logger.info("application_stopped")


app = FastAPI(
    title=settings.app_name,
    description="Account registration, email verification, login and session management",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug,
    lifespan=lifespan,
)

# Wire trace middleware (request correlation)
app.add_middleware(TraceMiddleware)

# Register global exception handlers (RFC 7807 error responses)
register_exception_handlers(app)

app.include_router(system_router)
app.include_router(v1_router, prefix=settings.api_v1_prefix)
