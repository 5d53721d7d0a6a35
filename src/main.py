"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.responses import ORJSONResponse

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.timeout import RequestTimeoutMiddleware
from api.routes.health import router as health_router
from api.routes.user_addresses import router as user_addresses_router
from api.routes.user_profiles import router as user_profiles_router
from core.config import Settings, get_settings
from core.logging import setup_logging
from domain.services.user_address_service import UserAddressService
from domain.services.user_profile_service import UserProfileService
from infrastructure.database.session import Database
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup/shutdown tasks."""
    database: Database = app.state.database
    # Tables are normally provisioned outside the service; this is a no-op then.
    await database.create_schema()
    logger.info("application_started", environment=app.state.settings.app_env)
    yield
    await database.dispose()
    logger.info("application_stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Wiring is explicit: database → unit-of-work factory → services, all kept
    on ``app.state`` for the request dependencies.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=(
            "## User Directory\n\n"
            "Stores user profiles and their postal addresses. Identity is "
            "owned by the external auth service; profiles only keep its "
            "`authUserId`.\n\n"
            "Write endpoints answer with a plain-text confirmation; read "
            "endpoints answer JSON. Errors answer "
            '`{"error": "<kind>", "message": "<reason>"}`.'
        ),
        version="1.0.0",
        openapi_tags=[
            {
                "name": "health",
                "description": "Health check endpoints",
            },
            {
                "name": "user-profiles",
                "description": "User profile operations",
            },
            {
                "name": "user-addresses",
                "description": "User address operations",
            },
        ],
    )

    database = Database(settings)

    def uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(database.session_factory)

    app.state.settings = settings
    app.state.database = database
    app.state.user_profile_service = UserProfileService(uow_factory)
    app.state.user_address_service = UserAddressService(uow_factory)

    # Middleware (LIFO order - last added = outermost)
    app.add_middleware(
        RequestTimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Setup exception handlers
    setup_exception_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(user_profiles_router)
    app.include_router(user_addresses_router)

    return app


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "main:create_app",
        factory=True,
        host=_settings.host,
        port=_settings.port,
        reload=not _settings.is_production,
    )
