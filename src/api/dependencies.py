"""Dependency providers for the API.

Services are built once in ``create_app`` and kept on ``app.state``; these
providers only hand them to the route handlers.
"""

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from domain.services.user_address_service import UserAddressService
from domain.services.user_profile_service import UserProfileService
from infrastructure.database.session import Database


def get_user_profile_service(request: Request) -> UserProfileService:
    """Get UserProfile service instance."""
    return request.app.state.user_profile_service  # type: ignore[no-any-return]


def get_user_address_service(request: Request) -> UserAddressService:
    """Get UserAddress service instance."""
    return request.app.state.user_address_service  # type: ignore[no-any-return]


async def get_async_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting a standalone async database session."""
    database: Database = request.app.state.database
    async for session in database.session():
        yield session
