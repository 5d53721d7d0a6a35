"""Shared fixtures for unit tests."""

from datetime import datetime, timezone
from typing import Any
from unittest.mock import AsyncMock

import pytest

from domain.entities.user_address import UserAddress
from domain.entities.user_profile import UserProfile


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.user_profiles = AsyncMock()
        self.user_addresses = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, exc_type: Any, *args: Any) -> None:
        if exc_type:
            await self.rollback()


CREATED_AT = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_profile(**overrides: Any) -> UserProfile:
    """Build a profile with sensible defaults."""
    fields: dict[str, Any] = {
        "auth_user_id": "auth-1",
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@x.io",
    }
    fields.update(overrides)
    return UserProfile(**fields)


def make_address(**overrides: Any) -> UserAddress:
    """Build an address with sensible defaults."""
    fields: dict[str, Any] = {
        "line1": "12 Analytical Way",
        "city": "London",
        "country": "UK",
        "is_default": False,
    }
    fields.update(overrides)
    return UserAddress(**fields)


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()
