"""User profile repository protocol."""

from typing import Protocol

from domain.entities.user_profile import UserProfile


class IUserProfileRepository(Protocol):
    """Repository interface for UserProfile entities.

    Profiles are returned with their addresses loaded.
    """

    async def get(self, id: int) -> UserProfile | None:
        """Get a profile by ID."""
        ...

    async def get_all(self) -> list[UserProfile]:
        """Get all profiles."""
        ...

    async def get_by_email(self, email: str) -> UserProfile | None:
        """Get a profile by exact email."""
        ...

    async def exists(self, id: int) -> bool:
        """Check whether a profile with this ID exists."""
        ...

    async def exists_by_email(self, email: str) -> bool:
        """Check whether any profile uses this email."""
        ...

    async def create(self, profile: UserProfile) -> UserProfile:
        """Insert a new profile and return it with its assigned ID."""
        ...

    async def update(self, profile: UserProfile) -> UserProfile:
        """Update the scalar columns of an existing profile."""
        ...

    async def delete(self, id: int) -> bool:
        """Delete a profile (its addresses cascade) and return success status."""
        ...
