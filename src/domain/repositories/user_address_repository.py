"""User address repository protocol."""

from typing import Protocol

from domain.entities.user_address import UserAddress, UserAddressWithProfile
from domain.entities.user_profile import UserProfile


class IUserAddressRepository(Protocol):
    """Repository interface for UserAddress entities."""

    async def get(self, id: int) -> UserAddress | None:
        """Get an address by ID."""
        ...

    async def exists(self, id: int) -> bool:
        """Check whether an address with this ID exists."""
        ...

    async def get_profile_summary(self, profile_id: int) -> UserProfile | None:
        """Get the owning profile without its address collection."""
        ...

    async def get_all_with_profiles(self) -> list[UserAddressWithProfile]:
        """Get all addresses with their owning profiles in one statement."""
        ...

    async def create(self, address: UserAddress) -> UserAddress:
        """Insert a new address and return it with its assigned ID."""
        ...

    async def update(self, address: UserAddress) -> UserAddress:
        """Update an existing address."""
        ...

    async def delete(self, id: int) -> bool:
        """Delete an address and return success status."""
        ...

    async def clear_default(self, profile_id: int, except_id: int | None = None) -> None:
        """Unset ``is_default`` on the profile's addresses, optionally sparing one."""
        ...
