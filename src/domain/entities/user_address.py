"""User address domain entity."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from domain.entities.user_profile import UserProfile


@dataclass
class UserAddress:
    """Domain entity for a postal address owned by one profile."""

    line1: str
    city: str
    country: str
    is_default: bool
    user_profile_id: Optional[int] = None
    id: Optional[int] = None
    line2: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None  # kept as text: leading zeros, letters


@dataclass(frozen=True, slots=True)
class UserAddressWithProfile:
    """Read-only value object: an address bundled with its owning profile.

    The profile is loaded without its address collection.
    """

    address: UserAddress
    profile: "UserProfile"
