"""User profile domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from domain.entities.user_address import UserAddress


@dataclass
class UserProfile:
    """Domain entity for a user-directory profile.

    ``auth_user_id`` references the user in the external auth service; this
    service never dereferences it. ``addresses`` is the fully loaded child
    collection; the children point back only by ``user_profile_id``.
    """

    auth_user_id: str
    first_name: str
    last_name: str
    email: str
    phone_number: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    addresses: list[UserAddress] = field(default_factory=list)
