"""Pydantic schemas for the user address API."""

from typing import Any

from pydantic import Field, field_validator

from api.schemas.common import CamelModel
from api.schemas.user_profile import NestedAddressResponse, UserProfileSummaryResponse
from domain.entities.user_address import UserAddress, UserAddressWithProfile


class UserProfileReference(CamelModel):
    """Reference to the owning profile, e.g. ``{"id": 7}``."""

    id: int | None = None


class UserAddressRequest(CamelModel):
    """Body of create and edit requests."""

    id: int | None = None
    user_profile: UserProfileReference | None = None
    line1: str = Field(..., min_length=1, max_length=255)
    line2: str | None = Field(None, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str | None = Field(None, max_length=100)
    country: str = Field(..., min_length=1, max_length=100)
    postal_code: str | None = Field(None, max_length=20)
    is_default: bool

    @field_validator("postal_code", mode="before")
    @classmethod
    def postal_code_as_text(cls, value: Any) -> Any:
        # Clients sometimes send ZIP codes as numbers.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def to_entity(self) -> UserAddress:
        return UserAddress(
            id=self.id,
            user_profile_id=self.user_profile.id if self.user_profile else None,
            line1=self.line1,
            line2=self.line2,
            city=self.city,
            state=self.state,
            country=self.country,
            postal_code=self.postal_code,
            is_default=self.is_default,
        )


class UserAddressResponse(NestedAddressResponse):
    """Address with its owning profile flattened in (without addresses)."""

    user_profile: UserProfileSummaryResponse

    @classmethod
    def from_aggregate(cls, item: UserAddressWithProfile) -> "UserAddressResponse":
        nested = NestedAddressResponse.from_entity(item.address)
        return cls(
            **nested.model_dump(),
            user_profile=UserProfileSummaryResponse.from_entity(item.profile),
        )
