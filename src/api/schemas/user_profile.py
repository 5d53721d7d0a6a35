"""Pydantic schemas for the user profile API."""

from datetime import datetime

from pydantic import ConfigDict, Field

from api.schemas.common import CamelModel
from domain.entities.user_address import UserAddress
from domain.entities.user_profile import UserProfile


class UserProfileRequest(CamelModel):
    """Body of create and edit requests.

    ``id`` is accepted only so that create can reject it and edit can
    overwrite it with the path id. Timestamps and addresses sent by the
    client are dropped.
    """

    id: int | None = None
    auth_user_id: str = Field(..., min_length=1, max_length=64)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str | None = Field(None, max_length=255)
    phone_number: str | None = Field(None, max_length=20)

    def to_entity(self) -> UserProfile:
        return UserProfile(
            id=self.id,
            auth_user_id=self.auth_user_id,
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email or "",
            phone_number=self.phone_number,
        )


class NestedAddressResponse(CamelModel):
    """Address as nested in a profile; no reference back to the profile."""

    id: int
    line1: str
    line2: str | None = None
    city: str
    state: str | None = None
    country: str
    postal_code: str | None = None
    is_default: bool

    @classmethod
    def from_entity(cls, address: UserAddress) -> "NestedAddressResponse":
        return cls(
            id=address.id,  # type: ignore[arg-type]
            line1=address.line1,
            line2=address.line2,
            city=address.city,
            state=address.state,
            country=address.country,
            postal_code=address.postal_code,
            is_default=address.is_default,
        )


class UserProfileSummaryResponse(CamelModel):
    """Profile without its addresses."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "authUserId": "auth-1",
                "firstName": "Ada",
                "lastName": "Lovelace",
                "email": "ada@x.io",
                "phoneNumber": None,
                "createdAt": "2026-01-28T10:00:00Z",
                "updatedAt": None,
            }
        },
    )

    id: int
    auth_user_id: str
    first_name: str
    last_name: str
    email: str
    phone_number: str | None = None
    created_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, profile: UserProfile) -> "UserProfileSummaryResponse":
        return cls(
            id=profile.id,  # type: ignore[arg-type]
            auth_user_id=profile.auth_user_id,
            first_name=profile.first_name,
            last_name=profile.last_name,
            email=profile.email,
            phone_number=profile.phone_number,
            created_at=profile.created_at,  # type: ignore[arg-type]
            updated_at=profile.updated_at,
        )


class UserProfileResponse(UserProfileSummaryResponse):
    """Profile with its addresses nested."""

    addresses: list[NestedAddressResponse] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, profile: UserProfile) -> "UserProfileResponse":
        summary = UserProfileSummaryResponse.from_entity(profile)
        return cls(
            **summary.model_dump(),
            addresses=[NestedAddressResponse.from_entity(a) for a in profile.addresses],
        )
