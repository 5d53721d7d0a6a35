"""SQLAlchemy implementation of UserProfile repository."""

from datetime import datetime, timezone

from sqlalchemy import delete, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from core.exceptions import RecordNotFoundError
from domain.entities.user_address import UserAddress
from domain.entities.user_profile import UserProfile
from infrastructure.database.errors import translate_integrity_error
from infrastructure.database.models import UserAddressModel, UserProfileModel


def as_aware(value: datetime | None) -> datetime | None:
    """Attach UTC to naive timestamps (SQLite drops the offset on storage)."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SQLAlchemyUserProfileRepository:
    """SQLAlchemy implementation of IUserProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: int) -> UserProfile | None:
        """Get a profile by ID, addresses included."""
        stmt = (
            select(UserProfileModel)
            .options(selectinload(UserProfileModel.addresses))
            .where(UserProfileModel.id == id)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[UserProfile]:
        """Get all profiles, addresses included."""
        stmt = (
            select(UserProfileModel)
            .options(selectinload(UserProfileModel.addresses))
            .order_by(UserProfileModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_by_email(self, email: str) -> UserProfile | None:
        """Get a profile by exact email."""
        stmt = (
            select(UserProfileModel)
            .options(selectinload(UserProfileModel.addresses))
            .where(UserProfileModel.email == email)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def exists(self, id: int) -> bool:
        """Check whether a profile with this ID exists."""
        stmt = select(exists().where(UserProfileModel.id == id))
        result = await self._session.execute(stmt)
        return bool(result.scalar())

    async def exists_by_email(self, email: str) -> bool:
        """Check whether any profile uses this email."""
        stmt = select(exists().where(UserProfileModel.email == email))
        result = await self._session.execute(stmt)
        return bool(result.scalar())

    async def create(self, profile: UserProfile) -> UserProfile:
        """Insert a new profile."""
        if profile.id is not None:
            raise ValueError("Cannot insert a profile that already has an ID")

        model = self._to_model(profile)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            raise translate_integrity_error(exc) from exc
        return self._to_entity(model)

    async def update(self, profile: UserProfile) -> UserProfile:
        """Update the scalar columns of an existing profile."""
        if profile.id is None:
            raise ValueError("Cannot update a profile without an ID")

        stmt = (
            select(UserProfileModel)
            .options(selectinload(UserProfileModel.addresses))
            .where(UserProfileModel.id == profile.id)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise RecordNotFoundError(f"UserProfile {profile.id} not found")

        model.auth_user_id = profile.auth_user_id
        model.first_name = profile.first_name
        model.last_name = profile.last_name
        model.email = profile.email
        model.phone_number = profile.phone_number
        model.created_at = profile.created_at  # type: ignore[assignment]
        model.updated_at = profile.updated_at

        try:
            await self._session.flush()
        except IntegrityError as exc:
            raise translate_integrity_error(exc) from exc
        return self._to_entity(model)

    async def delete(self, id: int) -> bool:
        """Delete a profile; the FK cascade removes its addresses."""
        stmt = delete(UserProfileModel).where(UserProfileModel.id == id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    def _to_entity(self, model: UserProfileModel) -> UserProfile:
        """Convert ORM model to domain entity."""
        return UserProfile(
            id=model.id,
            auth_user_id=model.auth_user_id,
            first_name=model.first_name,
            last_name=model.last_name,
            email=model.email,
            phone_number=model.phone_number,
            created_at=as_aware(model.created_at),
            updated_at=as_aware(model.updated_at),
            addresses=[_address_to_entity(address) for address in model.addresses],
        )

    def _to_model(self, entity: UserProfile) -> UserProfileModel:
        """Convert domain entity to ORM model."""
        return UserProfileModel(
            auth_user_id=entity.auth_user_id,
            first_name=entity.first_name,
            last_name=entity.last_name,
            email=entity.email,
            phone_number=entity.phone_number,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            addresses=[],
        )


def _address_to_entity(model: UserAddressModel) -> UserAddress:
    return UserAddress(
        id=model.id,
        user_profile_id=model.user_profile_id,
        line1=model.line1,
        line2=model.line2,
        city=model.city,
        state=model.state,
        country=model.country,
        postal_code=model.postal_code,
        is_default=model.is_default,
    )
