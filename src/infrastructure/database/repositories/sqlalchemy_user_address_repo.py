"""SQLAlchemy implementation of UserAddress repository."""

from typing import Any

from sqlalchemy import Row, delete, exists, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import RecordNotFoundError
from domain.entities.user_address import UserAddress, UserAddressWithProfile
from domain.entities.user_profile import UserProfile
from infrastructure.database.errors import translate_integrity_error
from infrastructure.database.models import UserAddressModel, UserProfileModel
from infrastructure.database.repositories.sqlalchemy_user_profile_repo import as_aware


class SQLAlchemyUserAddressRepository:
    """SQLAlchemy implementation of IUserAddressRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: int) -> UserAddress | None:
        """Get an address by ID."""
        stmt = select(UserAddressModel).where(UserAddressModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def exists(self, id: int) -> bool:
        """Check whether an address with this ID exists."""
        stmt = select(exists().where(UserAddressModel.id == id))
        result = await self._session.execute(stmt)
        return bool(result.scalar())

    async def get_all_with_profiles(self) -> list[UserAddressWithProfile]:
        """Get all addresses paired with their owning profiles.

        One joined statement, so every row sees the same committed snapshot.
        """
        stmt = (
            select(UserAddressModel, *_SUMMARY_COLUMNS)
            .join(UserProfileModel, UserAddressModel.user_profile_id == UserProfileModel.id)
            .order_by(UserAddressModel.id)
        )
        result = await self._session.execute(stmt)
        return [
            UserAddressWithProfile(
                address=self._to_entity(row.UserAddressModel),
                profile=_summary_to_entity(row),
            )
            for row in result
        ]

    async def get_profile_summary(self, profile_id: int) -> UserProfile | None:
        """Get the owning profile without touching its address collection."""
        # Column-level select so the ORM never materializes the collection.
        stmt = select(*_SUMMARY_COLUMNS).where(UserProfileModel.id == profile_id)
        result = await self._session.execute(stmt)
        row = result.one_or_none()
        return _summary_to_entity(row) if row else None

    async def create(self, address: UserAddress) -> UserAddress:
        """Insert a new address."""
        if address.id is not None:
            raise ValueError("Cannot insert an address that already has an ID")

        model = self._to_model(address)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            raise translate_integrity_error(exc) from exc
        return self._to_entity(model)

    async def update(self, address: UserAddress) -> UserAddress:
        """Update an existing address. The owning profile is never changed here."""
        if address.id is None:
            raise ValueError("Cannot update an address without an ID")

        stmt = select(UserAddressModel).where(UserAddressModel.id == address.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise RecordNotFoundError(f"UserAddress {address.id} not found")

        model.line1 = address.line1
        model.line2 = address.line2
        model.city = address.city
        model.state = address.state
        model.country = address.country
        model.postal_code = address.postal_code
        model.is_default = address.is_default

        try:
            await self._session.flush()
        except IntegrityError as exc:
            raise translate_integrity_error(exc) from exc
        return self._to_entity(model)

    async def delete(self, id: int) -> bool:
        """Delete a single address."""
        stmt = delete(UserAddressModel).where(UserAddressModel.id == id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    async def clear_default(self, profile_id: int, except_id: int | None = None) -> None:
        """Unset the default flag on a profile's addresses."""
        stmt = update(UserAddressModel).where(
            UserAddressModel.user_profile_id == profile_id,
            UserAddressModel.is_default.is_(True),
        )
        if except_id is not None:
            stmt = stmt.where(UserAddressModel.id != except_id)
        await self._session.execute(
            stmt.values(is_default=False).execution_options(synchronize_session="fetch")
        )

    def _to_entity(self, model: UserAddressModel) -> UserAddress:
        """Convert ORM model to domain entity."""
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

    def _to_model(self, entity: UserAddress) -> UserAddressModel:
        """Convert domain entity to ORM model."""
        return UserAddressModel(
            user_profile_id=entity.user_profile_id,
            line1=entity.line1,
            line2=entity.line2,
            city=entity.city,
            state=entity.state,
            country=entity.country,
            postal_code=entity.postal_code,
            is_default=entity.is_default,
        )


_SUMMARY_COLUMNS = (
    UserProfileModel.id.label("profile_id"),
    UserProfileModel.auth_user_id,
    UserProfileModel.first_name,
    UserProfileModel.last_name,
    UserProfileModel.email,
    UserProfileModel.phone_number,
    UserProfileModel.created_at,
    UserProfileModel.updated_at,
)


def _summary_to_entity(row: Row[Any]) -> UserProfile:
    return UserProfile(
        id=row.profile_id,
        auth_user_id=row.auth_user_id,
        first_name=row.first_name,
        last_name=row.last_name,
        email=row.email,
        phone_number=row.phone_number,
        created_at=as_aware(row.created_at),
        updated_at=as_aware(row.updated_at),
    )
