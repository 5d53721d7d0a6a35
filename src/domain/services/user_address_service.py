"""User address service layer with business logic."""

from dataclasses import replace
from typing import Callable, List, Optional

import structlog

from core.exceptions import (
    ConflictError,
    ForeignKeyViolationError,
    InvalidArgumentError,
    RecordNotFoundError,
    UniqueViolationError,
    UserAddressNotFoundError,
)
from domain.entities.user_address import UserAddress, UserAddressWithProfile
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


def _missing_profile(profile_id: int) -> InvalidArgumentError:
    return InvalidArgumentError(f"UserProfile with ID {profile_id} does not exist")


def _default_taken() -> ConflictError:
    return ConflictError("Another default address was set concurrently for this UserProfile")


class UserAddressService:
    """Service layer for UserAddress business logic.

    At most one address per profile is the default: marking one as default
    demotes the others inside the same transaction.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_all_user_addresses(self) -> List[UserAddressWithProfile]:
        """Get all addresses, each with its owning profile."""
        async with self._uow_factory() as uow:
            return await uow.user_addresses.get_all_with_profiles()  # type: ignore[no-any-return]

    async def get_user_address(self, address_id: int) -> UserAddressWithProfile:
        """Get one address with its owning profile."""
        async with self._uow_factory() as uow:
            address = await uow.user_addresses.get(address_id)
            if not address:
                raise UserAddressNotFoundError()

            profile = await uow.user_addresses.get_profile_summary(address.user_profile_id)
            if not profile:
                raise UserAddressNotFoundError()
            return UserAddressWithProfile(address=address, profile=profile)

    async def create_user_address(self, address: Optional[UserAddress]) -> str:
        """Validate and insert a new address; return a confirmation message."""
        if address is None:
            raise InvalidArgumentError("UserAddress cannot be null")
        if address.id is not None:
            raise InvalidArgumentError("New user address cannot have an ID")
        if address.user_profile_id is None:
            raise InvalidArgumentError("UserProfile reference is required")

        profile_id = address.user_profile_id
        async with self._uow_factory() as uow:
            if not await uow.user_profiles.exists(profile_id):
                raise _missing_profile(profile_id)

            if address.is_default:
                await uow.user_addresses.clear_default(profile_id)

            try:
                created = await uow.user_addresses.create(address)
            except ForeignKeyViolationError as exc:
                # Profile removed between the check and the insert.
                raise _missing_profile(profile_id) from exc
            except UniqueViolationError as exc:
                raise _default_taken() from exc
            await uow.commit()

        logger.info(
            "user_address_created",
            user_address_id=created.id,
            user_profile_id=profile_id,
        )
        return f"User address created successfully with ID: {created.id}"

    async def edit_user_address(self, address_id: int, address: UserAddress) -> str:
        """Replace the editable fields of an existing address.

        The owning profile cannot change through an edit.
        """
        async with self._uow_factory() as uow:
            existing = await uow.user_addresses.get(address_id)
            if not existing:
                raise UserAddressNotFoundError()

            if (
                address.user_profile_id is not None
                and address.user_profile_id != existing.user_profile_id
            ):
                raise InvalidArgumentError(
                    "UserAddress cannot be moved to another UserProfile"
                )

            to_save = replace(
                address, id=address_id, user_profile_id=existing.user_profile_id
            )

            if to_save.is_default:
                await uow.user_addresses.clear_default(
                    existing.user_profile_id, except_id=address_id
                )

            try:
                await uow.user_addresses.update(to_save)
            except UniqueViolationError as exc:
                raise _default_taken() from exc
            except RecordNotFoundError as exc:
                raise UserAddressNotFoundError() from exc
            await uow.commit()

        logger.info("user_address_updated", user_address_id=address_id)
        return f"User Address got updated for address Id: {address_id}"

    async def remove_user_address(self, address_id: int) -> str:
        """Delete a single address."""
        async with self._uow_factory() as uow:
            existing = await uow.user_addresses.get(address_id)
            if not existing:
                raise UserAddressNotFoundError()

            await uow.user_addresses.delete(address_id)
            await uow.commit()

        logger.info("user_address_removed", user_address_id=address_id)
        return f"User Address removed for address Id: {address_id}"
