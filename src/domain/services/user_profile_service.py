"""User profile service layer with business logic."""

from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, List, Optional

import structlog

from core.exceptions import (
    InvalidArgumentError,
    RecordNotFoundError,
    UniqueViolationError,
    UserProfileNotFoundError,
)
from domain.entities.user_profile import UserProfile
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


def _duplicate_email(email: str) -> InvalidArgumentError:
    return InvalidArgumentError(f"User with email already exists: {email}")


def _require_email(profile: UserProfile) -> None:
    if not profile.email or not profile.email.strip():
        raise InvalidArgumentError("Email is required")


class UserProfileService:
    """Service layer for UserProfile business logic.

    Every public method runs in its own unit of work. The email pre-check is
    racy on its own, so a unique-index violation from the database is mapped
    to the same error the pre-check raises.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._uow_factory = uow_factory
        self._clock = clock

    async def get_all_user_profiles(self) -> List[UserProfile]:
        """Get all profiles with their addresses."""
        async with self._uow_factory() as uow:
            return await uow.user_profiles.get_all()  # type: ignore[no-any-return]

    async def get_user_profile(self, user_id: int) -> UserProfile:
        """Get a single profile with its addresses."""
        async with self._uow_factory() as uow:
            profile = await uow.user_profiles.get(user_id)
            if not profile:
                raise UserProfileNotFoundError()
            return profile

    async def create_user_profile(self, profile: Optional[UserProfile]) -> str:
        """Validate and insert a new profile; return a confirmation message."""
        if profile is None:
            raise InvalidArgumentError("UserProfile cannot be null")
        if profile.id is not None:
            raise InvalidArgumentError("New user profile cannot have an ID")
        _require_email(profile)

        async with self._uow_factory() as uow:
            if await uow.user_profiles.exists_by_email(profile.email):
                raise _duplicate_email(profile.email)

            to_insert = replace(
                profile, created_at=self._clock(), updated_at=None, addresses=[]
            )

            try:
                created = await uow.user_profiles.create(to_insert)
            except UniqueViolationError as exc:
                raise _duplicate_email(profile.email) from exc
            await uow.commit()

        logger.info("user_profile_created", user_profile_id=created.id)
        return f"User profile created successfully with ID: {created.id}"

    async def edit_user_profile(self, user_id: int, profile: UserProfile) -> str:
        """Replace the caller-editable fields of an existing profile.

        The path ID always wins over any ID in the payload, ``created_at`` is
        carried over from the stored row and ``updated_at`` is refreshed.
        """
        _require_email(profile)

        async with self._uow_factory() as uow:
            existing = await uow.user_profiles.get(user_id)
            if not existing:
                raise UserProfileNotFoundError()

            if profile.email != existing.email:
                holder = await uow.user_profiles.get_by_email(profile.email)
                if holder and holder.id != user_id:
                    raise _duplicate_email(profile.email)

            to_save = replace(
                profile,
                id=user_id,
                created_at=existing.created_at,
                updated_at=self._clock(),
            )

            try:
                await uow.user_profiles.update(to_save)
            except UniqueViolationError as exc:
                raise _duplicate_email(profile.email) from exc
            except RecordNotFoundError as exc:
                raise UserProfileNotFoundError() from exc
            await uow.commit()

        logger.info("user_profile_updated", user_profile_id=user_id)
        return f"User Profile got updated for user Id: {user_id}"

    async def remove_user_profile(self, user_id: int) -> str:
        """Delete a profile together with all of its addresses."""
        async with self._uow_factory() as uow:
            profile = await uow.user_profiles.get(user_id)
            if not profile:
                raise UserProfileNotFoundError()

            await uow.user_profiles.delete(user_id)
            await uow.commit()

        logger.info(
            "user_profile_removed",
            user_profile_id=user_id,
            addresses_removed=len(profile.addresses),
        )
        return f"User Profile removed for user Id: {user_id}"
