"""Property-based tests for the directory invariants.

Each example runs a short trace of service calls against a fresh in-memory
SQLite database, then checks the invariants over the committed state.
"""

import asyncio
import itertools
import string
from datetime import datetime, timedelta, timezone

from hypothesis import given, settings
from hypothesis import strategies as st

from core.config import Settings
from core.exceptions import InvalidArgumentError
from domain.entities.user_address import UserAddress
from domain.entities.user_profile import UserProfile
from domain.services.user_address_service import UserAddressService
from domain.services.user_profile_service import UserProfileService
from infrastructure.database.session import Database
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

_name_chars = string.ascii_letters + string.digits + " -'"

names = st.text(alphabet=_name_chars, min_size=1, max_size=100).filter(str.strip)
emails = st.from_regex(r"[a-z0-9]{1,12}@[a-z]{1,8}\.io", fullmatch=True)
phones = st.none() | st.text(alphabet=string.digits + "+ ", min_size=1, max_size=20)

profiles = st.builds(
    UserProfile,
    auth_user_id=st.text(alphabet=_name_chars, min_size=1, max_size=64),
    first_name=names,
    last_name=names,
    email=emails,
    phone_number=phones,
)


def _ticking_clock():  # type: ignore[no-untyped-def]
    start = datetime(2026, 1, 1, tzinfo=timezone.utc)
    counter = itertools.count()
    return lambda: start + timedelta(seconds=next(counter))


def _id_of(message: str) -> int:
    return int(message.rsplit(" ", 1)[-1])


def run_trace(trace):  # type: ignore[no-untyped-def]
    """Run ``trace(profile_service, address_service)`` on a fresh database."""

    async def main():  # type: ignore[no-untyped-def]
        database = Database(
            Settings(database_url="sqlite+aiosqlite:///:memory:", app_env="test")
        )
        await database.create_schema()

        def factory() -> SQLAlchemyUnitOfWork:
            return SQLAlchemyUnitOfWork(database.session_factory)

        try:
            return await trace(
                UserProfileService(factory, clock=_ticking_clock()),
                UserAddressService(factory),
            )
        finally:
            await database.dispose()

    return asyncio.run(main())


@settings(max_examples=25, deadline=None)
@given(profiles)
def test_create_read_round_trip(payload: UserProfile) -> None:
    expected = (
        payload.auth_user_id,
        payload.first_name,
        payload.last_name,
        payload.email,
        payload.phone_number,
    )

    async def trace(profile_service, address_service):  # type: ignore[no-untyped-def]
        message = await profile_service.create_user_profile(payload)
        return await profile_service.get_user_profile(_id_of(message))

    stored = run_trace(trace)

    assert stored.id is not None
    assert stored.created_at is not None
    assert stored.updated_at is None
    assert (
        stored.auth_user_id,
        stored.first_name,
        stored.last_name,
        stored.email,
        stored.phone_number,
    ) == expected


@settings(max_examples=25, deadline=None)
@given(st.lists(profiles, min_size=1, max_size=8), st.sampled_from(["a@x.io", "b@x.io"]))
def test_email_uniqueness(payloads: list[UserProfile], shared_email: str) -> None:
    # Half the payloads collide on one email.
    for payload in payloads[::2]:
        payload.email = shared_email

    async def trace(profile_service, address_service):  # type: ignore[no-untyped-def]
        rejected = 0
        for payload in payloads:
            try:
                await profile_service.create_user_profile(payload)
            except InvalidArgumentError:
                rejected += 1
        return rejected, await profile_service.get_all_user_profiles()

    rejected, stored = run_trace(trace)

    stored_emails = [p.email for p in stored]
    assert len(stored_emails) == len(set(stored_emails))
    assert len(stored) + rejected == len(payloads)


@settings(max_examples=20, deadline=None)
@given(
    st.lists(st.tuples(st.sampled_from(["create", "delete"]), st.integers(0, 5)), max_size=20)
)
def test_ids_are_never_reused(ops: list[tuple[str, int]]) -> None:
    async def trace(profile_service, address_service):  # type: ignore[no-untyped-def]
        issued: list[int] = []
        live: list[int] = []
        for n, (op, pick) in enumerate(ops):
            if op == "create" or not live:
                message = await profile_service.create_user_profile(
                    UserProfile(
                        auth_user_id="auth",
                        first_name="F",
                        last_name="L",
                        email=f"user{n}@x.io",
                    )
                )
                issued.append(_id_of(message))
                live.append(issued[-1])
            else:
                victim = live.pop(pick % len(live))
                await profile_service.remove_user_profile(victim)
        return issued

    issued = run_trace(trace)

    assert len(issued) == len(set(issued))


@settings(max_examples=20, deadline=None)
@given(st.integers(0, 4), st.integers(0, 4))
def test_cascade_and_referential_integrity(doomed_count: int, kept_count: int) -> None:
    def address(profile_id: int) -> UserAddress:
        return UserAddress(
            user_profile_id=profile_id,
            line1="1 Main St",
            city="Springfield",
            country="US",
            is_default=False,
        )

    async def trace(profile_service, address_service):  # type: ignore[no-untyped-def]
        doomed = _id_of(
            await profile_service.create_user_profile(
                UserProfile(auth_user_id="a", first_name="D", last_name="D", email="d@x.io")
            )
        )
        kept = _id_of(
            await profile_service.create_user_profile(
                UserProfile(auth_user_id="b", first_name="K", last_name="K", email="k@x.io")
            )
        )
        for _ in range(doomed_count):
            await address_service.create_user_address(address(doomed))
        for _ in range(kept_count):
            await address_service.create_user_address(address(kept))

        await profile_service.remove_user_profile(doomed)
        remaining = await address_service.get_all_user_addresses()
        live_ids = {p.id for p in await profile_service.get_all_user_profiles()}
        return doomed, kept, remaining, live_ids

    doomed, kept, remaining, live_ids = run_trace(trace)

    assert all(item.address.user_profile_id != doomed for item in remaining)
    assert all(item.address.user_profile_id in live_ids for item in remaining)
    assert len(remaining) == kept_count
    assert all(item.profile.id == kept for item in remaining)


@settings(max_examples=20, deadline=None)
@given(profiles)
def test_edit_with_unchanged_payload_only_advances_updated_at(payload: UserProfile) -> None:
    async def trace(profile_service, address_service):  # type: ignore[no-untyped-def]
        profile_id = _id_of(await profile_service.create_user_profile(payload))
        first = await profile_service.get_user_profile(profile_id)
        await profile_service.edit_user_profile(profile_id, first)
        second = await profile_service.get_user_profile(profile_id)
        await profile_service.edit_user_profile(profile_id, second)
        third = await profile_service.get_user_profile(profile_id)
        return first, second, third

    first, second, third = run_trace(trace)

    def persistent(p: UserProfile) -> tuple:  # type: ignore[type-arg]
        return (
            p.id,
            p.auth_user_id,
            p.first_name,
            p.last_name,
            p.email,
            p.phone_number,
            p.created_at,
        )

    assert persistent(first) == persistent(second) == persistent(third)
    assert first.updated_at is None
    assert second.updated_at is not None
    assert third.updated_at is not None
    assert third.updated_at > second.updated_at
