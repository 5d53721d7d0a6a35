"""Integration tests for the user address API."""

import re

import pytest
from httpx import AsyncClient

from tests.integration.api.conftest import create_profile

CREATED = re.compile(r"User address created successfully with ID: (\d+)")


def address_body(profile_id: int, **overrides: object) -> dict[str, object]:
    body: dict[str, object] = {
        "userProfile": {"id": profile_id},
        "line1": "12 Analytical Way",
        "city": "London",
        "country": "UK",
        "postalCode": "01234",
        "isDefault": False,
    }
    body.update(overrides)
    return body


async def create_address(client: AsyncClient, profile_id: int, **overrides: object) -> int:
    response = await client.post(
        "/userAddress/createUserAddress", json=address_body(profile_id, **overrides)
    )
    assert response.status_code == 200, response.text
    match = CREATED.fullmatch(response.text)
    assert match, response.text
    return int(match.group(1))


class TestUserAddressesAPI:
    """Integration tests for address CRUD and its tie to profiles."""

    @pytest.mark.asyncio
    async def test_create_for_missing_profile(self, client: AsyncClient):
        response = await client.post(
            "/userAddress/createUserAddress",
            json={
                "userProfile": {"id": 9999},
                "line1": "1",
                "city": "c",
                "country": "x",
                "isDefault": True,
            },
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_ARGUMENT"
        assert "9999 does not exist" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_create_without_profile_reference(self, client: AsyncClient):
        body = address_body(1)
        del body["userProfile"]

        response = await client.post("/userAddress/createUserAddress", json=body)

        assert response.status_code == 400
        assert response.json()["message"] == "UserProfile reference is required"

    @pytest.mark.asyncio
    async def test_address_appears_in_profile(self, client: AsyncClient):
        profile_id = await create_profile(client)
        address_id = await create_address(client, profile_id)

        profile = (await client.get(f"/userProfile/getUser/{profile_id}")).json()

        assert [a["id"] for a in profile["addresses"]] == [address_id]
        nested = profile["addresses"][0]
        assert "userProfile" not in nested
        assert "userProfileId" not in nested
        assert nested["postalCode"] == "01234"

    @pytest.mark.asyncio
    async def test_get_address_flattens_profile(self, client: AsyncClient):
        profile_id = await create_profile(client)
        address_id = await create_address(client, profile_id)

        response = await client.get(f"/userAddress/getUser/{address_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == address_id
        assert data["isDefault"] is False
        assert data["userProfile"]["id"] == profile_id
        assert data["userProfile"]["email"] == "ada@x.io"
        assert "addresses" not in data["userProfile"]

    @pytest.mark.asyncio
    async def test_cascade_delete(self, client: AsyncClient):
        profile_id = await create_profile(client)
        address_id = await create_address(client, profile_id)

        response = await client.delete(f"/userProfile/removeUserProfile/{profile_id}")
        assert response.status_code == 200

        response = await client.get(f"/userAddress/getUser/{address_id}")
        assert response.status_code == 404
        all_addresses = (await client.get("/userAddress/getAllUsers")).json()
        assert all_addresses == []

    @pytest.mark.asyncio
    async def test_list_addresses(self, client: AsyncClient):
        ada = await create_profile(client)
        grace = await create_profile(client, email="grace@x.io")
        await create_address(client, ada)
        await create_address(client, grace, city="Arlington")

        response = await client.get("/userAddress/getAllUsers")

        assert response.status_code == 200
        owners = sorted(a["userProfile"]["id"] for a in response.json())
        assert owners == sorted([ada, grace])

    @pytest.mark.asyncio
    async def test_numeric_postal_code_is_kept_as_text(self, client: AsyncClient):
        profile_id = await create_profile(client)
        address_id = await create_address(client, profile_id, postalCode=90210)

        data = (await client.get(f"/userAddress/getUser/{address_id}")).json()

        assert data["postalCode"] == "90210"

    @pytest.mark.asyncio
    async def test_numeric_city_is_rejected(self, client: AsyncClient):
        profile_id = await create_profile(client)

        response = await client.post(
            "/userAddress/createUserAddress", json=address_body(profile_id, city=42)
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_ARGUMENT"
        assert "city" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_only_one_default_per_profile(self, client: AsyncClient):
        profile_id = await create_profile(client)
        first = await create_address(client, profile_id, isDefault=True)
        second = await create_address(client, profile_id, isDefault=True)

        profile = (await client.get(f"/userProfile/getUser/{profile_id}")).json()

        defaults = {a["id"]: a["isDefault"] for a in profile["addresses"]}
        assert defaults == {first: False, second: True}

    @pytest.mark.asyncio
    async def test_edit_address(self, client: AsyncClient):
        profile_id = await create_profile(client)
        address_id = await create_address(client, profile_id)

        response = await client.put(
            f"/userAddress/editUser/{address_id}",
            json=address_body(profile_id, city="Paris", id=12345),
        )

        assert response.status_code == 200
        data = (await client.get(f"/userAddress/getUser/{address_id}")).json()
        assert data["city"] == "Paris"
        assert data["userProfile"]["id"] == profile_id

    @pytest.mark.asyncio
    async def test_edit_cannot_rehome_address(self, client: AsyncClient):
        ada = await create_profile(client)
        grace = await create_profile(client, email="grace@x.io")
        address_id = await create_address(client, ada)

        response = await client.put(
            f"/userAddress/editUser/{address_id}", json=address_body(grace)
        )

        assert response.status_code == 400
        data = (await client.get(f"/userAddress/getUser/{address_id}")).json()
        assert data["userProfile"]["id"] == ada

    @pytest.mark.asyncio
    async def test_edit_missing_address(self, client: AsyncClient):
        response = await client.put("/userAddress/editUser/777", json=address_body(1))

        assert response.status_code == 404
        assert response.json()["message"] == "User Address not found"

    @pytest.mark.asyncio
    async def test_remove_address(self, client: AsyncClient):
        profile_id = await create_profile(client)
        address_id = await create_address(client, profile_id)

        response = await client.delete(f"/userAddress/removeUserAddress/{address_id}")

        assert response.status_code == 200
        assert (await client.get(f"/userAddress/getUser/{address_id}")).status_code == 404
        profile = (await client.get(f"/userProfile/getUser/{profile_id}")).json()
        assert profile["addresses"] == []

    @pytest.mark.asyncio
    async def test_remove_missing_address(self, client: AsyncClient):
        response = await client.delete("/userAddress/removeUserAddress/777")

        assert response.status_code == 404
