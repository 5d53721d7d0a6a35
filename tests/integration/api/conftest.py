"""Shared helpers for the API integration tests."""

import re

from httpx import AsyncClient

ADA = {
    "authUserId": "auth-1",
    "firstName": "Ada",
    "lastName": "Lovelace",
    "email": "ada@x.io",
}

CREATED = re.compile(r"User profile created successfully with ID: (\d+)")


async def create_profile(client: AsyncClient, **overrides: str) -> int:
    response = await client.post("/userProfile/createUser", json={**ADA, **overrides})
    assert response.status_code == 200, response.text
    match = CREATED.fullmatch(response.text)
    assert match, response.text
    return int(match.group(1))
