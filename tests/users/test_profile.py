"""Tests for profile read and update."""

import pytest
from httpx import AsyncClient


class TestProfile:
    @pytest.mark.asyncio
    async def test_get_own_profile(self, client: AsyncClient, alice: dict) -> None:
        response = await client.get("/profile", headers=alice["headers"])
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == alice["user"]["id"]
        assert data["username"] == alice["user"]["username"]
        assert data["is_verified"] is True
        assert data["full_name"] is None
        assert "password_hash" not in data

    @pytest.mark.asyncio
    async def test_profile_requires_auth(self, client: AsyncClient) -> None:
        response = await client.get("/profile")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_update_keeps_absent_fields(self, client: AsyncClient, alice: dict) -> None:
        h = alice["headers"]
        await client.put("/profile", json={"full_name": "Alice A", "email": "a@example.com"}, headers=h)

        response = await client.put("/profile", json={"profile_photo": "https://img/a.png"}, headers=h)
        assert response.status_code == 200
        data = response.json()
        assert data["full_name"] == "Alice A"
        assert data["email"] == "a@example.com"
        assert data["profile_photo"] == "https://img/a.png"

    @pytest.mark.asyncio
    async def test_explicit_null_clears(self, client: AsyncClient, alice: dict) -> None:
        h = alice["headers"]
        await client.put("/profile", json={"full_name": "Alice A"}, headers=h)
        data = (await client.put("/profile", json={"full_name": None}, headers=h)).json()
        assert data["full_name"] is None

    @pytest.mark.asyncio
    async def test_username_not_writable(self, client: AsyncClient, alice: dict) -> None:
        h = alice["headers"]
        data = (await client.put("/profile", json={"username": "mallory"}, headers=h)).json()
        assert data["username"] == alice["user"]["username"]
