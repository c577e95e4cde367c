"""Registration, login and verify flow."""

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.db.models import User


class TestRegistration:
    @pytest.mark.asyncio
    async def test_register_returns_token(self, client: AsyncClient) -> None:
        response = await client.post("/auth/register", json={"username": "alice", "password": "secret1"})
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Registration successful"
        assert data["user"]["username"] == "alice"
        assert isinstance(data["user"]["id"], int)
        assert data["token"]

    @pytest.mark.asyncio
    async def test_register_stores_hash_and_verified(self, client: AsyncClient, db_session: AsyncSession) -> None:
        await client.post("/auth/register", json={"username": "alice", "password": "secret1"})
        user = (await db_session.execute(select(User).where(User.username == "alice"))).scalar_one()
        assert user.password_hash != "secret1"
        assert user.password_hash.startswith("$argon2id$")
        assert user.is_verified is True

    @pytest.mark.asyncio
    async def test_duplicate_username(self, client: AsyncClient) -> None:
        body = {"username": "alice", "password": "secret1"}
        await client.post("/auth/register", json=body)
        response = await client.post("/auth/register", json=body)
        assert response.status_code == 409
        assert response.json()["error"] == "Username already exists"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("body", "message"),
        [
            ({"username": "alice"}, "Username and password are required"),
            ({"password": "secret1"}, "Username and password are required"),
            ({"username": "al", "password": "secret1"}, "Username must be at least 3 characters"),
            ({"username": "alice", "password": "12345"}, "Password must be at least 6 characters"),
        ],
    )
    async def test_invalid_registration(self, client: AsyncClient, body: dict, message: str) -> None:
        response = await client.post("/auth/register", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": message, "code": "ValidationError"}


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_then_verify(self, client: AsyncClient) -> None:
        await client.post("/auth/register", json={"username": "alice", "password": "secret1"})
        response = await client.post("/auth/login", json={"username": "alice", "password": "secret1"})
        assert response.status_code == 200
        token = response.json()["token"]

        verify = await client.get("/auth/verify", headers={"Authorization": f"Bearer {token}"})
        assert verify.status_code == 200
        assert verify.json()["user"]["username"] == "alice"

        rejected = await client.get("/auth/verify", headers={"Authorization": "Bearer garbage"})
        assert rejected.status_code == 401
        assert rejected.json()["code"] == "InvalidToken"

    @pytest.mark.asyncio
    async def test_wrong_password(self, client: AsyncClient, alice: dict) -> None:
        response = await client.post("/auth/login", json={"username": "alice", "password": "wrong-pass"})
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_unknown_user(self, client: AsyncClient) -> None:
        response = await client.post("/auth/login", json={"username": "nobody", "password": "secret1"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_missing_fields(self, client: AsyncClient) -> None:
        response = await client.post("/auth/login", json={"username": "alice"})
        assert response.status_code == 400


class TestChangePassword:
    @pytest.mark.asyncio
    async def test_change_password(self, client: AsyncClient, alice: dict) -> None:
        response = await client.post(
            "/auth/change-password",
            json={"currentPassword": "secret1", "newPassword": "secret2"},
            headers=alice["headers"],
        )
        assert response.status_code == 200
        assert response.json()["success"] is True

        old = await client.post("/auth/login", json={"username": "alice", "password": "secret1"})
        assert old.status_code == 401
        new = await client.post("/auth/login", json={"username": "alice", "password": "secret2"})
        assert new.status_code == 200

    @pytest.mark.asyncio
    async def test_existing_token_survives_password_change(self, client: AsyncClient, alice: dict) -> None:
        await client.post(
            "/auth/change-password",
            json={"currentPassword": "secret1", "newPassword": "secret2"},
            headers=alice["headers"],
        )
        response = await client.get("/auth/verify", headers=alice["headers"])
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_wrong_current_password(self, client: AsyncClient, alice: dict) -> None:
        response = await client.post(
            "/auth/change-password",
            json={"currentPassword": "nope-nope", "newPassword": "secret2"},
            headers=alice["headers"],
        )
        assert response.status_code == 401
        assert response.json()["error"] == "Current password is incorrect"

    @pytest.mark.asyncio
    async def test_requires_token(self, client: AsyncClient) -> None:
        response = await client.post(
            "/auth/change-password", json={"currentPassword": "secret1", "newPassword": "secret2"}
        )
        assert response.status_code == 401


class TestResetPassword:
    @pytest.mark.asyncio
    async def test_disabled_by_default(self, client: AsyncClient, alice: dict) -> None:
        response = await client.post("/auth/reset-password", json={"username": "alice", "newPassword": "secret2"})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_enabled(self, client: AsyncClient, alice: dict, monkeypatch: pytest.MonkeyPatch) -> None:
        from taskflow.config import get_settings

        monkeypatch.setattr(get_settings(), "password_reset_enabled", True)
        response = await client.post("/auth/reset-password", json={"username": "alice", "newPassword": "secret2"})
        assert response.status_code == 200

        login = await client.post("/auth/login", json={"username": "alice", "password": "secret2"})
        assert login.status_code == 200

    @pytest.mark.asyncio
    async def test_unknown_user(self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
        from taskflow.config import get_settings

        monkeypatch.setattr(get_settings(), "password_reset_enabled", True)
        response = await client.post("/auth/reset-password", json={"username": "ghost", "newPassword": "secret2"})
        assert response.status_code == 404
        assert response.json()["error"] == "User not found"
