"""Integration tests for authentication API endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from moneytree.core.security import create_refresh_token
from moneytree.models.user import User
from moneytree.repositories.category import CategoryRepository
from moneytree.repositories.user import UserRepository


class TestUserRegistration:
    """Test user registration endpoint."""

    @pytest.mark.asyncio
    async def test_register_success(self, client: AsyncClient, db_session: AsyncSession):
        response = await client.post(
            "/api/v1/auth/register",
            json={"email": "newuser@example.com", "password": "SecurePass123!"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "newuser@example.com"
        assert data["is_active"] is True
        assert "password" not in data
        assert "password_hash" not in data

        user = await UserRepository(db_session).get_by_email("newuser@example.com")
        assert user is not None
        assert user.password_hash != "SecurePass123!"

    @pytest.mark.asyncio
    async def test_register_seeds_default_categories(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        """New users get their own children under both roots."""
        response = await client.post(
            "/api/v1/auth/register",
            json={"email": "seeded@example.com", "password": "SecurePass123!"},
        )
        assert response.status_code == 201

        user = await UserRepository(db_session).get_by_email("seeded@example.com")
        visible = await CategoryRepository(db_session).get_visible(user.id)
        owned = [category for category in visible if not category.is_root]

        assert len(owned) >= 2
        assert all(category.owner_id == user.id for category in owned)
        parent_ids = {category.parent_id for category in owned}
        root_ids = {category.id for category in visible if category.is_root}
        assert parent_ids == root_ids

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/auth/register",
            json={"email": test_user.email, "password": "AnotherPass123!"},
        )

        assert response.status_code == 409
        data = response.json()
        assert data["kind"] == "conflict"
        assert data["error_code"] == "AUTH_001"

    @pytest.mark.asyncio
    async def test_register_invalid_email(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/register",
            json={"email": "not-an-email", "password": "SecurePass123!"},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_register_short_password(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/register",
            json={"email": "short@example.com", "password": "12345"},
        )

        assert response.status_code == 400


class TestUserLogin:
    """Test login endpoint."""

    @pytest.mark.asyncio
    async def test_login_success(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": test_user.email, "password": "password123"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["access_token"]
        assert data["refresh_token"]
        assert data["token_type"] == "bearer"

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": test_user.email, "password": "wrong-password"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@example.com", "password": "password123"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_login_inactive_user(
        self, client: AsyncClient, db_session: AsyncSession, test_user: User
    ):
        test_user.is_active = False
        await db_session.commit()

        response = await client.post(
            "/api/v1/auth/login",
            json={"email": test_user.email, "password": "password123"},
        )

        assert response.status_code == 403


class TestTokenRefresh:
    """Test refresh endpoint."""

    @pytest.mark.asyncio
    async def test_refresh_success(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/auth/refresh",
            json={"refresh_token": create_refresh_token(test_user.id)},
        )

        assert response.status_code == 200
        assert response.json()["access_token"]

    @pytest.mark.asyncio
    async def test_refresh_with_access_token(self, client: AsyncClient, auth_headers: dict):
        access_token = auth_headers["Authorization"].split(" ", 1)[1]

        response = await client.post(
            "/api/v1/auth/refresh", json={"refresh_token": access_token}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_refresh_invalid_token(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/refresh", json={"refresh_token": "invalid.token.here"}
        )

        assert response.status_code == 401


class TestCurrentUser:
    """Test /auth/me endpoint."""

    @pytest.mark.asyncio
    async def test_me(self, client: AsyncClient, test_user: User, auth_headers: dict):
        response = await client.get("/api/v1/auth/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["id"] == str(test_user.id)
        assert response.json()["email"] == test_user.email

    @pytest.mark.asyncio
    async def test_me_without_token(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/me")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_me_with_refresh_token(self, client: AsyncClient, test_user: User):
        token = create_refresh_token(test_user.id)

        response = await client.get(
            "/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401
