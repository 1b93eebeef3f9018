"""Tests for registration, login and the current-user endpoint."""

from datetime import timedelta

from httpx import AsyncClient
from jose import jwt

from app.core.config import settings
from app.core.security import create_access_token, decode_access_token
from app.models.user import User


class TestRegister:
    """Tests for POST /auth/register."""

    async def test_register_creates_customer(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/auth/register",
            json={
                "name": "New Customer",
                "email": "New.Customer@Example.com",
                "password": "longenough1",
                "phone": "555-0100",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "new.customer@example.com"
        assert data["role"] == "customer"
        assert "hashed_password" not in data

    async def test_duplicate_email_conflicts(
        self, client: AsyncClient, customer_user: User
    ) -> None:
        response = await client.post(
            "/api/v1/auth/register",
            json={
                "name": "Someone",
                "email": customer_user.email,
                "password": "longenough1",
            },
        )

        assert response.status_code == 409

    async def test_short_password_is_bad_request(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/auth/register",
            json={"name": "Someone", "email": "a@example.com", "password": "short"},
        )

        assert response.status_code == 400
        assert "password" in response.json()["detail"]


class TestLogin:
    """Tests for POST /auth/login."""

    async def test_login_returns_token_with_role(
        self, client: AsyncClient, customer_user: User
    ) -> None:
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": customer_user.email, "password": "testpassword123"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"

        payload = decode_access_token(data["access_token"])
        assert payload["sub"] == customer_user.id
        assert payload["role"] == "customer"

    async def test_wrong_password(
        self, client: AsyncClient, customer_user: User
    ) -> None:
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": customer_user.email, "password": "wrongpassword"},
        )

        assert response.status_code == 401

    async def test_unknown_email(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@example.com", "password": "whatever123"},
        )

        assert response.status_code == 401


class TestMe:
    """Tests for GET /auth/me."""

    async def test_returns_current_user(
        self, client: AsyncClient, admin_headers: dict, admin_user: User
    ) -> None:
        response = await client.get("/api/v1/auth/me", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["id"] == admin_user.id
        assert response.json()["role"] == "admin"

    async def test_missing_token(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/auth/me")

        assert response.status_code == 401

    async def test_expired_token(
        self, client: AsyncClient, customer_user: User
    ) -> None:
        token = create_access_token(
            subject=customer_user.id, expires_delta=timedelta(minutes=-1)
        )

        response = await client.get(
            "/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401

    async def test_role_comes_from_stored_user(
        self, client: AsyncClient, customer_user: User
    ) -> None:
        """Test a forged role claim grants nothing."""
        token = create_access_token(
            subject=customer_user.id, additional_claims={"role": "admin"}
        )

        response = await client.get(
            "/api/v1/admin/ping", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 403


class TestTokens:
    """Tests for access token claims."""

    def test_extra_claims_cannot_replace_subject(self) -> None:
        token = create_access_token(
            subject="user-1", additional_claims={"sub": "user-2", "type": "refresh"}
        )

        payload = decode_access_token(token)
        assert payload["sub"] == "user-1"
        assert payload["type"] == "access"

    def test_non_access_token_is_rejected(self) -> None:
        token = jwt.encode(
            {"sub": "user-1", "type": "refresh"},
            settings.secret_key,
            algorithm=settings.algorithm,
        )

        assert decode_access_token(token) is None

    def test_garbage_token_is_rejected(self) -> None:
        assert decode_access_token("not-a-token") is None
