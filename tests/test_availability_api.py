"""Tests for the public and admin availability endpoints."""

from httpx import AsyncClient

DEFAULT_SLOTS = [
    "9:00 AM",
    "10:00 AM",
    "11:00 AM",
    "12:00 PM",
    "2:00 PM",
    "3:00 PM",
    "4:00 PM",
]


class TestPublicAvailability:
    """Tests for GET /availability."""

    async def test_returns_defaults_without_auth(self, client: AsyncClient) -> None:
        """Test the first read creates and returns the default settings."""
        response = await client.get("/api/v1/availability")

        assert response.status_code == 200
        availability = response.json()["availability"]
        assert availability["start_time"] == "09:00"
        assert availability["end_time"] == "17:00"
        assert availability["working_days"] == [1, 2, 3, 4, 5, 6]
        assert availability["slots"] == DEFAULT_SLOTS
        assert "id" not in availability


class TestAdminAvailability:
    """Tests for GET/PUT /admin/availability."""

    async def test_admin_view_includes_id(
        self, client: AsyncClient, admin_headers: dict
    ) -> None:
        response = await client.get("/api/v1/admin/availability", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["availability"]["id"]

    async def test_customer_is_forbidden(
        self, client: AsyncClient, customer_headers: dict
    ) -> None:
        response = await client.get(
            "/api/v1/admin/availability", headers=customer_headers
        )

        assert response.status_code == 403

    async def test_anonymous_is_unauthorized(self, client: AsyncClient) -> None:
        response = await client.put(
            "/api/v1/admin/availability", json={"start_time": "08:00"}
        )

        assert response.status_code == 401

    async def test_update_changes_public_slots(
        self, client: AsyncClient, admin_headers: dict
    ) -> None:
        response = await client.put(
            "/api/v1/admin/availability",
            json={
                "start_time": "09:00",
                "end_time": "10:30",
                "slot_duration_minutes": 60,
                "break_start_time": "",
                "break_end_time": "",
                "unknown_field": "ignored",
            },
            headers=admin_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Availability updated successfully."
        assert data["availability"]["slots"] == ["9:00 AM"]
        assert data["availability"]["break_start_time"] is None

        public = await client.get("/api/v1/availability")
        assert public.json()["availability"]["slots"] == ["9:00 AM"]

    async def test_update_keeps_id(
        self, client: AsyncClient, admin_headers: dict
    ) -> None:
        before = await client.get("/api/v1/admin/availability", headers=admin_headers)
        after = await client.put(
            "/api/v1/admin/availability",
            json={"working_days": [0, 6]},
            headers=admin_headers,
        )

        assert after.json()["availability"]["id"] == before.json()["availability"]["id"]
        assert after.json()["availability"]["working_days"] == [0, 6]

    async def test_short_duration_is_rejected(
        self, client: AsyncClient, admin_headers: dict
    ) -> None:
        response = await client.put(
            "/api/v1/admin/availability",
            json={"slot_duration_minutes": 10},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == (
            "slot_duration_minutes must be an integer >= 15."
        )

    async def test_huge_duration_is_rejected(
        self, client: AsyncClient, admin_headers: dict
    ) -> None:
        response = await client.put(
            "/api/v1/admin/availability",
            json={"slot_duration_minutes": 10**12},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == (
            "slot_duration_minutes must be at most 1440."
        )

        after = await client.get("/api/v1/availability")
        assert after.json()["availability"]["slot_duration_minutes"] == 60

    async def test_malformed_time_is_rejected(
        self, client: AsyncClient, admin_headers: dict
    ) -> None:
        response = await client.put(
            "/api/v1/admin/availability",
            json={"break_end_time": "2pm"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "break_end_time must be in HH:mm format."

    async def test_customer_cannot_update(
        self, client: AsyncClient, customer_headers: dict
    ) -> None:
        response = await client.put(
            "/api/v1/admin/availability",
            json={"start_time": "08:00"},
            headers=customer_headers,
        )

        assert response.status_code == 403


class TestAdminPing:
    """Tests for GET /admin/ping."""

    async def test_admin_granted(self, client: AsyncClient, admin_headers: dict) -> None:
        response = await client.get("/api/v1/admin/ping", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Admin access granted."}

    async def test_customer_denied(
        self, client: AsyncClient, customer_headers: dict
    ) -> None:
        response = await client.get("/api/v1/admin/ping", headers=customer_headers)

        assert response.status_code == 403
