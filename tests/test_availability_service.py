"""Tests for the availability settings store."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.booking.errors import BookingValidationError
from app.booking.policy import Actor
from app.models.availability import AvailabilitySettings
from app.models.user import User, UserRole
from app.services.availability import AvailabilityService, build_availability_view


@pytest.fixture
def admin_actor(admin_user: User) -> Actor:
    return Actor(admin_user.id, UserRole.ADMIN)


class TestEnsureSettings:
    """Tests for lazy creation of the settings record."""

    async def test_creates_defaults(self, async_session: AsyncSession) -> None:
        settings = await AvailabilityService(async_session).ensure_settings()

        assert settings.start_time == "09:00"
        assert settings.end_time == "17:00"
        assert settings.slot_duration_minutes == 60
        assert settings.working_days == [1, 2, 3, 4, 5, 6]
        assert settings.break_start_time == "13:00"
        assert settings.break_end_time == "14:00"

    async def test_is_idempotent(self, async_session: AsyncSession) -> None:
        """Test two calls return the same record and create only one row."""
        service = AvailabilityService(async_session)

        first = await service.ensure_settings()
        second = await service.ensure_settings()

        assert first.id == second.id
        assert build_availability_view(first) == build_availability_view(second)

        count = await async_session.scalar(
            select(func.count()).select_from(AvailabilitySettings)
        )
        assert count == 1

    async def test_public_view_includes_slots(self, async_session: AsyncSession) -> None:
        view = await AvailabilityService(async_session).get_public_availability()

        assert "id" not in view
        assert view["slots"] == [
            "9:00 AM",
            "10:00 AM",
            "11:00 AM",
            "12:00 PM",
            "2:00 PM",
            "3:00 PM",
            "4:00 PM",
        ]


class TestUpdateSettings:
    """Tests for administrator edits."""

    async def test_partial_update_keeps_other_fields(
        self, async_session: AsyncSession, admin_actor: Actor
    ) -> None:
        service = AvailabilityService(async_session)

        updated = await service.update_settings(
            {"slot_duration_minutes": "30", "colour": "blue"}, admin_actor
        )

        assert updated.slot_duration_minutes == 30
        assert updated.start_time == "09:00"
        assert not hasattr(updated, "colour")

    async def test_clearing_break_removes_it_from_slots(
        self, async_session: AsyncSession, admin_actor: Actor
    ) -> None:
        service = AvailabilityService(async_session)

        updated = await service.update_settings(
            {
                "start_time": "12:00",
                "end_time": "15:00",
                "break_start_time": "",
                "break_end_time": "",
            },
            admin_actor,
        )

        assert updated.break_start_time is None
        assert updated.break_end_time is None
        assert build_availability_view(updated)["slots"] == [
            "12:00 PM",
            "1:00 PM",
            "2:00 PM",
        ]

    async def test_invalid_patch_changes_nothing(
        self, async_session: AsyncSession, admin_actor: Actor
    ) -> None:
        """Test a rejected patch leaves the stored settings untouched."""
        service = AvailabilityService(async_session)

        with pytest.raises(BookingValidationError) as exc_info:
            await service.update_settings(
                {"start_time": "07:00", "slot_duration_minutes": 10}, admin_actor
            )

        assert "15" in exc_info.value.message
        settings = await service.ensure_settings()
        assert settings.start_time == "09:00"

    async def test_update_is_audited(
        self, async_session: AsyncSession, admin_actor: Actor, caplog
    ) -> None:
        with caplog.at_level("INFO", logger="audit"):
            await AvailabilityService(async_session).update_settings(
                {"working_days": [1, 2, 3]}, admin_actor
            )

        assert "action=availability_updated" in caplog.text
        assert f"actor=admin:{admin_actor.id}" in caplog.text
