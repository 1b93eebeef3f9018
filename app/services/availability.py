"""Availability settings store and public slot read model."""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.booking.errors import BookingValidationError
from app.booking.policy import Actor
from app.booking.slots import (
    DEFAULT_AVAILABILITY,
    generate_slots,
    normalize_settings_patch,
    validate_settings_patch,
)
from app.core.logging import audit_logger
from app.models.availability import DEFAULT_SETTINGS_KEY, AvailabilitySettings

logger = logging.getLogger(__name__)


class AvailabilityService:
    """Service owning the global availability settings record."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _load(self) -> AvailabilitySettings | None:
        result = await self.session.execute(
            select(AvailabilitySettings).where(
                AvailabilitySettings.key == DEFAULT_SETTINGS_KEY
            )
        )
        return result.scalar_one_or_none()

    async def ensure_settings(self) -> AvailabilitySettings:
        """Return the settings record, creating it with defaults if absent.

        Idempotent: repeated calls return the same record. If a concurrent
        request inserts the row first, the unique key makes our insert fail
        and the winner's row is returned instead.
        """
        existing = await self._load()
        if existing is not None:
            return existing

        record = AvailabilitySettings(key=DEFAULT_SETTINGS_KEY, **DEFAULT_AVAILABILITY)
        self.session.add(record)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            existing = await self._load()
            if existing is None:
                raise
            return existing

        logger.info("Created default availability settings")
        return record

    async def update_settings(
        self,
        patch: Mapping[str, Any],
        actor: Actor,
    ) -> AvailabilitySettings:
        """Apply an administrator's edit to the settings record.

        Args:
            patch: Submitted fields; unknown keys are ignored
            actor: Administrator making the change

        Returns:
            Updated settings record

        Raises:
            BookingValidationError: If any submitted field is malformed
        """
        error = validate_settings_patch(patch)
        if error:
            raise BookingValidationError(error)

        record = await self.ensure_settings()
        changes = normalize_settings_patch(patch)

        for field, value in changes.items():
            setattr(record, field, value)

        await self.session.commit()
        await self.session.refresh(record)

        audit_logger.log(
            action="availability_updated",
            actor_role=actor.role.value,
            actor_id=actor.id,
            entity_type="availability_settings",
            entity_id=str(record.id),
            metadata={"fields": sorted(changes)},
        )

        return record

    async def get_public_availability(self) -> dict[str, Any]:
        """Settings plus the slot labels they produce."""
        record = await self.ensure_settings()
        return build_availability_view(record)


def build_availability_view(
    record: AvailabilitySettings,
    include_id: bool = False,
) -> dict[str, Any]:
    """Read model for a settings record.

    Args:
        record: Settings record
        include_id: Include the record ID (admin view)
    """
    view: dict[str, Any] = {
        "start_time": record.start_time,
        "end_time": record.end_time,
        "slot_duration_minutes": record.slot_duration_minutes,
        "working_days": list(record.working_days or []),
        "break_start_time": record.break_start_time,
        "break_end_time": record.break_end_time,
        "slots": generate_slots(record),
    }
    if include_id:
        view["id"] = str(record.id)
    return view
