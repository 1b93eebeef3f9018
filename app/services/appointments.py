"""Appointment service: booking, listing and role-scoped updates.

Every write goes through ``AppointmentAccessControl`` first, so a request
that fails any check leaves the stored appointment untouched.
"""

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.booking.access import AppointmentAccessControl
from app.booking.errors import (
    BookingForbiddenError,
    BookingNotFoundError,
    BookingValidationError,
)
from app.booking.policy import Actor
from app.core.logging import audit_logger
from app.models.appointment import Appointment, AppointmentStatus
from app.models.user import User
from app.services.catalog import CatalogService
from app.utils.time import parse_calendar_date
from app.utils.validation import is_valid_id

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = (
    "Service, appointment_date, start_time, and end_time are required."
)


class AppointmentService:
    """Service for creating, reading and updating appointments."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.catalog = CatalogService(session)
        self.access = AppointmentAccessControl(
            find_user=self.find_user,
            find_service=self.catalog.get_service_by_id,
        )

    async def find_user(self, user_id: str) -> User | None:
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def _fetch(self, appointment_id: str) -> Appointment | None:
        result = await self.session.execute(
            select(Appointment)
            .where(Appointment.id == appointment_id)
            .execution_options(populate_existing=True)
        )
        return result.unique().scalar_one_or_none()

    async def create(
        self,
        actor: Actor,
        service_id: str | None,
        appointment_date: Any,
        start_time: str | None,
        end_time: str | None,
        notes: str | None = None,
        customer_id: str | None = None,
    ) -> Appointment:
        """Book an appointment.

        Customers always book for themselves. Admins may name a customer.

        Returns:
            Created appointment with customer and service loaded

        Raises:
            BookingValidationError: Missing or malformed input
            BookingNotFoundError: Service or named customer does not exist
        """
        if not service_id or not appointment_date or not start_time or not end_time:
            raise BookingValidationError(REQUIRED_FIELDS_MESSAGE)

        if not is_valid_id(service_id):
            raise BookingValidationError("Invalid service id.")

        parsed_date = parse_calendar_date(appointment_date)
        if parsed_date is None:
            raise BookingValidationError("Invalid appointment date.")

        service = await self.access.require_service(service_id)
        customer = await self.access.resolve_customer_for_create(customer_id, actor)

        appointment = Appointment(
            customer_id=customer,
            service_id=str(service.id),
            appointment_date=parsed_date,
            start_time=start_time,
            end_time=end_time,
            status=AppointmentStatus.PENDING.value,
            notes=notes,
        )
        self.session.add(appointment)
        await self.session.commit()

        audit_logger.log(
            action="appointment_created",
            actor_role=actor.role.value,
            actor_id=actor.id,
            entity_type="appointment",
            entity_id=str(appointment.id),
            metadata={
                "customer_id": customer,
                "service_id": str(service.id),
                "appointment_date": parsed_date.isoformat(),
            },
        )

        return await self._fetch(appointment.id)

    async def list_appointments(
        self,
        actor: Actor,
        status: str | None = None,
        service_id: str | None = None,
        customer_id: str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
    ) -> Sequence[Appointment]:
        """List appointments visible to the actor.

        Customers only ever see their own appointments; ``customer_id`` is
        ignored for them. Date bounds are inclusive.

        Returns:
            Appointments ordered by date, then start time
        """
        query = select(Appointment)

        if not actor.is_admin:
            query = query.where(Appointment.customer_id == actor.id)

        if status:
            query = query.where(Appointment.status == status)

        if service_id:
            if not is_valid_id(service_id):
                raise BookingValidationError("Invalid service id.")
            query = query.where(Appointment.service_id == service_id)

        if customer_id and actor.is_admin:
            if not is_valid_id(customer_id):
                raise BookingValidationError("Invalid customer id.")
            query = query.where(Appointment.customer_id == customer_id)

        if date_from:
            lower = _parse_date_filter(date_from, "date_from")
            query = query.where(Appointment.appointment_date >= lower)

        if date_to:
            upper = _parse_date_filter(date_to, "date_to")
            query = query.where(Appointment.appointment_date <= upper)

        query = query.order_by(Appointment.appointment_date, Appointment.start_time)

        result = await self.session.execute(query)
        return result.unique().scalars().all()

    async def get(self, appointment_id: str, actor: Actor) -> Appointment:
        """Get one appointment the actor may see.

        Raises:
            BookingValidationError: Malformed ID
            BookingNotFoundError: No such appointment
            BookingForbiddenError: Appointment belongs to someone else
        """
        if not is_valid_id(appointment_id):
            raise BookingValidationError("Invalid appointment id.")

        appointment = await self._fetch(appointment_id)
        if appointment is None:
            raise BookingNotFoundError("Appointment not found.")

        if not self.access.can_access(appointment, actor):
            raise BookingForbiddenError("Forbidden.")

        return appointment

    async def update(
        self,
        appointment_id: str,
        requested: Mapping[str, Any],
        actor: Actor,
    ) -> Appointment:
        """Apply a role-scoped update to an appointment.

        Fields the actor's role may not change are dropped. All remaining
        fields are validated before a single write.

        Returns:
            Updated appointment with customer and service loaded
        """
        appointment = await self.get(appointment_id, actor)
        patch = await self.access.apply_update_policy(requested, actor)

        if patch:
            for column, value in patch.items():
                setattr(appointment, column, value)
            await self.session.commit()

            audit_logger.log(
                action="appointment_updated",
                actor_role=actor.role.value,
                actor_id=actor.id,
                entity_type="appointment",
                entity_id=str(appointment_id),
                metadata={"fields": sorted(patch)},
            )
        else:
            logger.debug(f"No permitted fields in update for appointment {appointment_id}")

        return await self._fetch(appointment_id)


def _parse_date_filter(value: str, name: str) -> date:
    parsed = parse_calendar_date(value)
    if parsed is None:
        raise BookingValidationError(f"Invalid {name} value.")
    return parsed
