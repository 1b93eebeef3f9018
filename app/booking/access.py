"""Appointment access control backed by user and service lookups.

Resolves who an appointment is booked for and reduces an update request to
a fully validated patch. Every check completes before the caller writes
anything, so a failing field never leaves a half-applied update behind.
"""

from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from app.booking.errors import (
    BookingForbiddenError,
    BookingNotFoundError,
    BookingValidationError,
)
from app.booking.policy import (
    Actor,
    HasCustomer,
    allowed_update_fields,
    can_access,
    check_status_change,
    filter_update_fields,
)
from app.models.appointment import TIME_LABEL_MAX_LENGTH
from app.models.service import Service
from app.models.user import User, UserRole
from app.utils.time import parse_calendar_date
from app.utils.validation import is_valid_id

UserLookup = Callable[[str], Awaitable[User | None]]
ServiceLookup = Callable[[str], Awaitable[Service | None]]

# Request field -> appointment column
FIELD_COLUMNS = {
    "customer": "customer_id",
    "service": "service_id",
    "appointment_date": "appointment_date",
    "start_time": "start_time",
    "end_time": "end_time",
    "status": "status",
    "notes": "notes",
}


class AppointmentAccessControl:
    """Role-scoped visibility and mutation rules for appointments."""

    def __init__(self, find_user: UserLookup, find_service: ServiceLookup) -> None:
        self.find_user = find_user
        self.find_service = find_service

    @staticmethod
    def can_access(appointment: HasCustomer, actor: Actor) -> bool:
        return can_access(appointment, actor)

    @staticmethod
    def allowed_update_fields(role: UserRole | str) -> frozenset[str]:
        return allowed_update_fields(role)

    async def require_service(self, service_id: Any) -> Service:
        """Look up a service by ID.

        Raises:
            BookingValidationError: If the ID is malformed
            BookingNotFoundError: If no such service exists
        """
        if not is_valid_id(service_id):
            raise BookingValidationError("Invalid service id.")
        service = await self.find_service(service_id)
        if service is None:
            raise BookingNotFoundError("Service not found.")
        return service

    async def require_customer(self, customer_id: Any) -> User:
        """Look up a user that must hold the customer role.

        Raises:
            BookingValidationError: If the ID is malformed
            BookingNotFoundError: If no such user exists or it is not a customer
        """
        if not is_valid_id(customer_id):
            raise BookingValidationError("Invalid customer id.")
        user = await self.find_user(customer_id)
        if user is None or UserRole(user.role) != UserRole.CUSTOMER:
            raise BookingNotFoundError("Customer not found.")
        return user

    async def resolve_customer_for_create(
        self,
        requested_customer_id: str | None,
        actor: Actor,
    ) -> str:
        """Decide who a new appointment is booked for.

        Customers always book for themselves, whatever they submit. Admins
        may book for an existing customer, or for themselves when no
        customer is given.

        Returns:
            User ID to store as the appointment's customer
        """
        if not actor.is_admin:
            return actor.id

        if not requested_customer_id:
            return actor.id

        customer = await self.require_customer(requested_customer_id)
        return str(customer.id)

    async def apply_update_policy(
        self,
        requested: Mapping[str, Any],
        actor: Actor,
    ) -> dict[str, Any]:
        """Reduce an update request to the patch the actor may apply.

        Fields outside the role's allowed set are dropped silently. The
        remaining fields are validated in order: status, service, customer,
        appointment date, then the free-form fields.

        Args:
            requested: Fields submitted by the client
            actor: Caller identity and role

        Returns:
            Patch keyed by appointment column name

        Raises:
            BookingValidationError: Malformed value
            BookingForbiddenError: Role may not make this change
            BookingNotFoundError: Referenced service or customer missing
        """
        updates = filter_update_fields(requested, actor.role)
        patch: dict[str, Any] = {}

        if "status" in updates:
            patch["status"] = check_status_change(updates["status"], actor.role).value

        if "service" in updates:
            service = await self.require_service(updates["service"])
            patch["service_id"] = str(service.id)

        if "customer" in updates:
            if not actor.is_admin:
                raise BookingForbiddenError("Only admin can change customer.")
            customer = await self.require_customer(updates["customer"])
            patch["customer_id"] = str(customer.id)

        if "appointment_date" in updates:
            parsed = parse_calendar_date(updates["appointment_date"])
            if parsed is None:
                raise BookingValidationError("Invalid appointment date.")
            patch["appointment_date"] = parsed

        for field in ("start_time", "end_time"):
            if field in updates:
                value = updates[field]
                if not isinstance(value, str) or not value.strip():
                    raise BookingValidationError(f"{field} must be a non-empty string.")
                if len(value) > TIME_LABEL_MAX_LENGTH:
                    raise BookingValidationError(
                        f"{field} must be at most {TIME_LABEL_MAX_LENGTH} characters."
                    )
                patch[FIELD_COLUMNS[field]] = value

        if "notes" in updates:
            notes = updates["notes"]
            if notes is not None and not isinstance(notes, str):
                raise BookingValidationError("notes must be a string.")
            patch["notes"] = notes

        return patch
