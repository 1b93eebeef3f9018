"""Role rules for appointment visibility and mutation.

Pure decisions keyed by the actor's role. Anything that needs a lookup
(does this service exist?) lives in ``app.booking.access``.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from app.booking.errors import BookingForbiddenError, BookingValidationError
from app.models.appointment import AppointmentStatus
from app.models.user import UserRole


class HasCustomer(Protocol):
    customer_id: str


@dataclass(frozen=True)
class Actor:
    """Identity and role of the caller.

    Attributes:
        id: User ID of the caller
        role: Authoritative role of the caller
    """

    id: str
    role: UserRole

    @classmethod
    def from_user(cls, user: Any) -> "Actor":
        """Build an actor from a user record (role stored as str or enum)."""
        return cls(id=str(user.id), role=UserRole(user.role))

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


# Fields of an existing appointment each role may change
UPDATABLE_FIELDS: dict[UserRole, frozenset[str]] = {
    UserRole.ADMIN: frozenset({
        "customer",
        "service",
        "appointment_date",
        "start_time",
        "end_time",
        "status",
        "notes",
    }),
    UserRole.CUSTOMER: frozenset({
        "appointment_date",
        "start_time",
        "end_time",
        "status",
        "notes",
    }),
}

# Statuses each role may move an appointment into
SETTABLE_STATUSES: dict[UserRole, frozenset[AppointmentStatus]] = {
    UserRole.ADMIN: frozenset(AppointmentStatus),
    UserRole.CUSTOMER: frozenset({AppointmentStatus.CANCELLED}),
}


def can_access(appointment: HasCustomer, actor: Actor) -> bool:
    """Check whether the actor may read or update an appointment.

    Admins see everything; customers only their own appointments.
    """
    if actor.is_admin:
        return True
    return str(appointment.customer_id) == str(actor.id)


def allowed_update_fields(role: UserRole | str) -> frozenset[str]:
    """Get the field names a role may change on an existing appointment.

    Unknown roles get nothing.
    """
    try:
        return UPDATABLE_FIELDS.get(UserRole(role), frozenset())
    except ValueError:
        return frozenset()


def filter_update_fields(
    requested: Mapping[str, Any],
    role: UserRole | str,
) -> dict[str, Any]:
    """Keep only the requested fields the role may change.

    Anything else, including unknown keys, is dropped without error.
    """
    allowed = allowed_update_fields(role)
    return {field: value for field, value in requested.items() if field in allowed}


def can_set_status(role: UserRole | str, status: AppointmentStatus) -> bool:
    """Check the role's status transition table."""
    try:
        return status in SETTABLE_STATUSES.get(UserRole(role), frozenset())
    except ValueError:
        return False


def check_status_change(value: Any, role: UserRole | str) -> AppointmentStatus:
    """Validate a requested status against the enum and the role's table.

    Args:
        value: Requested status as submitted
        role: Role of the actor

    Returns:
        The requested status as an enum member

    Raises:
        BookingValidationError: If the value is not a known status
        BookingForbiddenError: If the role may not set this status
    """
    try:
        status = AppointmentStatus(value)
    except ValueError:
        valid = ", ".join(s.value for s in AppointmentStatus)
        raise BookingValidationError(f"Invalid status. Valid values: {valid}.")

    if not can_set_status(role, status):
        permitted = sorted(
            s.value for s in SETTABLE_STATUSES.get(UserRole(role), frozenset())
        )
        raise BookingForbiddenError(
            f"{UserRole(role).value.capitalize()}s can only change status to "
            f"{', '.join(permitted)}."
        )

    return status
