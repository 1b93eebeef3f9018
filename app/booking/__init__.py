"""Booking core: slot generation and appointment access control."""

from app.booking.access import AppointmentAccessControl
from app.booking.errors import (
    BookingError,
    BookingForbiddenError,
    BookingNotFoundError,
    BookingValidationError,
)
from app.booking.policy import Actor, can_access
from app.booking.slots import generate_slots, validate_settings_patch

__all__ = [
    "AppointmentAccessControl",
    "Actor",
    "can_access",
    "generate_slots",
    "validate_settings_patch",
    "BookingError",
    "BookingValidationError",
    "BookingNotFoundError",
    "BookingForbiddenError",
]
