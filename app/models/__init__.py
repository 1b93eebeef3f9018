"""Database models for the booking API."""

from app.models.appointment import Appointment, AppointmentStatus
from app.models.availability import DEFAULT_SETTINGS_KEY, AvailabilitySettings
from app.models.service import Service
from app.models.user import User, UserRole

__all__ = [
    # Accounts
    "User",
    "UserRole",
    # Catalog
    "Service",
    # Availability
    "AvailabilitySettings",
    "DEFAULT_SETTINGS_KEY",
    # Appointments
    "Appointment",
    "AppointmentStatus",
]
