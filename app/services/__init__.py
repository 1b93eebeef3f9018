"""Business logic services."""

from app.services.appointments import AppointmentService
from app.services.auth import AuthService, EmailAlreadyRegisteredError
from app.services.availability import AvailabilityService, build_availability_view
from app.services.catalog import CatalogService
from app.services.rbac import Permission, RBACService

__all__ = [
    "AppointmentService",
    "AuthService",
    "EmailAlreadyRegisteredError",
    "AvailabilityService",
    "build_availability_view",
    "CatalogService",
    "RBACService",
    "Permission",
]
