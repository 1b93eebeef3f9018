"""Pydantic schemas for request/response validation."""

from app.schemas.appointment import (
    AppointmentCreate,
    AppointmentListResponse,
    AppointmentRead,
    AppointmentResponse,
)
from app.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from app.schemas.availability import (
    AdminAvailabilityRead,
    AdminAvailabilityResponse,
    AvailabilityRead,
    AvailabilityResponse,
)
from app.schemas.service import ServiceListResponse, ServiceRead, ServiceSummary
from app.schemas.user import CustomerSummary, UserRead

__all__ = [
    "LoginRequest",
    "RegisterRequest",
    "TokenResponse",
    "UserRead",
    "CustomerSummary",
    "ServiceRead",
    "ServiceSummary",
    "ServiceListResponse",
    "AvailabilityRead",
    "AdminAvailabilityRead",
    "AvailabilityResponse",
    "AdminAvailabilityResponse",
    "AppointmentCreate",
    "AppointmentRead",
    "AppointmentResponse",
    "AppointmentListResponse",
]
