"""Appointment schemas."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from app.models.appointment import TIME_LABEL_MAX_LENGTH, AppointmentStatus
from app.schemas.service import ServiceSummary
from app.schemas.user import CustomerSummary


class AppointmentCreate(BaseModel):
    """Booking request.

    Required fields are checked by the appointment service so that a
    missing field produces a single readable message.
    """

    service: str | None = None
    appointment_date: str | None = None
    start_time: str | None = Field(default=None, max_length=TIME_LABEL_MAX_LENGTH)
    end_time: str | None = Field(default=None, max_length=TIME_LABEL_MAX_LENGTH)
    notes: str | None = None
    customer_id: str | None = None


class AppointmentRead(BaseModel):
    """Appointment with its customer and service."""

    id: str
    customer_id: str
    service_id: str
    customer: CustomerSummary | None = None
    service: ServiceSummary | None = None
    appointment_date: date
    start_time: str
    end_time: str
    status: AppointmentStatus
    notes: str | None = None
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class AppointmentResponse(BaseModel):
    appointment: AppointmentRead
    message: str | None = None


class AppointmentListResponse(BaseModel):
    appointments: list[AppointmentRead]
