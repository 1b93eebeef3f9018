"""Appointment model."""

from datetime import date
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from app.models.service import Service
    from app.models.user import User


# Longest start or end time label accepted and stored
TIME_LABEL_MAX_LENGTH = 20


class AppointmentStatus(str, Enum):
    """Lifecycle states of an appointment."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class Appointment(Base, TimestampMixin):
    """A customer's reservation of a service on a given day.

    Appointments are never hard-deleted; ``status`` models the end of
    their lifecycle. ``start_time``/``end_time`` are stored as submitted.
    """

    __tablename__ = "appointments"

    customer_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    service_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("services.id"),
        nullable=False,
        index=True,
    )
    appointment_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        index=True,
    )
    start_time: Mapped[str] = mapped_column(
        String(TIME_LABEL_MAX_LENGTH),
        nullable=False,
    )
    end_time: Mapped[str] = mapped_column(
        String(TIME_LABEL_MAX_LENGTH),
        nullable=False,
    )
    status: Mapped[AppointmentStatus] = mapped_column(
        String(20),
        default=AppointmentStatus.PENDING,
        nullable=False,
        index=True,
    )
    notes: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    # Relationships
    customer: Mapped["User"] = relationship("User", lazy="joined")
    service: Mapped["Service"] = relationship("Service", lazy="joined")

    def __repr__(self) -> str:
        return f"<Appointment {self.appointment_date} {self.start_time} ({self.status})>"
