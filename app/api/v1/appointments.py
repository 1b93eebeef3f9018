"""Appointment endpoints for customers and administrators.

Customers book, list, view and update their own appointments. Admins see
and manage every appointment. Role-specific rules live in the booking
core; this module translates its errors into HTTP responses.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status

from app.api.deps import CurrentActor, DbSession, require_permissions
from app.api.errors import booking_http_error
from app.booking.errors import BookingError
from app.schemas.appointment import (
    AppointmentCreate,
    AppointmentListResponse,
    AppointmentRead,
    AppointmentResponse,
)
from app.services.appointments import AppointmentService
from app.services.rbac import Permission

router = APIRouter()


@router.post(
    "",
    response_model=AppointmentResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permissions(Permission.APPOINTMENTS_BOOK))],
)
async def create_appointment(
    actor: CurrentActor,
    session: DbSession,
    request: AppointmentCreate,
) -> AppointmentResponse:
    """Book an appointment.

    Customers always book for themselves; an admin may pass ``customer_id``.
    """
    service = AppointmentService(session)

    try:
        appointment = await service.create(
            actor=actor,
            service_id=request.service,
            appointment_date=request.appointment_date,
            start_time=request.start_time,
            end_time=request.end_time,
            notes=request.notes,
            customer_id=request.customer_id,
        )
    except BookingError as e:
        raise booking_http_error(e)

    return AppointmentResponse(
        message="Appointment created successfully.",
        appointment=AppointmentRead.model_validate(appointment),
    )


@router.get(
    "",
    response_model=AppointmentListResponse,
    dependencies=[Depends(require_permissions(Permission.APPOINTMENTS_READ))],
)
async def list_appointments(
    actor: CurrentActor,
    session: DbSession,
    status_filter: str | None = Query(default=None, alias="status"),
    service: str | None = Query(default=None),
    customer_id: str | None = Query(default=None),
    date_from: str | None = Query(default=None),
    date_to: str | None = Query(default=None),
) -> AppointmentListResponse:
    """List appointments visible to the caller, ordered by date and time."""
    appointment_service = AppointmentService(session)

    try:
        appointments = await appointment_service.list_appointments(
            actor=actor,
            status=status_filter,
            service_id=service,
            customer_id=customer_id,
            date_from=date_from,
            date_to=date_to,
        )
    except BookingError as e:
        raise booking_http_error(e)

    return AppointmentListResponse(
        appointments=[AppointmentRead.model_validate(a) for a in appointments]
    )


@router.get(
    "/{appointment_id}",
    response_model=AppointmentResponse,
    dependencies=[Depends(require_permissions(Permission.APPOINTMENTS_READ))],
)
async def get_appointment(
    appointment_id: str,
    actor: CurrentActor,
    session: DbSession,
) -> AppointmentResponse:
    service = AppointmentService(session)

    try:
        appointment = await service.get(appointment_id, actor)
    except BookingError as e:
        raise booking_http_error(e)

    return AppointmentResponse(appointment=AppointmentRead.model_validate(appointment))


@router.patch(
    "/{appointment_id}",
    response_model=AppointmentResponse,
    dependencies=[Depends(require_permissions(Permission.APPOINTMENTS_UPDATE))],
)
async def update_appointment(
    appointment_id: str,
    actor: CurrentActor,
    session: DbSession,
    requested: dict[str, Any] = Body(...),
) -> AppointmentResponse:
    """Update an appointment.

    Fields the caller's role may not change are ignored. Customers may only
    move an appointment to ``cancelled``.
    """
    service = AppointmentService(session)

    try:
        appointment = await service.update(appointment_id, requested, actor)
    except BookingError as e:
        raise booking_http_error(e)

    return AppointmentResponse(
        message="Appointment updated successfully.",
        appointment=AppointmentRead.model_validate(appointment),
    )
