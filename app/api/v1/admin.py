"""Administrator endpoints."""

from typing import Any

from fastapi import APIRouter, Body

from app.api.deps import CurrentAdmin, DbSession
from app.api.errors import booking_http_error
from app.booking.errors import BookingError
from app.booking.policy import Actor
from app.schemas.availability import AdminAvailabilityResponse
from app.services.availability import AvailabilityService, build_availability_view

router = APIRouter()


@router.get("/ping", summary="Admin access check")
async def admin_ping(admin: CurrentAdmin) -> dict:
    return {"message": "Admin access granted."}


@router.get(
    "/availability",
    response_model=AdminAvailabilityResponse,
    summary="Availability settings (admin)",
)
async def get_admin_availability(
    admin: CurrentAdmin,
    session: DbSession,
) -> AdminAvailabilityResponse:
    """Get the availability settings including the record ID."""
    record = await AvailabilityService(session).ensure_settings()
    return AdminAvailabilityResponse(
        availability=build_availability_view(record, include_id=True),
    )


@router.put(
    "/availability",
    response_model=AdminAvailabilityResponse,
    summary="Update availability settings",
    description=(
        "Partial update of working hours, slot length, working days and break. "
        "Unknown fields are ignored; an empty break bound clears it."
    ),
)
async def update_admin_availability(
    admin: CurrentAdmin,
    session: DbSession,
    patch: dict[str, Any] = Body(...),
) -> AdminAvailabilityResponse:
    """Validate and apply an availability edit."""
    service = AvailabilityService(session)

    try:
        record = await service.update_settings(patch, Actor.from_user(admin))
    except BookingError as e:
        raise booking_http_error(e)

    return AdminAvailabilityResponse(
        message="Availability updated successfully.",
        availability=build_availability_view(record, include_id=True),
    )
