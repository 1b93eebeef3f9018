"""Public availability endpoint."""

from fastapi import APIRouter

from app.api.deps import DbSession
from app.schemas.availability import AvailabilityResponse
from app.services.availability import AvailabilityService

router = APIRouter()


@router.get(
    "",
    response_model=AvailabilityResponse,
    summary="Availability",
    description="Working hours, break and the bookable slot labels for a day",
)
async def get_availability(session: DbSession) -> AvailabilityResponse:
    """Get the public availability, creating default settings if needed."""
    view = await AvailabilityService(session).get_public_availability()
    return AvailabilityResponse(availability=view)
