"""Availability schemas."""

from pydantic import BaseModel


class AvailabilityRead(BaseModel):
    """Availability settings with the slot labels they produce."""

    start_time: str
    end_time: str
    slot_duration_minutes: int
    working_days: list[int]
    break_start_time: str | None = None
    break_end_time: str | None = None
    slots: list[str]


class AdminAvailabilityRead(AvailabilityRead):
    """Admin view of the settings, including the record ID."""

    id: str


class AvailabilityResponse(BaseModel):
    availability: AvailabilityRead


class AdminAvailabilityResponse(BaseModel):
    availability: AdminAvailabilityRead
    message: str | None = None
