"""Service catalog schemas."""

from decimal import Decimal

from pydantic import BaseModel


class ServiceRead(BaseModel):
    """A bookable service."""

    id: str
    name: str
    description: str | None = None
    duration_minutes: int
    price: Decimal
    is_active: bool

    model_config = {"from_attributes": True}


class ServiceSummary(BaseModel):
    """Service fields embedded in an appointment."""

    id: str
    name: str
    duration_minutes: int
    price: Decimal

    model_config = {"from_attributes": True}


class ServiceListResponse(BaseModel):
    services: list[ServiceRead]
