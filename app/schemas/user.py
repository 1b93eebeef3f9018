"""User schemas."""

from datetime import datetime

from pydantic import BaseModel

from app.models.user import UserRole


class UserRead(BaseModel):
    """Current user profile."""

    id: str
    name: str
    email: str
    phone: str | None = None
    role: UserRole
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class CustomerSummary(BaseModel):
    """Customer fields embedded in an appointment."""

    id: str
    name: str
    email: str
    phone: str | None = None
    role: UserRole

    model_config = {"from_attributes": True}
