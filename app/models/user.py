"""User account model."""

from enum import Enum

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, TimestampMixin


class UserRole(str, Enum):
    """Roles known to the booking system."""

    CUSTOMER = "customer"
    ADMIN = "admin"


class User(Base, TimestampMixin):
    """Customer or administrator account.

    The role is authoritative for every booking decision; it is never
    re-derived from other attributes.
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(
        String(150),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    phone: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
    )
    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    role: Mapped[UserRole] = mapped_column(
        String(20),
        default=UserRole.CUSTOMER,
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    @property
    def role_value(self) -> str:
        """Role as a plain string, whether loaded as enum or str."""
        return self.role.value if isinstance(self.role, UserRole) else str(self.role)

    @property
    def is_admin(self) -> bool:
        return self.role_value == UserRole.ADMIN.value

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role_value})>"
