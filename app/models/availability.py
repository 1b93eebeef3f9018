"""Global availability settings model."""

from sqlalchemy import JSON, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, TimestampMixin

DEFAULT_SETTINGS_KEY = "default"


class AvailabilitySettings(Base, TimestampMixin):
    """Working hours, slot length, working days and break window.

    At most one row exists, identified by ``key == "default"``. Times are
    ``HH:mm`` strings; working days use 0 = Sunday.
    """

    __tablename__ = "availability_settings"

    key: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
        default=DEFAULT_SETTINGS_KEY,
    )
    start_time: Mapped[str] = mapped_column(
        String(5),
        nullable=False,
    )
    end_time: Mapped[str] = mapped_column(
        String(5),
        nullable=False,
    )
    slot_duration_minutes: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    working_days: Mapped[list[int]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )
    break_start_time: Mapped[str | None] = mapped_column(
        String(5),
        nullable=True,
    )
    break_end_time: Mapped[str | None] = mapped_column(
        String(5),
        nullable=True,
    )

    def __repr__(self) -> str:
        return (
            f"<AvailabilitySettings {self.start_time}-{self.end_time} "
            f"every {self.slot_duration_minutes}m>"
        )
