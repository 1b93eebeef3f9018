"""Tests for role rules on appointment visibility and mutation."""

from types import SimpleNamespace

import pytest

from app.booking.errors import BookingForbiddenError, BookingValidationError
from app.booking.policy import (
    Actor,
    allowed_update_fields,
    can_access,
    can_set_status,
    check_status_change,
    filter_update_fields,
)
from app.models.appointment import AppointmentStatus
from app.models.user import UserRole

OWNER_ID = "0b7c1c52-6f3f-4c8e-9a4e-0d1f2a3b4c5d"
OTHER_ID = "5e6f7a8b-9c0d-4e1f-8a2b-3c4d5e6f7a8b"
ADMIN_ID = "9a8b7c6d-5e4f-4a3b-9c2d-1e0f9a8b7c6d"


@pytest.fixture
def appointment() -> SimpleNamespace:
    return SimpleNamespace(customer_id=OWNER_ID)


class TestCanAccess:
    """Tests for appointment visibility."""

    def test_owner_can_access(self, appointment) -> None:
        assert can_access(appointment, Actor(OWNER_ID, UserRole.CUSTOMER)) is True

    def test_other_customer_cannot_access(self, appointment) -> None:
        assert can_access(appointment, Actor(OTHER_ID, UserRole.CUSTOMER)) is False

    def test_admin_can_access_any(self, appointment) -> None:
        assert can_access(appointment, Actor(ADMIN_ID, UserRole.ADMIN)) is True


class TestAllowedUpdateFields:
    """Tests for the per-role field table."""

    def test_admin_fields(self) -> None:
        assert allowed_update_fields(UserRole.ADMIN) == {
            "customer",
            "service",
            "appointment_date",
            "start_time",
            "end_time",
            "status",
            "notes",
        }

    def test_customer_fields_exclude_customer_and_service(self) -> None:
        fields = allowed_update_fields("customer")

        assert fields == {
            "appointment_date",
            "start_time",
            "end_time",
            "status",
            "notes",
        }

    def test_unknown_role_gets_nothing(self) -> None:
        assert allowed_update_fields("receptionist") == frozenset()

    def test_filter_drops_disallowed_and_unknown_keys(self) -> None:
        """Test customer updates lose service, customer and unknown keys."""
        requested = {
            "service": "x",
            "customer": "y",
            "notes": "Running late",
            "price": 0,
        }

        assert filter_update_fields(requested, UserRole.CUSTOMER) == {
            "notes": "Running late"
        }


class TestStatusTransitions:
    """Tests for the role-keyed status table."""

    @pytest.mark.parametrize("status", list(AppointmentStatus))
    def test_admin_may_set_every_status(self, status: AppointmentStatus) -> None:
        assert can_set_status(UserRole.ADMIN, status) is True

    def test_customer_may_only_cancel(self) -> None:
        assert can_set_status(UserRole.CUSTOMER, AppointmentStatus.CANCELLED) is True
        assert can_set_status(UserRole.CUSTOMER, AppointmentStatus.CONFIRMED) is False
        assert can_set_status(UserRole.CUSTOMER, AppointmentStatus.COMPLETED) is False

    def test_customer_confirming_is_forbidden(self) -> None:
        with pytest.raises(BookingForbiddenError) as exc_info:
            check_status_change("confirmed", UserRole.CUSTOMER)

        assert exc_info.value.message == (
            "Customers can only change status to cancelled."
        )

    def test_customer_cancelling_is_accepted(self) -> None:
        assert (
            check_status_change("cancelled", UserRole.CUSTOMER)
            == AppointmentStatus.CANCELLED
        )

    def test_unknown_status_is_invalid_for_any_role(self) -> None:
        """Test an unknown value is a validation error, not a permission one."""
        for role in (UserRole.ADMIN, UserRole.CUSTOMER):
            with pytest.raises(BookingValidationError):
                check_status_change("rescheduled", role)


class TestActor:
    """Tests for building an actor from a user record."""

    def test_from_user_with_string_role(self) -> None:
        user = SimpleNamespace(id=OWNER_ID, role="customer")

        actor = Actor.from_user(user)

        assert actor == Actor(OWNER_ID, UserRole.CUSTOMER)
        assert actor.is_admin is False

    def test_from_user_with_enum_role(self) -> None:
        user = SimpleNamespace(id=ADMIN_ID, role=UserRole.ADMIN)

        assert Actor.from_user(user).is_admin is True
