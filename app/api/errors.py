"""Translation of booking errors to HTTP responses."""

from fastapi import HTTPException, status

from app.booking.errors import (
    BookingError,
    BookingForbiddenError,
    BookingNotFoundError,
    BookingValidationError,
)

BOOKING_ERROR_STATUS: dict[type[BookingError], int] = {
    BookingValidationError: status.HTTP_400_BAD_REQUEST,
    BookingNotFoundError: status.HTTP_404_NOT_FOUND,
    BookingForbiddenError: status.HTTP_403_FORBIDDEN,
}


def booking_http_error(exc: BookingError) -> HTTPException:
    """Build the HTTPException for a booking error (400 if unmapped)."""
    status_code = BOOKING_ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return HTTPException(status_code=status_code, detail=exc.message)
