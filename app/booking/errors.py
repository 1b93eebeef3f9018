"""Errors raised by the booking core.

The HTTP layer maps each kind onto a status code; the core itself never
deals with responses.
"""


class BookingError(Exception):
    """Base class for recoverable booking errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BookingValidationError(BookingError):
    """Malformed id, time, duration, working day, date or missing field."""

    pass


class BookingNotFoundError(BookingError):
    """Referenced service, customer or appointment does not exist."""

    pass


class BookingForbiddenError(BookingError):
    """Actor lacks permission for the requested access or mutation."""

    pass
