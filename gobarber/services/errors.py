"""Client-facing errors raised by the booking core.

Each error is an ``HTTPException`` so routes can let it propagate and FastAPI
renders it as ``{"detail": ...}`` with the status code set here.
"""

from fastapi import HTTPException, status


class BookingError(HTTPException):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = 'Request could not be processed.'

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(status_code=self.status_code, detail=detail or self.detail)


class ValidationError(BookingError):
    detail = 'Validation fails.'


class NotAProviderError(BookingError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = 'You can only create appointments with providers.'


class SelfBookingError(BookingError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Providers can't book appointments with themselves."


class InvalidSlotGranularityError(BookingError):
    detail = 'Date must be without minutes and seconds.'


class PastDateError(BookingError):
    detail = 'Past dates are not permitted.'


class SlotConflictError(BookingError):
    detail = 'Appointment date is not available.'


class ForbiddenError(BookingError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "You don't have permission to cancel this appointment."


class AlreadyCancelledError(BookingError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = 'This appointment was already cancelled.'


class CancellationWindowExpiredError(BookingError):
    detail = 'You can only cancel appointments 2 hours in advance.'


class NotFoundError(BookingError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = 'Appointment not found.'
