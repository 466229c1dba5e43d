import logging
from datetime import datetime
from typing import Callable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from gobarber.models.appointment import Appointment
from gobarber.repositories import AppointmentStore, NotificationStore, UserDirectory
from gobarber.services.errors import (
    InvalidSlotGranularityError,
    NotAProviderError,
    PastDateError,
    SelfBookingError,
    SlotConflictError,
)
from gobarber.utils.dates import format_pt_datetime, start_of_hour, to_naive_utc, utcnow

logger = logging.getLogger(__name__)


class BookingService:
    """Validates and books an hour slot with a provider."""

    def __init__(
        self,
        users: UserDirectory,
        appointments: AppointmentStore,
        notifications: NotificationStore,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.users = users
        self.appointments = appointments
        self.notifications = notifications
        self.clock = clock

    def create_appointment(self, caller_id: int, provider_id: int, date: datetime) -> Appointment:
        provider = self.users.find_provider_by_id(provider_id)
        if provider is None:
            raise NotAProviderError()

        if provider_id == caller_id:
            raise SelfBookingError()

        date = to_naive_utc(date)
        hour_start = start_of_hour(date)
        if hour_start != date:
            raise InvalidSlotGranularityError()

        if hour_start < self.clock():
            raise PastDateError()

        if self.appointments.find_conflicting(provider_id, hour_start) is not None:
            raise SlotConflictError()

        try:
            appointment = self.appointments.create(
                user_id=caller_id,
                provider_id=provider_id,
                date=hour_start,
            )
        except IntegrityError as exc:
            # Lost the race for the slot to a concurrent booking.
            raise SlotConflictError() from exc

        requester = self.users.find_by_id(caller_id)
        requester_name = requester.name if requester else f'#{caller_id}'
        try:
            self.notifications.create(
                user_id=provider_id,
                content=f'Novo agendamento de {requester_name} para {format_pt_datetime(hour_start)}',
            )
        except SQLAlchemyError:
            # The booking is committed; a missing notification must not fail it.
            logger.exception('Failed to notify provider %s about appointment %s', provider_id, appointment.id)

        logger.info('Appointment %s booked with provider %s', appointment.id, provider_id)
        return appointment
