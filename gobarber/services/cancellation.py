import logging
from datetime import datetime, timedelta
from typing import Callable

from fastapi.concurrency import run_in_threadpool

from gobarber.core import config
from gobarber.jobs.cancellation_mail import CANCELLATION_MAIL_JOB, build_cancellation_payload
from gobarber.lib.queue import MailQueue
from gobarber.models.appointment import Appointment
from gobarber.repositories import AppointmentStore
from gobarber.services.errors import (
    AlreadyCancelledError,
    CancellationWindowExpiredError,
    ForbiddenError,
    NotFoundError,
)
from gobarber.utils.dates import utcnow

logger = logging.getLogger(__name__)


class CancellationService:
    """Cancels a caller's own appointment and queues the provider email."""

    def __init__(
        self,
        appointments: AppointmentStore,
        mail_queue: MailQueue,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.appointments = appointments
        self.mail_queue = mail_queue
        self.clock = clock

    async def cancel_appointment(self, caller_id: int, appointment_id: int) -> Appointment:
        # Session work is blocking; only the enqueue runs on the event loop.
        appointment, payload = await run_in_threadpool(self.cancel_in_store, caller_id, appointment_id)

        try:
            await self.mail_queue.enqueue(CANCELLATION_MAIL_JOB, payload)
        except Exception:
            # The cancellation is committed; a lost email must not fail the request.
            logger.exception('Failed to queue cancellation mail for appointment %s', appointment.id)

        return appointment

    def cancel_in_store(self, caller_id: int, appointment_id: int) -> tuple[Appointment, dict]:
        appointment = self.appointments.find_by_id(appointment_id)
        if appointment is None:
            raise NotFoundError()

        if appointment.user_id != caller_id:
            raise ForbiddenError()

        if appointment.cancelled_at is not None:
            raise AlreadyCancelledError()

        now = self.clock()
        if not now < appointment.date - timedelta(hours=config.CANCELLATION_WINDOW_HOURS):
            raise CancellationWindowExpiredError()

        if not self.appointments.mark_cancelled(appointment, now):
            raise AlreadyCancelledError()

        return appointment, build_cancellation_payload(appointment)
