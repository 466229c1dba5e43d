from datetime import date

from gobarber.models.appointment import Appointment
from gobarber.repositories import AppointmentStore, UserDirectory
from gobarber.services.errors import NotAProviderError
from gobarber.utils.dates import end_of_day, start_of_day


class ScheduleService:
    def __init__(self, users: UserDirectory, appointments: AppointmentStore):
        self.users = users
        self.appointments = appointments

    def list_provider_schedule(self, caller_id: int, day: date) -> list[Appointment]:
        if self.users.find_provider_by_id(caller_id) is None:
            raise NotAProviderError('User is not a provider.')

        return self.appointments.list_for_provider_between(
            provider_id=caller_id,
            start=start_of_day(day),
            end=end_of_day(day),
        )
