from datetime import date, datetime

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gobarber.auth.dependencies import get_current_user_id
from gobarber.database import get_db
from gobarber.repositories import AppointmentStore, UserDirectory
from gobarber.routes.appointment_routes import AppointmentResponse
from gobarber.routes.dependencies import database_unavailable, ensure_database_ready
from gobarber.services.schedule import ScheduleService
from gobarber.utils.dates import to_naive_utc

router = APIRouter(tags=['schedule'])


class ClientResponse(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class ScheduleAppointmentResponse(AppointmentResponse):
    user: ClientResponse


def resolve_day(value: date | datetime) -> date:
    # Timestamps select the UTC day they fall on.
    if isinstance(value, datetime):
        return to_naive_utc(value).date()
    return value


@router.get('', response_model=list[ScheduleAppointmentResponse])
def list_schedule(
    day: date | datetime = Query(..., alias='date'),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        service = ScheduleService(users=UserDirectory(db), appointments=AppointmentStore(db))
        return service.list_provider_schedule(user_id, resolve_day(day))
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc
