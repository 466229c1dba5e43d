from datetime import datetime

from fastapi import APIRouter, Depends, Query, status
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gobarber.auth.dependencies import get_current_user_id
from gobarber.core import config
from gobarber.database import get_db
from gobarber.lib.queue import MailQueue, get_mail_queue
from gobarber.repositories import AppointmentStore, NotificationStore, UserDirectory
from gobarber.routes.dependencies import database_unavailable, ensure_database_ready
from gobarber.services.booking import BookingService
from gobarber.services.cancellation import CancellationService
from gobarber.utils.dates import to_naive_utc

router = APIRouter(tags=['appointments'])


class CreateAppointmentRequest(BaseModel):
    provider_id: int = Field(alias='providerId', gt=0)
    date: datetime

    class Config:
        populate_by_name = True

    @field_validator('date')
    @classmethod
    def normalize_date(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class AvatarResponse(BaseModel):
    id: int
    path: str
    url: str

    class Config:
        from_attributes = True


class ProviderResponse(BaseModel):
    id: int
    name: str
    avatar: AvatarResponse | None = None

    class Config:
        from_attributes = True


class AppointmentSummaryResponse(BaseModel):
    id: int
    date: datetime
    past: bool
    cancelable: bool
    provider: ProviderResponse

    class Config:
        from_attributes = True


class AppointmentResponse(BaseModel):
    id: int
    date: datetime
    user_id: int
    provider_id: int
    cancelled_at: datetime | None = None
    past: bool
    cancelable: bool

    class Config:
        from_attributes = True


@router.get('', response_model=list[AppointmentSummaryResponse])
def list_appointments(
    page: int = Query(default=1, ge=1),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        page_size = config.APPOINTMENTS_PAGE_SIZE
        return AppointmentStore(db).list_for_user(
            user_id=user_id,
            limit=page_size,
            offset=(page - 1) * page_size,
        )
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc


@router.post('', response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
def create_appointment(
    data: CreateAppointmentRequest,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        service = BookingService(
            users=UserDirectory(db),
            appointments=AppointmentStore(db),
            notifications=NotificationStore(db),
        )
        return service.create_appointment(user_id, data.provider_id, data.date)
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable() from exc


@router.delete('/{appointment_id}', response_model=AppointmentResponse)
async def cancel_appointment(
    appointment_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    mail_queue: MailQueue = Depends(get_mail_queue),
):
    await run_in_threadpool(ensure_database_ready)

    try:
        service = CancellationService(appointments=AppointmentStore(db), mail_queue=mail_queue)
        return await service.cancel_appointment(user_id, appointment_id)
    except SQLAlchemyError as exc:
        await run_in_threadpool(db.rollback)
        raise database_unavailable() from exc
