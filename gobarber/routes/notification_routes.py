from datetime import datetime

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gobarber.auth.dependencies import get_current_user_id
from gobarber.database import get_db
from gobarber.repositories import NotificationStore, UserDirectory
from gobarber.routes.dependencies import database_unavailable, ensure_database_ready
from gobarber.services.notifications import NotificationService

router = APIRouter(tags=['notifications'])


class NotificationResponse(BaseModel):
    id: int
    content: str
    user_id: int
    read: bool
    created_at: datetime

    class Config:
        from_attributes = True


def _build_service(db: Session) -> NotificationService:
    return NotificationService(users=UserDirectory(db), notifications=NotificationStore(db))


@router.get('', response_model=list[NotificationResponse])
def list_notifications(
    page: int = Query(default=1, ge=1),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        return _build_service(db).list_notifications(user_id, page)
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc


@router.put('/{notification_id}', response_model=NotificationResponse)
def mark_notification_as_read(
    notification_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        return _build_service(db).mark_as_read(user_id, notification_id)
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable() from exc
