"""Query helpers over the SQLAlchemy session.

The services only talk to these stores, so swapping the session for a fake in
tests or moving notifications to another backend does not touch business code.
"""

from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from gobarber.models.appointment import Appointment
from gobarber.models.notification import Notification
from gobarber.models.user import User


class UserDirectory:
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, user_id: int) -> User | None:
        return self.db.query(User).filter(User.id == user_id).first()

    def find_provider_by_id(self, user_id: int) -> User | None:
        return self.db.query(User).filter(
            User.id == user_id,
            User.provider.is_(True),
        ).first()


class AppointmentStore:
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, appointment_id: int) -> Appointment | None:
        return self.db.query(Appointment).options(
            joinedload(Appointment.user),
            joinedload(Appointment.provider),
        ).filter(Appointment.id == appointment_id).first()

    def find_conflicting(self, provider_id: int, date: datetime) -> Appointment | None:
        return self.db.query(Appointment).filter(
            Appointment.provider_id == provider_id,
            Appointment.cancelled_at.is_(None),
            Appointment.date == date,
        ).first()

    def create(self, user_id: int, provider_id: int, date: datetime) -> Appointment:
        appointment = Appointment(user_id=user_id, provider_id=provider_id, date=date)
        self.db.add(appointment)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(appointment)
        return appointment

    def mark_cancelled(self, appointment: Appointment, cancelled_at: datetime) -> bool:
        """Set ``cancelled_at`` only if the row is still active.

        Returns False when another request cancelled the appointment first.
        """
        updated = self.db.query(Appointment).filter(
            Appointment.id == appointment.id,
            Appointment.cancelled_at.is_(None),
        ).update({Appointment.cancelled_at: cancelled_at}, synchronize_session=False)
        self.db.commit()
        self.db.refresh(appointment)
        return updated == 1

    def list_for_user(self, user_id: int, limit: int, offset: int) -> list[Appointment]:
        return self.db.query(Appointment).options(
            joinedload(Appointment.provider),
        ).filter(
            Appointment.user_id == user_id,
            Appointment.cancelled_at.is_(None),
        ).order_by(Appointment.date.asc()).limit(limit).offset(offset).all()

    def list_for_provider_between(self, provider_id: int, start: datetime, end: datetime) -> list[Appointment]:
        return self.db.query(Appointment).options(
            joinedload(Appointment.user),
        ).filter(
            Appointment.provider_id == provider_id,
            Appointment.cancelled_at.is_(None),
            Appointment.date.between(start, end),
        ).order_by(Appointment.date.asc()).all()


class NotificationStore:
    def __init__(self, db: Session):
        self.db = db

    def create(self, user_id: int, content: str) -> Notification:
        notification = Notification(user_id=user_id, content=content)
        self.db.add(notification)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(notification)
        return notification

    def list_for_user(self, user_id: int, limit: int, offset: int) -> list[Notification]:
        return self.db.query(Notification).filter(
            Notification.user_id == user_id,
        ).order_by(Notification.created_at.desc(), Notification.id.desc()).limit(limit).offset(offset).all()

    def mark_read(self, user_id: int, notification_id: int) -> Notification | None:
        notification = self.db.query(Notification).filter(
            Notification.id == notification_id,
            Notification.user_id == user_id,
        ).first()
        if notification is None:
            return None

        notification.read = True
        self.db.commit()
        self.db.refresh(notification)
        return notification
