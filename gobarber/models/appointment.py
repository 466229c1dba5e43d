"""Appointment model definitions."""

from datetime import timedelta

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, text
from sqlalchemy.orm import relationship

from gobarber.core import config
from gobarber.database import Base
from gobarber.models.user import User
from gobarber.utils.dates import utcnow


class Appointment(Base):
    """Represents an hour slot booked by a user with a provider."""
    __tablename__ = "appointments"
    __table_args__ = (
        # One active booking per provider slot; cancelled rows free the slot.
        Index(
            "uq_appointments_provider_date_active",
            "provider_id",
            "date",
            unique=True,
            sqlite_where=text("cancelled_at IS NULL"),
            postgresql_where=text("cancelled_at IS NULL"),
        ),
        Index("idx_appointments_user_date", "user_id", "date"),
    )

    id = Column(Integer, primary_key=True)
    date = Column(DateTime, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    provider_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    cancelled_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow)

    user = relationship(User, foreign_keys=[user_id])
    provider = relationship(User, foreign_keys=[provider_id])

    @property
    def past(self) -> bool:
        return self.date < utcnow()

    @property
    def cancelable(self) -> bool:
        return utcnow() < self.date - timedelta(hours=config.CANCELLATION_WINDOW_HOURS)
