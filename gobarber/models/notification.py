"""Notification model definitions."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from gobarber.database import Base
from gobarber.utils.dates import utcnow


class Notification(Base):
    """In-app message for a provider. Not linked to appointments."""
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True)
    content = Column(String, nullable=False)
    user_id = Column(Integer, nullable=False, index=True)
    read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
