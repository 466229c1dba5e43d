"""User model definitions."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from gobarber.database import Base
from gobarber.models.file import File
from gobarber.utils.dates import utcnow


class User(Base):
    """Represents an application user; providers are the ones that can be booked."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String)
    provider = Column(Boolean, default=False, nullable=False)
    avatar_id = Column(Integer, ForeignKey("files.id"), nullable=True)
    created_at = Column(DateTime, default=utcnow)

    avatar = relationship(File, lazy="joined")
