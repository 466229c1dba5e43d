"""File model definitions."""

from sqlalchemy import Column, Integer, String

from gobarber.core import config
from gobarber.database import Base


class File(Base):
    """Uploaded file, used as a user avatar."""
    __tablename__ = "files"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    path = Column(String, unique=True, nullable=False)

    @property
    def url(self) -> str:
        return f"{config.APP_URL}/files/{self.path}"
