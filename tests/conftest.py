import os
from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite:///./test.db')

from gobarber.database import Base  # noqa: E402
from gobarber.models.appointment import Appointment  # noqa: E402
from gobarber.models.file import File  # noqa: E402
from gobarber.models.notification import Notification  # noqa: E402
from gobarber.models.user import User  # noqa: E402

TABLES = [File.__table__, User.__table__, Appointment.__table__, Notification.__table__]


class FakeMailQueue:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.jobs: list[tuple[str, dict]] = []

    async def enqueue(self, job_kind: str, payload: dict) -> str | None:
        if self.error is not None:
            raise self.error
        self.jobs.append((job_kind, payload))
        return f'job-{len(self.jobs)}'


@pytest.fixture
def appointment_db():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine, tables=TABLES)

    db = testing_session_local()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine, tables=list(reversed(TABLES)))


@pytest.fixture
def make_user(appointment_db):
    def _make_user(name: str, provider: bool = False, avatar: File | None = None) -> User:
        user = User(
            name=name,
            email=f'{name.lower()}@example.com',
            password_hash='x',
            provider=provider,
            avatar=avatar,
        )
        appointment_db.add(user)
        appointment_db.commit()
        appointment_db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_appointment(appointment_db):
    def _make_appointment(
        user: User,
        provider: User,
        date: datetime,
        cancelled_at: datetime | None = None,
    ) -> Appointment:
        appointment = Appointment(
            user_id=user.id,
            provider_id=provider.id,
            date=date,
            cancelled_at=cancelled_at,
        )
        appointment_db.add(appointment)
        appointment_db.commit()
        appointment_db.refresh(appointment)
        return appointment

    return _make_appointment


@pytest.fixture
def mail_queue() -> FakeMailQueue:
    return FakeMailQueue()


@pytest.fixture
def failing_mail_queue() -> FakeMailQueue:
    return FakeMailQueue(error=ConnectionError('redis is down'))


@pytest.fixture
def no_schema_checks(monkeypatch: pytest.MonkeyPatch) -> None:
    for module in ('appointment_routes', 'schedule_routes', 'notification_routes'):
        monkeypatch.setattr(f'gobarber.routes.{module}.ensure_database_ready', lambda: None)
