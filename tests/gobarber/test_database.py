import logging

import pytest
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.pool import StaticPool

from gobarber import database


@pytest.fixture
def legacy_engine(monkeypatch: pytest.MonkeyPatch):
    engine = create_engine('sqlite://', poolclass=StaticPool)
    with engine.begin() as connection:
        connection.execute(text(
            'CREATE TABLE appointments ('
            'id INTEGER PRIMARY KEY, date DATETIME NOT NULL, user_id INTEGER NOT NULL, '
            'provider_id INTEGER NOT NULL, canceled_at DATETIME, created_at DATETIME)'
        ))
    monkeypatch.setattr(database, 'engine', engine)
    monkeypatch.setattr(database, '_appointment_schema_checked', False)
    yield engine
    engine.dispose()


def test_ensure_appointment_schema_renames_legacy_cancel_column(legacy_engine) -> None:
    database.ensure_appointment_schema()

    inspector = inspect(legacy_engine)
    columns = {column['name'] for column in inspector.get_columns('appointments')}
    indexes = {index['name'] for index in inspector.get_indexes('appointments')}
    assert 'cancelled_at' in columns
    assert 'canceled_at' not in columns
    assert 'uq_appointments_provider_date_active' in indexes
    assert database._appointment_schema_checked is True


def test_active_slot_index_rejects_second_booking(legacy_engine) -> None:
    database.ensure_appointment_schema()
    insert = text(
        'INSERT INTO appointments (date, user_id, provider_id, cancelled_at) '
        "VALUES ('2025-06-01 14:00:00.000000', :user_id, 2, :cancelled_at)"
    )

    with legacy_engine.begin() as connection:
        connection.execute(insert, {'user_id': 1, 'cancelled_at': '2025-05-30 10:00:00.000000'})
        connection.execute(insert, {'user_id': 1, 'cancelled_at': None})

    with pytest.raises(IntegrityError):
        with legacy_engine.begin() as connection:
            connection.execute(insert, {'user_id': 3, 'cancelled_at': None})



def test_ensure_appointment_schema_skips_slot_index_when_legacy_rows_collide(
    legacy_engine, caplog: pytest.LogCaptureFixture
) -> None:
    with legacy_engine.begin() as connection:
        connection.execute(text(
            'INSERT INTO appointments (date, user_id, provider_id, canceled_at) VALUES '
            "('2025-06-01 14:00:00.000000', 1, 2, NULL), "
            "('2025-06-01 14:00:00.000000', 3, 2, NULL)"
        ))

    with caplog.at_level(logging.ERROR, logger='gobarber.database'):
        database.ensure_appointment_schema()
        database.ensure_appointment_schema()

    indexes = {index['name'] for index in inspect(legacy_engine).get_indexes('appointments')}
    assert 'uq_appointments_provider_date_active' not in indexes
    assert 'idx_appointments_user_date' in indexes
    assert database._appointment_schema_checked is True
    assert caplog.text.count('Skipping uq_appointments_provider_date_active') == 1


def test_ensure_database_ready_survives_colliding_legacy_rows(legacy_engine, monkeypatch: pytest.MonkeyPatch) -> None:
    from gobarber.routes.dependencies import ensure_database_ready

    monkeypatch.setattr(database, '_notification_schema_checked', True)

    with legacy_engine.begin() as connection:
        connection.execute(text(
            'INSERT INTO appointments (date, user_id, provider_id, canceled_at) VALUES '
            "('2025-06-01 14:00:00.000000', 1, 2, NULL), "
            "('2025-06-01 14:00:00.000000', 3, 2, NULL)"
        ))

    ensure_database_ready()
    ensure_database_ready()
