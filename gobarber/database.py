import logging
from threading import Lock

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import declarative_base, sessionmaker

from gobarber.core import config


engine = create_engine(config.DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

logger = logging.getLogger(__name__)

_schema_lock = Lock()
_appointment_schema_checked = False
_notification_schema_checked = False


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ensure_appointment_schema() -> None:
    global _appointment_schema_checked

    if _appointment_schema_checked:
        return

    with _schema_lock:
        if _appointment_schema_checked:
            return

        inspector = inspect(engine)

        if 'appointments' not in inspector.get_table_names():
            _appointment_schema_checked = True
            return

        existing_columns = {column['name'] for column in inspector.get_columns('appointments')}

        with engine.begin() as connection:
            if 'canceled_at' in existing_columns and 'cancelled_at' not in existing_columns:
                connection.execute(
                    text('ALTER TABLE appointments RENAME COLUMN canceled_at TO cancelled_at')
                )
            connection.execute(
                text('CREATE INDEX IF NOT EXISTS idx_appointments_user_date ON appointments(user_id, date)')
            )
            duplicate_slots = connection.execute(
                text(
                    'SELECT provider_id, date, COUNT(*) FROM appointments '
                    'WHERE cancelled_at IS NULL '
                    'GROUP BY provider_id, date HAVING COUNT(*) > 1'
                )
            ).all()
            if duplicate_slots:
                # Index creation would fail; leave it out until the rows are cleaned up.
                logger.error(
                    'Skipping uq_appointments_provider_date_active: %d slots hold more than one active '
                    'appointment (provider_id, date, count): %s',
                    len(duplicate_slots),
                    [tuple(row) for row in duplicate_slots],
                )
            else:
                connection.execute(
                    text(
                        'CREATE UNIQUE INDEX IF NOT EXISTS uq_appointments_provider_date_active '
                        'ON appointments(provider_id, date) WHERE cancelled_at IS NULL'
                    )
                )

        _appointment_schema_checked = True


def ensure_notification_schema() -> None:
    global _notification_schema_checked

    if _notification_schema_checked:
        return

    with _schema_lock:
        if _notification_schema_checked:
            return

        inspector = inspect(engine)

        if 'notifications' not in inspector.get_table_names():
            _notification_schema_checked = True
            return

        existing_columns = {column['name'] for column in inspector.get_columns('notifications')}
        migration_steps = [
            ('read', 'ALTER TABLE notifications ADD COLUMN read BOOLEAN DEFAULT FALSE NOT NULL'),
            ('updated_at', 'ALTER TABLE notifications ADD COLUMN updated_at TIMESTAMP'),
        ]

        with engine.begin() as connection:
            for column_name, statement in migration_steps:
                if column_name not in existing_columns:
                    connection.execute(text(statement))
            connection.execute(
                text('CREATE INDEX IF NOT EXISTS idx_notifications_user_created ON notifications(user_id, created_at)')
            )

        _notification_schema_checked = True
