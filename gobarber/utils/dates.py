"""Date helpers shared by the booking core and the mail job."""

from datetime import date, datetime, time, timezone

PT_MONTHS = (
    'janeiro',
    'fevereiro',
    'março',
    'abril',
    'maio',
    'junho',
    'julho',
    'agosto',
    'setembro',
    'outubro',
    'novembro',
    'dezembro',
)


def utcnow() -> datetime:
    """Current time as a naive UTC datetime, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def start_of_hour(value: datetime) -> datetime:
    return value.replace(minute=0, second=0, microsecond=0)


def start_of_day(value: date) -> datetime:
    return datetime.combine(value, time.min)


def end_of_day(value: date) -> datetime:
    return datetime.combine(value, time.max)


def format_pt_datetime(value: datetime) -> str:
    """Render a slot the way notifications and emails show it.

    >>> format_pt_datetime(datetime(2025, 6, 1, 14, 0))
    'dia 01 de junho, às 14:00h'
    """
    month = PT_MONTHS[value.month - 1]
    return f'dia {value.day:02d} de {month}, às {value.hour}:{value.minute:02d}h'
