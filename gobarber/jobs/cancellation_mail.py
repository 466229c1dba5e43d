"""Background job that tells a provider one of their appointments was cancelled."""

import asyncio
import logging
from datetime import datetime

from gobarber.lib.mail import send_mail
from gobarber.models.appointment import Appointment
from gobarber.utils.dates import format_pt_datetime

logger = logging.getLogger(__name__)

CANCELLATION_MAIL_JOB = 'cancellation_mail_task'
SUBJECT = 'Agendamento cancelado'


def build_cancellation_payload(appointment: Appointment) -> dict:
    return {
        'id': appointment.id,
        'date': appointment.date.isoformat(),
        'cancelled_at': appointment.cancelled_at.isoformat() if appointment.cancelled_at else None,
        'provider': {
            'name': appointment.provider.name,
            'email': appointment.provider.email,
        },
        'user': {
            'name': appointment.user.name,
        },
    }


def render_cancellation_text(payload: dict) -> str:
    formatted_date = format_pt_datetime(datetime.fromisoformat(payload['date']))
    return (
        f"Olá, {payload['provider']['name']}\n\n"
        'Houve um cancelamento de horário, confira os detalhes abaixo:\n\n'
        f"Cliente: {payload['user']['name']}\n"
        f'Data/hora: {formatted_date}\n\n'
        'O horário está novamente disponível para novos agendamentos.\n'
    )


async def cancellation_mail_task(_ctx, payload: dict) -> None:
    """
    Send the cancellation email for one appointment.

    Args:
        _ctx: arq context
        payload: output of ``build_cancellation_payload``
    """
    provider = payload['provider']
    recipient = f"{provider['name']} <{provider['email']}>"

    await asyncio.to_thread(
        send_mail,
        recipient,
        SUBJECT,
        render_cancellation_text(payload),
    )
    logger.info('Cancellation mail sent for appointment %s', payload['id'])
