"""SMTP mail transport."""

import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from gobarber.core import config

logger = logging.getLogger(__name__)


def build_message(to: str, subject: str, text: str, html: str | None = None) -> MIMEMultipart:
    message = MIMEMultipart('alternative')
    message['From'] = config.MAIL_FROM
    message['To'] = to
    message['Subject'] = subject
    message.attach(MIMEText(text, 'plain', 'utf-8'))
    if html:
        message.attach(MIMEText(html, 'html', 'utf-8'))
    return message


def send_mail(to: str, subject: str, text: str, html: str | None = None) -> None:
    message = build_message(to, subject, text, html)
    context = ssl.create_default_context()

    if config.MAIL_SECURE:
        server = smtplib.SMTP_SSL(config.MAIL_HOST, config.MAIL_PORT, context=context, timeout=30)
    else:
        server = smtplib.SMTP(config.MAIL_HOST, config.MAIL_PORT, timeout=30)

    try:
        if not config.MAIL_SECURE and server.has_extn('starttls'):
            server.starttls(context=context)
        if config.MAIL_USER:
            server.login(config.MAIL_USER, config.MAIL_PASS)
        server.send_message(message)
    finally:
        server.quit()

    logger.info('Sent "%s" to %s', subject, to)
