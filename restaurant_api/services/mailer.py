"""SMTP delivery of report emails."""

from __future__ import annotations

import asyncio
import smtplib
from collections.abc import Sequence
from email.message import EmailMessage

from restaurant_api.config import settings
from restaurant_api.logger import get_logger, log_external_api
from restaurant_api.services.errors import DependencyFailure, InvalidRequest

logger = get_logger(__name__)


def build_message(
    recipients: Sequence[str],
    subject: str,
    body: str,
    attachment: bytes | None = None,
    filename: str = "report.pdf",
) -> EmailMessage:
    """One message addressed to every recipient, with an optional PDF attachment."""
    if not recipients:
        raise InvalidRequest("At least one recipient is required")

    message = EmailMessage()
    message["Subject"] = subject
    message["From"] = settings.mail_sender
    message["To"] = ", ".join(recipients)
    message.set_content(body)
    if attachment is not None:
        message.add_attachment(attachment, maintype="application", subtype="pdf", filename=filename)
    return message


@log_external_api("smtp")
def _deliver(message: EmailMessage) -> None:
    with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=settings.smtp_timeout_seconds) as server:
        server.ehlo()
        if settings.smtp_use_tls:
            server.starttls()
            server.ehlo()
        if settings.smtp_user and settings.smtp_password:
            server.login(settings.smtp_user, settings.smtp_password)
        server.send_message(message)


async def send_report_email(
    recipients: Sequence[str],
    subject: str,
    body: str,
    attachment: bytes | None = None,
    filename: str = "report.pdf",
) -> None:
    """Send a single email to all recipients.

    smtplib blocks, so delivery runs in a worker thread.

    Raises:
        DependencyFailure: SMTP connection, authentication or send failed.
    """
    message = build_message(recipients, subject, body, attachment, filename)
    try:
        await asyncio.to_thread(_deliver, message)
    except (smtplib.SMTPException, OSError) as exc:
        raise DependencyFailure("Email delivery failed") from exc
    logger.info("Report email sent", recipients=len(recipients), subject=subject)
