"""
notifier: send the "integration complete" email via SMTP.
"""

import smtplib
from email.message import EmailMessage

from errors import NotificationError
from models import EmailNotification
from run_log import log


def _build_completion_message(settings: EmailNotification) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = settings.sender
    msg["To"] = settings.recipient
    msg["Subject"] = settings.subject
    msg.set_content(settings.body)
    return msg


def _open_smtp(settings: EmailNotification) -> smtplib.SMTP:
    smtp = settings.smtp
    if smtp.timeout is None:
        return smtplib.SMTP(smtp.server, smtp.port)
    return smtplib.SMTP(smtp.server, smtp.port, timeout=smtp.timeout)


def send_completion_email(settings: EmailNotification) -> None:
    """
    Send one plaintext completion notice to settings.recipient.

    STARTTLS is used when the server offers it, and we log in when a
    username is configured. A missing port, or any SMTP or socket failure,
    becomes a NotificationError; whatever the earlier phases did stays done.
    """
    msg = _build_completion_message(settings)
    smtp = settings.smtp
    # smtplib would quietly swap port 0 for 25.
    if smtp.port <= 0:
        raise NotificationError(
            f"cannot send completion email: invalid SMTP port {smtp.port} for {smtp.server!r}"
        )
    try:
        with _open_smtp(settings) as s:
            s.ehlo()
            if s.has_extn("starttls"):
                s.starttls()
                s.ehlo()
            if smtp.username:
                s.login(smtp.username, smtp.password)
            s.send_message(msg)
    except (smtplib.SMTPException, OSError) as e:
        raise NotificationError(
            f"SMTP error sending completion email to {settings.recipient!r} "
            f"via {smtp.server}:{smtp.port}: {e}"
        ) from e

    log(f"Sent completion email to {settings.recipient}")
