"""
Notification Module

Delivers change reports. Three channels share the same ``send(message)``
interface:
- LINE Notify push messages
- Email (one plain-text mail per message)
- Console output, for dry runs
"""

import logging
import smtplib
import sys
from email.mime.text import MIMEText

import requests

from monitoring.errors import NotifyError

logger = logging.getLogger(__name__)

LINE_NOTIFY_URL = "https://notify-api.line.me/api/notify"

# Timeout for the push API call
API_TIMEOUT = 10


class ConsoleNotifier:
    """Writes each message to a stream instead of sending it."""

    def __init__(self, stream=None):
        self.stream = stream if stream is not None else sys.stdout

    def send(self, message):
        print(message, file=self.stream)


class LineNotifier:
    """Posts each message to LINE Notify."""

    def __init__(self, token, url=LINE_NOTIFY_URL, timeout=API_TIMEOUT, session=None):
        self.token = token
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def send(self, message):
        try:
            resp = self.session.post(
                self.url,
                data={"message": message},
                headers={"Authorization": f"Bearer {self.token}"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            raise NotifyError(f"LINE notification failed: {e}") from e
        logger.debug(f"LINE notification sent: {message}")


class EmailNotifier:
    """Sends each message as a plain-text email over STARTTLS."""

    def __init__(self, smtp_server, smtp_port, sender_email, sender_password,
                 receiver_emails, subject="Driver Update Monitor"):
        self.smtp_server = smtp_server
        self.smtp_port = smtp_port
        self.sender_email = sender_email
        self.sender_password = sender_password
        self.receiver_emails = list(receiver_emails)
        self.subject = subject

    def send(self, message):
        mail = MIMEText(message, "plain", "utf-8")
        mail["From"] = self.sender_email
        mail["To"] = ", ".join(self.receiver_emails)
        mail["Subject"] = self.subject

        try:
            with smtplib.SMTP(self.smtp_server, self.smtp_port) as server:
                server.starttls()
                server.login(self.sender_email, self.sender_password)
                server.send_message(mail, to_addrs=self.receiver_emails)
        except (smtplib.SMTPException, OSError) as e:
            raise NotifyError(f"Email notification failed: {e}") from e
        logger.debug(f"Email notification sent to {len(self.receiver_emails)} recipients")


def build_notifier(settings, stream=None):
    """
    Create the notifier selected by ``settings.notifier``.

    Args:
        settings (Settings): Loaded configuration
        stream (file, optional): Output for the console notifier

    Returns:
        Notifier with a ``send(message)`` method
    """
    if settings.notifier == "console":
        return ConsoleNotifier(stream)
    if settings.notifier == "email":
        return EmailNotifier(
            smtp_server=settings.smtp_server,
            smtp_port=settings.smtp_port,
            sender_email=settings.sender_email,
            sender_password=settings.sender_password,
            receiver_emails=settings.receiver_emails,
        )
    return LineNotifier(settings.notify_token)
