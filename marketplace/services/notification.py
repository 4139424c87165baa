"""Outbound email for confirmation links and reset codes."""

import logging
import smtplib
import ssl
from email.message import EmailMessage
from typing import Protocol

from marketplace.config import Settings, get_settings
from marketplace.exceptions import NotificationError

logger = logging.getLogger("marketplace")


class NotificationSender(Protocol):
    """Anything that can deliver a plain-text message to an address.

    Implementations raise NotificationError when delivery fails.
    """

    def send(self, to: str, subject: str, body: str) -> None: ...


class SmtpNotificationSender:
    """Sends email through an SMTP relay using STARTTLS."""

    def __init__(self, host: str, port: int, sender: str, user: str = "", password: str = "", timeout: int = 20) -> None:
        self.host = host
        self.port = port
        self.sender = sender
        self.user = user
        self.password = password
        self.timeout = timeout

    def send(self, to: str, subject: str, body: str) -> None:
        ctx = ssl.create_default_context()
        try:
            # header values reject CR/LF with ValueError
            msg = EmailMessage()
            msg["From"] = self.sender
            msg["To"] = to
            msg["Subject"] = subject
            msg.set_content(body)

            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as s:
                s.starttls(context=ctx)
                if self.user and self.password:
                    s.login(self.user, self.password)
                s.send_message(msg)
        except (smtplib.SMTPException, OSError, ValueError) as e:
            logger.error("Failed to send email via %s:%s: %r", self.host, self.port, e)
            raise NotificationError() from e

        logger.info("Email '%s' sent to %s", subject, to)


class ConsoleNotificationSender:
    """Writes messages to the log instead of sending them. For local development."""

    def send(self, to: str, subject: str, body: str) -> None:
        logger.info("EMAIL to=%s subject=%s\n%s", to, subject, body)


def build_notification_sender(settings: Settings) -> NotificationSender:
    """Pick the sender implementation named by EMAIL_BACKEND."""
    if settings.EMAIL_BACKEND == "smtp":
        return SmtpNotificationSender(
            host=settings.EMAIL_HOST,
            port=settings.EMAIL_PORT,
            sender=settings.EMAIL_FROM,
            user=settings.EMAIL_USER,
            password=settings.EMAIL_PASSWORD,
        )
    if settings.EMAIL_BACKEND == "console":
        return ConsoleNotificationSender()
    raise ValueError(f"Unknown EMAIL_BACKEND '{settings.EMAIL_BACKEND}'")


_notification_sender: NotificationSender | None = None


def get_notification_sender() -> NotificationSender:
    """Get singleton notification sender instance."""
    global _notification_sender
    if _notification_sender is None:
        _notification_sender = build_notification_sender(get_settings())
    return _notification_sender
