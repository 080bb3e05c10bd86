# =============================================================================
# lib/mailer.py - Transactional Email Client
# =============================================================================
# Thin async wrapper around aiosmtplib for sending one HTML email to a list
# of recipients. Used by the order workflow for confirmations.
#
# Usage:
#   from lib.mailer import Mailer
#   mailer = Mailer.from_settings(settings)
#   await mailer.send(["a@b.com"], "Subject", "<p>Hello</p>")
# =============================================================================

from __future__ import annotations

import logging
from email.message import EmailMessage
from typing import TYPE_CHECKING

import aiosmtplib

if TYPE_CHECKING:
    from app.config import Settings

logger = logging.getLogger(__name__)


class MailerError(Exception):
    """Error while handing a message to the SMTP server."""

    def __init__(self, message: str, recipients: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.recipients = recipients or []


class Mailer:
    """
    Sends HTML email through a single SMTP account.

    One connection is opened per message; nothing is pooled.
    """

    def __init__(
        self,
        hostname: str,
        port: int,
        sender: str,
        username: str | None = None,
        password: str | None = None,
        start_tls: bool = True,
        timeout: float = 30.0,
    ):
        self.hostname = hostname
        self.port = port
        self.sender = sender
        self.username = username or None
        self.password = password or None
        self.start_tls = start_tls
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> Mailer:
        """Build a mailer from application settings."""
        return cls(
            hostname=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            sender=settings.mail_sender,
            username=settings.SMTP_USERNAME,
            password=settings.SMTP_PASSWORD,
            start_tls=settings.SMTP_START_TLS,
            timeout=settings.SMTP_TIMEOUT,
        )

    def build_message(self, recipients: list[str], subject: str, html: str) -> EmailMessage:
        """Build a multipart message with a plain-text fallback."""
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = ", ".join(recipients)
        message["Subject"] = subject
        message.set_content("This message requires an HTML-capable mail client.")
        message.add_alternative(html, subtype="html")
        return message

    async def send(self, recipients: list[str], subject: str, html: str) -> None:
        """
        Send one HTML email.

        Args:
            recipients: Addresses placed in the To header
            subject: Subject line
            html: HTML body

        Raises:
            MailerError: If there are no recipients or the SMTP exchange fails
        """
        recipients = [r for r in recipients if r]
        if not recipients:
            raise MailerError("No recipients given")

        try:
            message = self.build_message(recipients, subject, html)
        except ValueError as e:
            # Header values with CR/LF or malformed addresses
            raise MailerError(f"Invalid email headers: {e}", recipients=recipients) from e

        try:
            await aiosmtplib.send(
                message,
                hostname=self.hostname,
                port=self.port,
                username=self.username,
                password=self.password,
                start_tls=self.start_tls,
                timeout=self.timeout,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            raise MailerError(f"Failed to send email: {e}", recipients=recipients) from e

        logger.info(f"Sent '{subject}' to {len(recipients)} recipient(s)")
