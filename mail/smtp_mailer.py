"""SMTP mail transport."""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage

from .abstract_mailer import AbstractMailer, OutgoingMessage

logger = logging.getLogger(__name__)


class SMTPMailer(AbstractMailer):
    """Send messages through an SMTP relay with a bounded connection timeout."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str = "",
        password: str = "",
        sender: str | None = None,
        use_tls: bool = True,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender or username
        self.use_tls = use_tls
        self.timeout = timeout

    @classmethod
    def from_config(cls, config) -> "SMTPMailer":
        return cls(
            host=config.get("SMTP_HOST", "localhost"),
            port=int(config.get("SMTP_PORT", 587)),
            username=config.get("SMTP_USER", ""),
            password=config.get("SMTP_PASSWORD", ""),
            sender=config.get("SMTP_FROM") or None,
            use_tls=bool(config.get("SMTP_USE_TLS", True)),
            timeout=float(config.get("MAIL_TIMEOUT", 10)),
        )

    def is_configured(self) -> bool:
        return bool(self.username and self.password)

    def build(self, message: OutgoingMessage) -> EmailMessage:
        email = EmailMessage()
        email["Subject"] = message.subject
        email["From"] = self.sender
        email["To"] = message.to
        email.set_content(message.text_body)
        if message.html_body:
            email.add_alternative(message.html_body, subtype="html")
        return email

    def send(self, message: OutgoingMessage) -> bool:
        if not self.is_configured():
            logger.warning("Email not configured - skipping send to %s", message.to)
            return False

        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            server.login(self.username, self.password)
            server.send_message(self.build(message))
        return True
