"""Fire-and-forget delivery of outgoing mail.

Messages are handed to a small thread pool so request handlers never wait
on SMTP. Outcomes are only logged; a failed delivery never reaches the
caller that queued it.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor

from .abstract_mailer import AbstractMailer, OutgoingMessage

logger = logging.getLogger(__name__)

APP_NAME = "Email List"


def verification_message(email: str, username: str, verify_url: str) -> OutgoingMessage:
    text_body = (
        f"Hi {username},\n\n"
        "Thanks for signing up! Please verify your email address by opening "
        "the link below:\n\n"
        f"{verify_url}\n\n"
        "If you didn't create an account, you can safely ignore this email.\n"
    )
    html_body = (
        f"<p>Hi {username},</p>"
        "<p>Thanks for signing up! Please verify your email address.</p>"
        f'<p><a href="{verify_url}">Verify Email Address</a></p>'
        f'<p style="word-break: break-all; color: #666;">{verify_url}</p>'
    )
    return OutgoingMessage(
        to=email,
        subject=f"Verify your {APP_NAME} account",
        text_body=text_body,
        html_body=html_body,
    )


class MailDispatcher:
    """Deliver messages on background threads through a mail transport."""

    def __init__(self, mailer: AbstractMailer, max_workers: int = 2):
        self.mailer = mailer
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="mail"
        )
        self._pending = 0
        self._idle = threading.Condition()

    def submit(self, message: OutgoingMessage) -> Future:
        """Queue ``message`` for delivery and return immediately."""

        with self._idle:
            self._pending += 1
        future = self._executor.submit(self.mailer.send, message)
        future.add_done_callback(lambda done: self._finished(done, message))
        return future

    def send_verification(self, email: str, username: str, verify_url: str) -> Future:
        return self.submit(verification_message(email, username, verify_url))

    def _finished(self, future: Future, message: OutgoingMessage) -> None:
        try:
            error = future.exception()
            if error is not None:
                logger.error(
                    "Failed to send email to %s: %s",
                    message.to,
                    error,
                    exc_info=error,
                )
            elif future.result():
                logger.info("Email sent to %s: %s", message.to, message.subject)
        finally:
            with self._idle:
                self._pending -= 1
                self._idle.notify_all()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until queued deliveries finish; return False on timeout."""

        with self._idle:
            return self._idle.wait_for(lambda: self._pending == 0, timeout=timeout)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)
