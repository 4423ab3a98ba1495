"""Mail transport abstraction layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class OutgoingMessage:
    to: str
    subject: str
    text_body: str
    html_body: str | None = None


class AbstractMailer(ABC):
    """Interface for mail transports."""

    @abstractmethod
    def send(self, message: OutgoingMessage) -> bool:
        """Deliver a message; return False when delivery was skipped.

        Transport failures are raised, not swallowed.
        """
