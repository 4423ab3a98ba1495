"""Outgoing mail transports and background dispatch."""

from .abstract_mailer import AbstractMailer, OutgoingMessage
from .dispatch import MailDispatcher
from .smtp_mailer import SMTPMailer

__all__ = ["AbstractMailer", "MailDispatcher", "OutgoingMessage", "SMTPMailer"]
