"""Tests for the SMTP transport and background mail dispatch."""

from __future__ import annotations

import logging
import threading

from mail import MailDispatcher, OutgoingMessage, SMTPMailer
from mail.dispatch import verification_message
from tests.conftest import RecordingMailer


class _FakeSMTP:
    instances: list["_FakeSMTP"] = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.timeout = timeout
        self.tls = False
        self.credentials = None
        self.messages = []
        _FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def starttls(self):
        self.tls = True

    def login(self, username, password):
        self.credentials = (username, password)

    def send_message(self, message):
        self.messages.append(message)


def _message() -> OutgoingMessage:
    return verification_message("a@x.com", "alice", "http://testserver/auth/verify?token=abc")


def test_smtp_mailer_sends_with_timeout(monkeypatch):
    _FakeSMTP.instances = []
    monkeypatch.setattr("mail.smtp_mailer.smtplib.SMTP", _FakeSMTP)
    mailer = SMTPMailer(
        "smtp.test", 2525, username="user", password="pw", sender="noreply@test", timeout=3
    )

    assert mailer.send(_message()) is True

    (server,) = _FakeSMTP.instances
    assert (server.host, server.port, server.timeout) == ("smtp.test", 2525, 3)
    assert server.tls is True
    assert server.credentials == ("user", "pw")
    sent = server.messages[0]
    assert sent["To"] == "a@x.com"
    assert sent["From"] == "noreply@test"
    assert "token=abc" in sent.get_body(preferencelist=("plain",)).get_content()


def test_unconfigured_smtp_mailer_skips(monkeypatch):
    _FakeSMTP.instances = []
    monkeypatch.setattr("mail.smtp_mailer.smtplib.SMTP", _FakeSMTP)

    assert SMTPMailer("smtp.test").send(_message()) is False
    assert _FakeSMTP.instances == []


def test_dispatch_does_not_block_caller():
    release = threading.Event()

    class _SlowMailer(RecordingMailer):
        def send(self, message):
            release.wait(timeout=5)
            return super().send(message)

    mailer = _SlowMailer()
    dispatcher = MailDispatcher(mailer)
    try:
        dispatcher.submit(_message())
        assert mailer.sent == []
        assert dispatcher.wait(timeout=0.05) is False

        release.set()
        assert dispatcher.wait(timeout=5) is True
        assert len(mailer.sent) == 1
    finally:
        dispatcher.shutdown()


def test_dispatch_failure_is_logged_not_raised(caplog):
    mailer = RecordingMailer()
    mailer.fail = True
    dispatcher = MailDispatcher(mailer)
    try:
        with caplog.at_level(logging.ERROR, logger="mail.dispatch"):
            dispatcher.submit(_message())
            assert dispatcher.wait(timeout=5) is True
    finally:
        dispatcher.shutdown()

    assert any("Failed to send email to a@x.com" in r.getMessage() for r in caplog.records)
