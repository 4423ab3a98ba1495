"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from mail import AbstractMailer, OutgoingMessage  # noqa: E402
from models import db  # noqa: E402


class RecordingMailer(AbstractMailer):
    """Mail transport that keeps messages in memory, or fails on demand."""

    def __init__(self):
        self.sent: list[OutgoingMessage] = []
        self.fail = False

    def send(self, message: OutgoingMessage) -> bool:
        if self.fail:
            raise ConnectionRefusedError("SMTP relay unavailable")
        self.sent.append(message)
        return True


class TestConfig(Config):
    __test__ = False

    TESTING = True
    SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    JWT_SECRET_KEY = "test-jwt-secret-key-with-enough-length-for-hs256"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    BCRYPT_ROUNDS = 4
    RATE_LIMIT = "1000 per minute"
    APP_URL = "http://testserver"
    SMTP_USER = ""
    SMTP_PASSWORD = ""


@pytest.fixture()
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture()
def app(mailer: RecordingMailer) -> Flask:
    """Create a Flask application instance for tests."""

    application = create_app(TestConfig, mailer=mailer)

    with application.app_context():
        db.create_all()

    yield application

    application.extensions["mail_dispatcher"].shutdown()
    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()
