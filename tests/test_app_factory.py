"""Tests for the Flask application factory."""
from __future__ import annotations

from mail import MailDispatcher, SMTPMailer


def test_health_endpoint_returns_ok(client):
    """The health endpoint should respond with an OK payload."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_blueprints_registered(app):
    """Application factory should register expected blueprints."""
    assert {"auth", "projects"}.issubset(set(app.blueprints.keys()))


def test_injected_mailer_is_used(app, mailer):
    dispatcher = app.extensions["mail_dispatcher"]
    assert isinstance(dispatcher, MailDispatcher)
    assert dispatcher.mailer is mailer


def test_smtp_mailer_built_from_config_when_none_injected():
    from app import create_app
    from tests.conftest import TestConfig

    application = create_app(TestConfig)
    dispatcher = application.extensions["mail_dispatcher"]
    try:
        assert isinstance(dispatcher.mailer, SMTPMailer)
        assert dispatcher.mailer.timeout == TestConfig.MAIL_TIMEOUT
    finally:
        dispatcher.shutdown()
