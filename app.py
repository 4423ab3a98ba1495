"""Application factory."""

import json
import os
import uuid

from flask import Flask, jsonify, g, request
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from config import Config
from mail import AbstractMailer, MailDispatcher, SMTPMailer
from models import db
from routes.auth import auth_bp
from routes.projects import projects_bp
from utils.auth import load_user
from utils.errors import InvalidCredentials, MissingCredentials

migrate = Migrate()
jwt = JWTManager()
limiter = Limiter(key_func=get_remote_address)


def create_app(
    config_class: type[Config] = Config,
    mailer: AbstractMailer | None = None,
) -> Flask:
    """Create and configure the Flask application.

    ``mailer`` replaces the SMTP transport built from configuration.
    """
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Core subsystems
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    _register_jwt_callbacks(jwt)

    # CORS
    CORS(
        app,
        resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}},
        supports_credentials=True,
    )

    # Rate limiting
    storage_uri = app.config.get("RATELIMIT_STORAGE_URI", "memory://")
    headers_enabled = app.config.get("RATELIMIT_HEADERS_ENABLED", True)
    key_prefix = app.config.get("RATELIMIT_KEY_PREFIX") or str(uuid.uuid4())

    global limiter
    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[lambda: app.config.get("RATE_LIMIT", "60 per minute")],
        storage_uri=storage_uri,
        headers_enabled=headers_enabled,
        key_prefix=key_prefix,
    )
    limiter.init_app(app)
    app.config["RATELIMIT_KEY_PREFIX"] = key_prefix

    # Outgoing mail
    transport = mailer or SMTPMailer.from_config(app.config)
    app.extensions["mail_dispatcher"] = MailDispatcher(
        transport, max_workers=int(app.config.get("MAIL_WORKERS", 2))
    )

    # Blueprints
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(projects_bp, url_prefix="/projects")

    # Health
    @app.route("/health", methods=["GET"])
    def health_check():
        return jsonify({"status": "ok"})

    # Errors
    _register_error_handlers(app)

    return app


def _json_error(error: HTTPException):
    """Render an HTTP error in the JSON envelope used by every endpoint."""
    request_id = g.get("request_id") or str(uuid.uuid4())
    response = error.get_response()
    payload = {
        "error": getattr(error, "name", "Error"),
        "detail": error.description,
        "code": getattr(error, "code_name", None),
        "request_id": request_id,
    }
    response.data = json.dumps(payload)
    response.content_type = "application/json"
    response.headers.setdefault("X-Request-ID", request_id)
    return response


def _register_jwt_callbacks(manager: JWTManager) -> None:
    """Answer token problems with the same codes as other auth errors.

    Expired tokens and tokens whose account no longer exists are reported
    exactly like forged ones.
    """

    manager.user_lookup_loader(load_user)

    @manager.unauthorized_loader
    def _missing_token(reason: str):
        return _json_error(MissingCredentials())

    @manager.invalid_token_loader
    def _invalid_token(reason: str):
        return _json_error(InvalidCredentials())

    @manager.expired_token_loader
    def _expired_token(jwt_header: dict, jwt_payload: dict):
        return _json_error(InvalidCredentials())

    @manager.user_lookup_error_loader
    def _unknown_user(jwt_header: dict, jwt_payload: dict):
        return _json_error(InvalidCredentials())


def _register_error_handlers(app: Flask) -> None:
    """Register JSON error handlers with request IDs."""

    @app.before_request
    def _assign_request_id():  # pragma: no cover
        g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    @app.after_request
    def _add_request_id_header(response):  # pragma: no cover
        request_id = g.get("request_id")
        if request_id:
            response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(HTTPException)
    def _handle_http_exception(error: HTTPException):
        return _json_error(error)

    @app.errorhandler(Exception)
    def _handle_unexpected(error: Exception):  # pragma: no cover
        request_id = g.get("request_id") or str(uuid.uuid4())
        app.logger.exception("Unhandled application error", exc_info=error)
        payload = {
            "error": "Internal Server Error",
            "detail": "An unexpected error occurred.",
            "code": "internal_error",
            "request_id": request_id,
        }
        response = jsonify(payload)
        response.status_code = 500
        response.headers.setdefault("X-Request-ID", request_id)
        return response


if __name__ == "__main__":
    application = create_app()
    application.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)))
