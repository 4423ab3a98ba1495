"""Authentication blueprint: signup, email verification, sign-in and account removal."""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request, url_for
from flask_jwt_extended import jwt_required

from models.user import EMAIL_MAX_LENGTH, USERNAME_MAX_LENGTH
from services import accounts, cascade
from utils.auth import current_user_id
from utils.errors import MissingFields
from utils.request_validation import (
    check_max_length,
    clean_string,
    normalize_email,
    parse_json_request,
)

auth_bp = Blueprint("auth", __name__)


def _verify_url(token: str) -> str:
    base = (current_app.config.get("APP_URL") or "").rstrip("/")
    return f"{base}{url_for('auth.verify')}?token={token}"


def _send_verification(user) -> None:
    """Queue the verification email; delivery problems never fail the request."""

    dispatcher = current_app.extensions["mail_dispatcher"]
    dispatcher.send_verification(
        user.email, user.username, _verify_url(user.verification_token)
    )


@auth_bp.route("/signup", methods=["POST"])
def signup() -> tuple:
    """Register a new, unverified user and email them a verification link."""

    payload = parse_json_request(
        request, required_keys=("username", "email", "password")
    )
    username = check_max_length(
        "username", clean_string(payload.get("username")), USERNAME_MAX_LENGTH
    )
    email = check_max_length("email", normalize_email(payload.get("email")), EMAIL_MAX_LENGTH)
    password = payload["password"]

    user = accounts.signup(username, email, password)
    _send_verification(user)

    return (
        jsonify(
            {
                "message": "User registered successfully. Check your email to verify your account.",
                "user": user.to_summary(),
            }
        ),
        HTTPStatus.CREATED,
    )


@auth_bp.route("/verify", methods=["GET"])
def verify() -> tuple:
    """Consume the token from a verification link."""

    token = clean_string(request.args.get("token"))
    if not token:
        raise MissingFields("A verification token is required.")

    accounts.verify_email(token)
    return jsonify({"message": "Email verified successfully."}), HTTPStatus.OK


@auth_bp.route("/resend-verification", methods=["POST"])
def resend_verification() -> tuple:
    """Send a new verification link to a pending account.

    Answers identically whether or not the address is registered.
    """

    payload = parse_json_request(request, required_keys=("email",))
    user = accounts.resend_verification(normalize_email(payload.get("email")))
    if user is not None:
        _send_verification(user)

    return (
        jsonify(
            {"message": "If the account is awaiting verification, a new email has been sent."}
        ),
        HTTPStatus.ACCEPTED,
    )


@auth_bp.route("/signin", methods=["POST"])
def signin() -> tuple:
    """Authenticate by username or email and return a bearer token."""

    payload = parse_json_request(request)
    identifier = clean_string(
        payload.get("identifier") or payload.get("username") or payload.get("email")
    )
    password = payload.get("password")
    if not identifier or not isinstance(password, str) or not password:
        raise MissingFields()

    if "@" in identifier:
        identifier = identifier.lower()

    session = accounts.signin(identifier, password)
    return jsonify(session.to_dict()), HTTPStatus.OK


@auth_bp.route("/account", methods=["DELETE"])
@jwt_required()
def delete_account() -> tuple:
    """Delete the caller along with all of their projects and collected emails."""

    cascade.delete_user(current_user_id())
    return jsonify({"message": "Account deleted successfully."}), HTTPStatus.OK
