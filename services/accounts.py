"""Signup, email verification and sign-in."""

from __future__ import annotations

import logging

from flask import current_app
from sqlalchemy.exc import IntegrityError

from models import db
from models.user import User
from repositories import UserRepository
from services.sessions import SessionToken, issue_session
from utils.errors import (
    DuplicateEmail,
    DuplicateUsername,
    EmailNotVerified,
    InvalidCredentials,
    InvalidToken,
    ValidationFailed,
)
from utils.passwords import (
    DEFAULT_ROUNDS,
    MAX_PASSWORD_BYTES,
    dummy_hash,
    is_too_long,
    verify_password,
)
from utils.tokens import issue_verification_token

logger = logging.getLogger(__name__)


def signup(username: str, email: str, password: str) -> User:
    """Create an unverified user holding a fresh verification token.

    Uniqueness is checked with two reads before the insert. Concurrent
    signups can both pass those reads; the table's unique constraints then
    reject the loser at commit, which is reported the same way.
    """

    if is_too_long(password):
        raise ValidationFailed(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes long."
        )

    users = UserRepository(db.session)
    if users.find_by_email(email) is not None:
        raise DuplicateEmail()
    if users.find_by_username(username) is not None:
        raise DuplicateUsername()

    user = User(
        username=username,
        email=email,
        is_verified=False,
        verification_token=issue_verification_token(),
    )
    user.set_password(password)
    users.add(user)

    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        logger.warning("Concurrent signup rejected by unique constraint for %s", email)
        if users.find_by_email(email) is not None:
            raise DuplicateEmail() from exc
        raise DuplicateUsername() from exc

    logger.info("User %s signed up, pending verification", user.id)
    return user


def verify_email(token: str) -> User:
    """Consume a verification token, marking its holder verified."""

    if not token:
        raise InvalidToken()

    user = UserRepository(db.session).consume_verification_token(token)
    if user is None:
        db.session.rollback()
        raise InvalidToken()

    db.session.commit()
    logger.info("User %s verified their email", user.id)
    return user


def resend_verification(email: str) -> User | None:
    """Rotate the token of a pending account; return it, or None if not pending."""

    users = UserRepository(db.session)
    user = users.find_by_email(email)
    if user is None or user.is_verified:
        return None

    users.replace_verification_token(user, issue_verification_token())
    db.session.commit()
    return user


def signin(identifier: str, password: str) -> SessionToken:
    """Authenticate by username or email and issue a session token.

    Unknown identifiers and wrong passwords raise the same error, after the
    same bcrypt work, so callers cannot tell which one was wrong.
    """

    user = UserRepository(db.session).find_by_identifier(identifier)
    if user is None:
        rounds = current_app.config.get("BCRYPT_ROUNDS", DEFAULT_ROUNDS)
        verify_password(password, dummy_hash(rounds))
        raise InvalidCredentials()
    if not user.check_password(password):
        raise InvalidCredentials()

    if not user.is_verified:
        raise EmailNotVerified()

    return issue_session(user.id)
