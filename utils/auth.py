"""Account lookup for views protected by ``jwt_required``."""

from __future__ import annotations

from flask import current_app
from flask_jwt_extended import get_current_user

from models import db
from models.user import User
from repositories import UserRepository


def load_user(_jwt_header: dict, jwt_data: dict) -> User | None:
    """Resolve the token subject to a stored user, or None if it is gone."""

    identity = jwt_data.get(current_app.config.get("JWT_IDENTITY_CLAIM", "sub"))
    try:
        user_id = int(identity)
    except (TypeError, ValueError):
        return None
    return UserRepository(db.session).get(user_id)


def current_user_id() -> int:
    return get_current_user().id
