"""User model definition."""

from datetime import UTC, datetime

from flask import current_app, has_app_context

from utils.passwords import DEFAULT_ROUNDS, hash_password, verify_password

from . import db

USERNAME_MAX_LENGTH = 80
EMAIL_MAX_LENGTH = 255


def utcnow() -> datetime:
    """Return the current UTC time as a naive datetime for storage."""

    return datetime.now(UTC).replace(tzinfo=None)


class User(db.Model):
    """Represents an account that owns email-collection projects."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(USERNAME_MAX_LENGTH), unique=True, nullable=False)
    email = db.Column(db.String(EMAIL_MAX_LENGTH), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    is_verified = db.Column(
        db.Boolean,
        nullable=False,
        default=False,
        server_default=db.false(),
    )
    verification_token = db.Column(db.String(64), unique=True, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    projects = db.relationship("Project", back_populates="owner", lazy="dynamic")

    def set_password(self, password: str) -> None:
        """Hash and store the password."""

        rounds = DEFAULT_ROUNDS
        if has_app_context():
            rounds = current_app.config.get("BCRYPT_ROUNDS", DEFAULT_ROUNDS)
        self.password_hash = hash_password(password, rounds=rounds)

    def check_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""

        return verify_password(password, self.password_hash)

    def to_summary(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.username}>"
