"""Issue signed session tokens."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from flask_jwt_extended import create_access_token, decode_token


@dataclass(frozen=True)
class SessionToken:
    access_token: str
    expires_at: datetime
    expires_in: int

    def to_dict(self) -> dict:
        return {
            "access_token": self.access_token,
            "token_type": "Bearer",
            "expires_at": self.expires_at.isoformat(),
            "expires_in": self.expires_in,
        }


def issue_session(user_id: int) -> SessionToken:
    """Create a bearer token for ``user_id`` valid for JWT_ACCESS_TOKEN_EXPIRES."""

    token = create_access_token(identity=str(user_id))
    claims = decode_token(token)
    return SessionToken(
        access_token=token,
        expires_at=datetime.fromtimestamp(claims["exp"], UTC),
        expires_in=int(claims["exp"] - claims["iat"]),
    )
