"""bcrypt password hashing helpers."""

from __future__ import annotations

import secrets
from functools import lru_cache

import bcrypt

DEFAULT_ROUNDS = 13
MAX_PASSWORD_BYTES = 72


def hash_password(plain: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Return a salted bcrypt hash of ``plain`` using the given cost."""

    if not plain:
        raise ValueError("Password must not be empty.")
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(plain.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain: str, hashed: str | None) -> bool:
    """Check ``plain`` against a stored hash without raising."""

    if not plain or not hashed:
        return False
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


@lru_cache(maxsize=None)
def dummy_hash(rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash of a random secret, checked when no account matches a sign-in."""

    return hash_password(secrets.token_hex(16), rounds=rounds)


def is_too_long(plain: str) -> bool:
    return len(plain.encode("utf-8")) > MAX_PASSWORD_BYTES
