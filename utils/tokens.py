"""Random token generation."""

import secrets

VERIFICATION_TOKEN_BYTES = 32


def issue_verification_token() -> str:
    """Return a fresh 256-bit hex token for email verification links."""

    return secrets.token_hex(VERIFICATION_TOKEN_BYTES)
