"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

from typing import Iterable

from flask import Request
from werkzeug.exceptions import BadRequest

from utils.errors import MissingFields, ValidationFailed


def clean_string(value: object) -> str:
    """Return ``value`` stripped when it is a string, else an empty string."""

    if not isinstance(value, str):
        return ""
    return value.strip()


def check_max_length(field: str, value: str, limit: int) -> str:
    """Reject values that would not fit their database column."""

    if len(value) > limit:
        raise ValidationFailed(f"{field} must be at most {limit} characters long.")
    return value


def normalize_email(raw_email: object) -> str:
    """Normalize an email string by stripping whitespace and lowering case."""

    return clean_string(raw_email).lower()


def parse_json_request(
    req: Request,
    *,
    required_keys: Iterable[str] | None = None,
    allow_empty: bool = False,
) -> dict:
    """Return the parsed JSON body or raise a 400 error."""

    if not req.is_json:
        raise BadRequest("Request content type must be application/json.")

    data = req.get_json(silent=False)
    if data is None:
        raise BadRequest("Request JSON body is required.")

    if not isinstance(data, dict):
        raise BadRequest("Request JSON payload must be an object.")

    if not data and not allow_empty and not required_keys:
        raise BadRequest("Request JSON body must not be empty.")

    if required_keys:
        missing = [key for key in required_keys if not clean_string(data.get(key))]
        if missing:
            raise MissingFields(
                "All the fields are required. Missing: {}.".format(
                    ", ".join(sorted(missing))
                )
            )

    return data
