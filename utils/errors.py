"""HTTP errors raised by the services and views.

Each error is a Werkzeug ``HTTPException`` so the application's JSON error
handler renders it; ``code`` is the stable machine-readable reason included
in the response envelope.
"""

from __future__ import annotations

from werkzeug.exceptions import (
    BadRequest,
    Forbidden,
    InternalServerError,
    NotFound,
    Unauthorized,
)


class MissingFields(BadRequest):
    code_name = "missing_fields"
    description = "All the fields are required."


class ValidationFailed(BadRequest):
    code_name = "validation_error"


class DuplicateEmail(BadRequest):
    code_name = "duplicate_email"
    description = "Email already exists."


class DuplicateUsername(BadRequest):
    code_name = "duplicate_username"
    description = "Username already exists."


class InvalidToken(BadRequest):
    code_name = "invalid_token"
    description = "Invalid or expired verification token."


class MissingCredentials(Unauthorized):
    code_name = "missing_credentials"
    description = "Missing credentials."


class InvalidCredentials(Unauthorized):
    code_name = "invalid_credentials"
    description = "Invalid credentials."


class EmailNotVerified(Forbidden):
    code_name = "email_not_verified"
    description = "Please verify your email before signing in."


class ResourceNotFound(NotFound):
    code_name = "not_found"
    description = "Resource not found."


class NotFoundOrNotOwned(NotFound):
    code_name = "not_found_or_not_owned"
    description = "Project not found or you do not have permission to access it."


class ProjectNotFound(NotFound):
    code_name = "project_not_found"
    description = "Project not found."


class EmailNotFound(NotFound):
    code_name = "email_not_found"
    description = "Email not found."


class InternalError(InternalServerError):
    code_name = "internal_error"
    description = "An unexpected error occurred."
