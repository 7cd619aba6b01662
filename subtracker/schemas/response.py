"""Consistent API response envelopes.

Returns plain dicts (not Flask Response objects) because Flask-RESTX
handles JSON serialisation automatically.
"""

from pydantic import ValidationError as PydanticValidationError

from subtracker.domain.exceptions import AppError


def success_response(data=None, status_code: int = 200):
    """Return ``{"status": "success", "data": ...}`` with an HTTP status code."""
    return {"status": "success", "data": data}, status_code


def error_response(
    message: str,
    error_code: str = "INTERNAL_ERROR",
    status_code: int = 500,
    details=None,
):
    """Return a standardised error dict with HTTP status code."""
    body = {
        "status": "error",
        "error_code": error_code,
        "message": message,
    }
    if details:
        body["details"] = details
    return body, status_code


def app_error_response(error: AppError):
    """Render an ``AppError``, including validation details when present."""
    return error_response(
        error.message,
        error.error_code,
        error.status_code,
        details=getattr(error, "details", None),
    )


def invalid_input_response(error: PydanticValidationError):
    """Render a request body that failed to parse into its schema."""
    return error_response(
        "Invalid input",
        "VALIDATION_ERROR",
        400,
        details=error.errors(include_url=False, include_context=False),
    )
