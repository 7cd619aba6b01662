"""Custom business exception classes.

Each exception maps to a specific HTTP status code and error code
for consistent API error responses.
"""

GENERIC_ERROR_MESSAGE = "Something went wrong, try later..."


class AppError(Exception):
    """Base application error."""

    def __init__(self, message: str, error_code: str = "INTERNAL_ERROR", status_code: int = 500):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(self.message)


class ResourceNotFoundError(AppError):
    """Raised when a requested resource does not exist."""

    def __init__(self, resource: str, resource_id):
        super().__init__(
            message=f"{resource} with id {resource_id} not found",
            error_code="RESOURCE_NOT_FOUND",
            status_code=404,
        )


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str, details: dict | None = None):
        self.details = details or {}
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=400,
        )

    @classmethod
    def from_errors(cls, errors: list[str]) -> "ValidationError":
        """Join collected validator messages into a single error."""
        return cls("; ".join(errors), details={"errors": list(errors)})


class EmptyUpdateError(AppError):
    """Raised when an update request carries no field to change."""

    def __init__(self):
        super().__init__(
            message="No fields provided for update",
            error_code="NOTHING_TO_UPDATE",
            status_code=400,
        )


class MappingError(AppError):
    """Raised when validated input still fails to convert to an entity.

    Treated as a server fault: the detail is kept for logging and the
    client only sees the generic message.
    """

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(
            message=GENERIC_ERROR_MESSAGE,
            error_code="MAPPING_ERROR",
            status_code=500,
        )


class InternalError(AppError):
    """Raised when persistence fails; never carries the underlying detail."""

    def __init__(self):
        super().__init__(
            message=GENERIC_ERROR_MESSAGE,
            error_code="INTERNAL_ERROR",
            status_code=500,
        )
