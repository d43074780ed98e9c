"""Application error taxonomy.

These are expected outcomes, not defects. They propagate unchanged to the
HTTP boundary, where exception handlers map them to status codes.
"""


class AppError(Exception):
    """Base class for all anticipated application errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConflictError(AppError):
    """Raised when a unique field (email, national ID) is already taken."""

    status_code = 409

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class UnauthorizedError(AppError):
    """Raised for bad credentials, invalid tokens, or disabled accounts."""

    status_code = 401


class ForbiddenError(AppError):
    """Raised when an authenticated caller lacks the required role."""

    status_code = 403


class NotFoundError(AppError):
    """Raised when a requested record does not exist."""

    status_code = 404
