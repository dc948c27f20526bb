from typing import Any, List, Optional


class AppError(Exception):
    """Base class for errors the API turns into a JSON error response."""

    status_code = 500
    error = "Internal Server Error"

    def __init__(self, message: str, errors: Optional[List[Any]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class ValidationError(AppError):
    """Malformed or out-of-range input, rejected before the store is touched."""

    status_code = 400
    error = "Bad Request"


class NotFoundError(AppError):
    """Entity is absent or owned by somebody else (the two are never told apart)."""

    status_code = 404
    error = "Not Found"


class StoreError(AppError):
    """Persistence failure: lost connection, constraint violation and the like."""

    status_code = 500
    error = "Internal Server Error"
