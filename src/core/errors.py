"""
API error types.

Each error carries the HTTP status it maps to. Routers raise them, and the
exception handlers registered in api.main render them as
{"error": {"message": ...}}.
"""


class ApiError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class BookmarkValidationError(ApiError):
    """Raised when a request body is missing fields or contains invalid values."""

    status_code = 400


class MissingFieldError(BookmarkValidationError):
    """Raised when a required field is absent from a create request."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"missing {field}")


class BookmarkNotFoundError(ApiError):
    """Raised when no bookmark matches the requested id."""

    status_code = 404

    def __init__(self, bookmark_id: int) -> None:
        self.bookmark_id = bookmark_id
        super().__init__("Bookmark does not exist")


class UnauthorizedError(ApiError):
    """Raised when the bearer token is missing or does not match."""

    status_code = 401

    def __init__(self) -> None:
        super().__init__("Unauthorized request")
