"""
Domain Exceptions

Errors raised by the service layer (ordering, relationship maintenance).

Services do not know about HTTP. Each exception carries the status code the
API answers with, and main.py registers a single handler that converts any
LibraryAPIError into a JSON error response:

    raise ConflictError("Book 3 is already in your library")
    # -> 409 {"detail": "Book 3 is already in your library"}
"""

from fastapi import status


class LibraryAPIError(Exception):
    """Base class for errors that map onto an HTTP status code."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotFoundError(LibraryAPIError):
    """A referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class BadRequestError(LibraryAPIError):
    """An invalid relationship operation or malformed request."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(LibraryAPIError):
    """The operation would duplicate an existing record."""

    status_code = status.HTTP_409_CONFLICT


class ForbiddenError(LibraryAPIError):
    """The caller is authenticated but not allowed to do this."""

    status_code = status.HTTP_403_FORBIDDEN
