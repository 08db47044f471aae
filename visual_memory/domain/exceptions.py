"""Exceptions raised by the Visual Memory client."""

from typing import Optional


class VisualMemoryError(Exception):
    """Base class for errors in this application."""


class MissingCredentialsError(VisualMemoryError):
    """No authentication token is available; nothing was sent."""

    def __init__(self, message: str = "No authentication token found"):
        super().__init__(message)


class QueryValidationError(VisualMemoryError):
    """A search query failed local validation."""


class PreviewDecodeError(VisualMemoryError):
    """Inline image data from the backend could not be decoded."""


class RemoteServiceError(VisualMemoryError):
    """The backend could not be reached or answered with an error status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        detail: Optional[str] = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail

    @property
    def user_message(self) -> str:
        """Structured backend detail if present, otherwise the transport message."""
        return self.detail or str(self)


def describe_error(error: Exception, fallback: str) -> str:
    """Message to show the user for a failed operation."""
    if isinstance(error, RemoteServiceError):
        return error.user_message or fallback
    return str(error) or fallback
