"""Domain exceptions.

Errors raised by the collection query engine. Both kinds are terminal for
the originating operation and carry a machine-readable code together with a
human-readable message; the HTTP layer renders them (see ``blogapi.errors``).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single per-field validation message."""

    field: str
    message: str


class BlogAPIError(Exception):
    """Base exception for blog API domain errors.

    Attributes:
        message: Human-readable error message
        code: HTTP status code the error maps to
        error: Short error title rendered in the response body
    """

    status_code: int = 500
    error: str = "Internal Server Error"

    def __init__(self, message: str) -> None:
        """Initialize domain error.

        Args:
            message: Error message
        """
        super().__init__(message)
        self.message = message

    @property
    def code(self) -> int:
        return self.status_code


class ValidationError(BlogAPIError):
    """Raised when caller-supplied input fails a precondition.

    Example:
        >>> raise ValidationError(
        ...     "Title and content are required",
        ...     details=[FieldError("title", "Title is required")],
        ... )
    """

    status_code = 400
    error = "Validation Error"

    def __init__(self, message: str, details: list[FieldError] | None = None) -> None:
        super().__init__(message)
        self.details = list(details or [])

    @property
    def fields(self) -> list[str]:
        """Names of the offending fields, in reported order."""
        return [detail.field for detail in self.details]


class NotFoundError(BlogAPIError):
    """Raised when a referenced identifier does not exist in a collection.

    Example:
        >>> raise NotFoundError("Article not found")
    """

    status_code = 404
    error = "Not Found"
