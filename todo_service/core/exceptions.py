"""
Exception hierarchy for the todo service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class TodoServiceException(Exception):
    """Base exception for all todo service errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(TodoServiceException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class TodoNotFoundError(TodoServiceException):
    """Raised when a todo item cannot be found."""

    def __init__(self, todo_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["todo_id"] = todo_id
        super().__init__(f"Todo not found: {todo_id}", details)


class DataSourceError(TodoServiceException):
    """Base exception for data source lifecycle errors."""


class DataSourceNotOpenError(DataSourceError):
    """Raised when a session is requested from a data source that is not open."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__("Data source is not open; call open() first", details)


class DataSourceAlreadyOpenError(DataSourceError):
    """Raised when open() is called on an already open data source."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__("Data source is already open", details)


class MigrationError(TodoServiceException):
    """Raised when applying schema migrations fails."""

    def __init__(
        self,
        message: str,
        revision: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if revision:
            details["revision"] = revision
        super().__init__(message, details)
