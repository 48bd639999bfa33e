"""
Exception hierarchy for infrastructure declaration.

Every error here is raised while a component is being constructed, before
any of its resources are registered with the engine.
"""

from typing import Any


class InfrastructureError(Exception):
    """Base exception for all infrastructure declaration errors."""

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


class ConfigurationError(InfrastructureError):
    """Raised when stack configuration values are inconsistent."""


class MissingSubnetGroupError(InfrastructureError):
    """Raised when a network boundary lacks a required subnet group."""

    def __init__(self, subnet_type: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["subnet_type"] = subnet_type
        super().__init__(f"Network boundary has no {subnet_type} subnet group", details)


class MissingCredentialFieldError(InfrastructureError):
    """Raised when a credentials handle does not carry a requested field."""

    def __init__(
        self,
        field: str,
        available: tuple[str, ...],
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["field"] = field
        details["available"] = list(available)
        super().__init__(f"Credentials handle has no field: {field}", details)


class InvalidTrustScopeError(InfrastructureError):
    """Raised when a federated trust condition would be too broad."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)
