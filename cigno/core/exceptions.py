"""
Exception hierarchy for the Cigno platform.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class CignoException(Exception):
    """Base exception for all Cigno platform errors."""

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


class ValidationError(CignoException):
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
        self.field = field
        super().__init__(message, details)


class InvalidIdentifierError(ValidationError):
    """Raised when a record identifier is not a well-formed object id string."""

    def __init__(self, field: str, value: Any) -> None:
        """
        Initialize invalid identifier error.

        Args:
            field: Name of the field or parameter carrying the identifier
            value: The rejected value (only its type is recorded)
        """
        super().__init__(
            f"Valid ObjectId required for '{field}'",
            field=field,
            details={"received_type": type(value).__name__},
        )


class NotFoundError(CignoException):
    """Raised when a record cannot be found."""

    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        """
        Initialize not found error.

        Args:
            resource: Human-readable resource name, e.g. "Deliverable"
            resource_id: Identifier that was looked up
        """
        self.resource = resource
        self.resource_id = resource_id
        message = f"{resource} not found"
        super().__init__(message, {"id": resource_id} if resource_id else None)


class ConflictError(CignoException):
    """Raised when a write would violate a uniqueness rule."""


class LockedError(CignoException):
    """Raised when a storyline section is locked by another user."""


class PermissionDeniedError(CignoException):
    """Raised when a user may not release a lock held by someone else."""


class ConfigurationError(CignoException):
    """Raised when required configuration is missing or invalid."""


class AgentError(CignoException):
    """Base exception for custom agent integration failures."""


class AgentConfigurationError(AgentError):
    """Raised when the agent client is missing its key or agent id."""


class AgentRequestError(AgentError):
    """Raised when the custom agent API answers with a non-success status."""

    def __init__(self, status_code: int, body: str, agent_id: str | None = None) -> None:
        """
        Initialize agent request error.

        Args:
            status_code: HTTP status returned by the remote API
            body: Raw response body
            agent_id: Agent that was called
        """
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"Custom agent failed ({status_code}): {body}",
            {"status_code": status_code, "agent_id": agent_id},
        )
