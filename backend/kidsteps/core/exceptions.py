"""
Custom exceptions for the application.
"""

from typing import Any, Optional, Sequence


class KidStepsError(Exception):
    """Base exception for kidsteps."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(KidStepsError):
    """Resource not found."""

    pass


class ValidationError(KidStepsError):
    """Validation error."""

    pass


class AuthenticationError(KidStepsError):
    """Authentication failed."""

    pass


class AuthorizationError(KidStepsError):
    """Authorization failed."""

    pass


class ForbiddenError(AuthorizationError):
    """Forbidden operation (authorization denied)."""

    pass


class InfrastructureError(KidStepsError):
    """Infrastructure-related error (DB, external services, etc.)."""

    pass


class QueryConfigurationError(InfrastructureError):
    """
    The document store needs configuration (usually a composite index)
    before it can run the query.

    Not retryable: the index has to be provisioned out of band.
    """

    def __init__(self, message: str, collection: str, fields: Sequence[str]):
        super().__init__(
            message,
            details={"collection": collection, "fields": list(fields)},
        )
        self.collection = collection
        self.fields = tuple(fields)

    @property
    def remediation(self) -> str:
        """Human readable instructions for creating the missing index."""
        field_list = ", ".join(f"{i}. {name} (Ascending)" for i, name in enumerate(self.fields, 1))
        return (
            f"Create a composite index on '{self.collection}' with fields: {field_list}. "
            "After creating it, the index may take a few minutes to build."
        )


class TransientIOError(InfrastructureError):
    """Store or network failure. Safe to retry at the caller's discretion."""

    pass
