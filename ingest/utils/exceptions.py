"""Custom exceptions for the application."""

from typing import Any, Dict, Optional


class BaseIngestException(Exception):
    """Base exception for domain errors raised by services and the access engine."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(BaseIngestException):
    """Raised when validation fails."""

    def __init__(self, message: str = "Validation failed", error_code: str = "VALIDATION_ERROR", **kwargs):
        super().__init__(message, error_code=error_code, **kwargs)

    @classmethod
    def for_fields(cls, fields: Dict[str, list[str]], message: str = "Validation failed") -> "ValidationError":
        """Build an error carrying per-field messages."""
        return cls(message, details={"fields": fields})

    @property
    def fields(self) -> Dict[str, list[str]]:
        return self.details.get("fields", {})


class NotFoundError(BaseIngestException):
    """Raised when a resource is not found."""

    def __init__(self, message: str = "Resource not found", error_code: str = "NOT_FOUND", **kwargs):
        super().__init__(message, error_code=error_code, **kwargs)


class ConflictError(BaseIngestException):
    """Raised when there's a conflict (e.g., duplicate resource)."""

    def __init__(self, message: str = "Resource conflict", error_code: str = "CONFLICT", **kwargs):
        super().__init__(message, error_code=error_code, **kwargs)


class InvalidRequestError(BaseIngestException):
    """Raised when an access decision is requested with malformed input."""

    def __init__(self, message: str = "Invalid access request", error_code: str = "INVALID_REQUEST", **kwargs):
        super().__init__(message, error_code=error_code, **kwargs)


class AuthenticationError(BaseIngestException):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed", error_code: str = "AUTHENTICATION_FAILED", **kwargs):
        super().__init__(message, error_code=error_code, **kwargs)


class TokenExpiredError(AuthenticationError):
    """Raised when a token has expired."""

    def __init__(self, message: str = "Token has expired", **kwargs):
        super().__init__(message, error_code="TOKEN_EXPIRED", **kwargs)


class InvalidTokenError(AuthenticationError):
    """Raised when a token is invalid."""

    def __init__(self, message: str = "Invalid token", **kwargs):
        super().__init__(message, error_code="INVALID_TOKEN", **kwargs)


class AuthorizationError(BaseIngestException):
    """Raised when authorization fails."""

    def __init__(self, message: str = "Access denied", error_code: str = "ACCESS_DENIED", **kwargs):
        super().__init__(message, error_code=error_code, **kwargs)


class AccessDeniedError(AuthorizationError):
    """Raised by the authorization gate when a decision denies access.

    Carries only the resource type, action and actor id. The policy reasoning
    behind the decision is never exposed.
    """

    def __init__(self, resource_type: str, action: str, actor_id: int | None):
        self.resource_type = resource_type
        self.action = action
        self.actor_id = actor_id
        super().__init__(
            f"Not allowed to {action} {resource_type}",
            details={"resource_type": resource_type, "action": action, "actor_id": actor_id},
        )
