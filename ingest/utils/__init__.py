"""Utility functions and classes."""

from .exceptions import *
from .security import *
from .validators import *

__all__ = [
    # Security
    "hash_password",
    "verify_password",
    # Exceptions
    "BaseIngestException",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "InvalidRequestError",
    "AuthenticationError",
    "AuthorizationError",
    "AccessDeniedError",
    # Validators
    "validate_email",
    "validate_password",
]
