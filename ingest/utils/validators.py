"""Validation utilities."""

from email_validator import EmailNotValidError
from email_validator import validate_email as _validate_email

from ingest.config.settings import settings

from .exceptions import ValidationError


def validate_email(email: str) -> str:
    """Validate an email address and return it unchanged.

    Invites are matched to registering accounts by exact string equality,
    so the normalized form returned by email-validator is discarded.
    """
    if not email:
        raise ValidationError.for_fields({"email": ["can't be blank"]})
    try:
        _validate_email(email, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValidationError.for_fields({"email": [str(e)]}, message="Invalid email address")
    return email


def validate_password(password: str) -> None:
    """Validate password length."""
    errors = []

    if len(password) < settings.PASSWORD_MIN_LENGTH:
        errors.append(f"should be at least {settings.PASSWORD_MIN_LENGTH} characters")

    if len(password) > 72:
        errors.append("should be at most 72 characters")

    if errors:
        raise ValidationError.for_fields({"password": errors}, message="Password validation failed")
