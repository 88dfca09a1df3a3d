"""Global exception handlers."""

import logging
from typing import Any

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError

from ingest.utils.exceptions import (
    AccessDeniedError,
    AuthenticationError,
    AuthorizationError,
    BaseIngestException,
    ConflictError,
    InvalidRequestError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Checked along the exception MRO, so subclasses inherit their parent's status
STATUS_MAPPING: dict[type[BaseIngestException], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidRequestError: status.HTTP_400_BAD_REQUEST,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    AuthorizationError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
}


def status_for(exc: BaseIngestException) -> int:
    """Get the HTTP status for a domain exception."""
    for cls in type(exc).__mro__:
        if cls in STATUS_MAPPING:
            return STATUS_MAPPING[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


class ExceptionHandlers:
    """Centralized exception handlers for the application."""

    @staticmethod
    async def domain_exception_handler(request: Request, exc: BaseIngestException) -> JSONResponse:
        """Handle all custom domain exceptions."""

        # A denial is an expected outcome, not a fault
        log = logger.info if isinstance(exc, AccessDeniedError) else logger.warning
        log(
            f"{type(exc).__name__} in {request.method} {request.url.path}: {exc.message}",
            extra={
                "error_code": exc.error_code,
                "details": exc.details,
                "path": str(request.url.path),
                "method": request.method,
            },
        )

        return JSONResponse(
            status_code=status_for(exc),
            content={
                "success": False,
                "message": exc.message,
                "error_code": exc.error_code,
                "details": exc.details,
            },
        )

    @staticmethod
    async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle request body and pydantic validation errors."""

        logger.warning(
            f"Validation error in {request.method} {request.url.path}: {str(exc)}",
            extra={
                "path": str(request.url.path),
                "method": request.method,
                "exception_type": type(exc).__name__,
            },
        )

        errors = exc.errors() if hasattr(exc, "errors") else str(exc)

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "success": False,
                "message": "Validation failed",
                "error_code": "VALIDATION_ERROR",
                "details": {"validation_errors": jsonable(errors)},
            },
        )

    @staticmethod
    async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        """Handle database integrity errors."""

        logger.error(
            f"Database integrity error in {request.method} {request.url.path}: {str(exc)}",
            extra={
                "path": str(request.url.path),
                "method": request.method,
            },
        )

        error_message = "Database constraint violation"
        error_code = "INTEGRITY_ERROR"

        text = str(exc).lower()
        if "unique" in text or "duplicate key" in text:
            error_message = "Resource already exists"
            error_code = "DUPLICATE_RESOURCE"
        elif "foreign key" in text:
            error_message = "Referenced resource not found"
            error_code = "FOREIGN_KEY_VIOLATION"
        elif "not null" in text:
            error_message = "Required field is missing"
            error_code = "REQUIRED_FIELD_MISSING"

        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={
                "success": False,
                "message": error_message,
                "error_code": error_code,
                "details": {},
            },
        )

    @staticmethod
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        """Handle FastAPI HTTP exceptions with consistent format."""

        logger.warning(
            f"HTTP exception in {request.method} {request.url.path}: {exc.detail}",
            extra={
                "status_code": exc.status_code,
                "path": str(request.url.path),
                "method": request.method,
            },
        )

        error_code_mapping = {
            400: "BAD_REQUEST",
            401: "UNAUTHORIZED",
            403: "FORBIDDEN",
            404: "NOT_FOUND",
            405: "METHOD_NOT_ALLOWED",
            409: "CONFLICT",
            422: "VALIDATION_ERROR",
            500: "INTERNAL_ERROR",
        }

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "success": False,
                "message": exc.detail,
                "error_code": error_code_mapping.get(exc.status_code, "HTTP_ERROR"),
                "details": {},
            },
            headers=getattr(exc, "headers", None),
        )

    @staticmethod
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""

        logger.error(
            f"Unexpected error in {request.method} {request.url.path}: {str(exc)}",
            extra={
                "path": str(request.url.path),
                "method": request.method,
                "exception_type": type(exc).__name__,
            },
            exc_info=True,
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": "Internal server error",
                "error_code": "INTERNAL_ERROR",
                "details": {},
            },
        )


def jsonable(errors: Any) -> Any:
    """Strip non-serializable context from pydantic error lists."""
    if not isinstance(errors, list):
        return errors
    return [{key: error[key] for key in ("loc", "msg", "type") if key in error} for error in errors]


def register_exception_handlers(app: Any) -> None:
    """Register all exception handlers with the FastAPI app."""

    handlers = ExceptionHandlers()

    # Domain exceptions
    app.add_exception_handler(BaseIngestException, handlers.domain_exception_handler)

    # Database errors
    app.add_exception_handler(IntegrityError, handlers.integrity_error_handler)

    # HTTP exceptions
    app.add_exception_handler(HTTPException, handlers.http_exception_handler)

    # Request and pydantic validation errors
    app.add_exception_handler(RequestValidationError, handlers.validation_exception_handler)
    app.add_exception_handler(PydanticValidationError, handlers.validation_exception_handler)

    # Catch-all for unexpected errors
    app.add_exception_handler(Exception, handlers.general_exception_handler)
