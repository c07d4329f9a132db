"""Custom exceptions for the application."""
from typing import Any, Optional


class AppException(Exception):
    """Base application exception."""

    status_code: int = 400

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppException):
    """Validation errors."""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(
            message,
            error_code="VALIDATION_ERROR",
            details={"field": field} if field else {},
        )


class AuthenticationError(AppException):
    """Authentication related errors."""

    status_code = 401

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, error_code="AUTH_ERROR")


class AuthorizationError(AppException):
    """Authorization related errors."""

    status_code = 403

    def __init__(self, message: str = "Permission denied"):
        super().__init__(message, error_code="AUTHZ_ERROR")


class NotFoundError(AppException):
    """Resource not found errors."""

    status_code = 404

    def __init__(self, resource: str, resource_id: Any):
        super().__init__(
            f"{resource} not found",
            error_code="NOT_FOUND",
            details={"resource": resource, "id": resource_id},
        )


class ConflictError(AppException):
    """Raised when a resource conflicts with an existing one (e.g., duplicate)."""

    status_code = 409

    def __init__(self, message: str):
        super().__init__(message, error_code="CONFLICT")


class StorageError(AppException):
    """Persistence backend failures."""

    status_code = 500

    def __init__(self, message: str, backend: Optional[str] = None):
        super().__init__(
            message,
            error_code="STORAGE_ERROR",
            details={"backend": backend} if backend else {},
        )
