"""Core utilities."""
from book_catalog.core.exceptions import (
    AppException,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from book_catalog.core.security import (
    PasswordHasher,
    TokenService,
    authenticate_headers,
    get_current_user_id,
)

__all__ = [
    # Security
    "PasswordHasher",
    "TokenService",
    "authenticate_headers",
    "get_current_user_id",
    # Exceptions
    "AppException",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "NotFoundError",
    "StorageError",
    "ValidationError",
]
