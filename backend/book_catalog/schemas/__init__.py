"""Pydantic request/response schemas."""
from book_catalog.schemas.book import BookCreate, BookResponse, BookUpdate
from book_catalog.schemas.common import ErrorResponse, HealthResponse
from book_catalog.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserPublic

__all__ = [
    "AuthResponse",
    "BookCreate",
    "BookResponse",
    "BookUpdate",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "RegisterRequest",
    "UserPublic",
]
