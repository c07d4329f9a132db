"""Business logic services."""
from book_catalog.services.auth_service import AuthService

__all__ = [
    "AuthService",
]
