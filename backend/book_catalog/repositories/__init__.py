"""Repositories over the catalog document."""
from book_catalog.repositories.books import BookRepository
from book_catalog.repositories.users import UserRepository

__all__ = [
    "BookRepository",
    "UserRepository",
]
