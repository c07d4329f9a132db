"""
FastAPI dependency providers. Components are built once per application
in ``create_app`` and kept on ``app.state``.
"""
from fastapi import Request

from book_catalog.config import Settings
from book_catalog.repositories.books import BookRepository
from book_catalog.services.auth_service import AuthService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_book_repository(request: Request) -> BookRepository:
    """
    Dependency provider for BookRepository.
    """
    return request.app.state.book_repository


def get_auth_service(request: Request) -> AuthService:
    """
    Dependency provider for AuthService.
    """
    return request.app.state.auth_service
