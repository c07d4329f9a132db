"""API routers."""
from fastapi import APIRouter

from book_catalog.api import auth, books

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(books.router)

__all__ = ["api_router"]
