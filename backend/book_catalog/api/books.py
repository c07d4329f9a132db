"""Book API routes. Reads are open to any authenticated user; writes are owner-only."""
from typing import List

from fastapi import APIRouter, Depends, Response, status

from book_catalog.core.exceptions import NotFoundError
from book_catalog.core.security import get_current_user_id
from book_catalog.dependencies import get_book_repository
from book_catalog.repositories.books import BookRepository
from book_catalog.schemas.book import BookCreate, BookResponse, BookUpdate
from book_catalog.schemas.common import ErrorResponse

router = APIRouter(prefix="/books", tags=["Books"])


@router.get("", response_model=List[BookResponse])
async def list_books(
    user_id: str = Depends(get_current_user_id),
    books: BookRepository = Depends(get_book_repository),
) -> List[dict]:
    """List every book in the catalog."""
    return await books.list_all()


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    responses={404: {"model": ErrorResponse, "description": "Book not found."}},
)
async def get_book(
    book_id: str,
    user_id: str = Depends(get_current_user_id),
    books: BookRepository = Depends(get_book_repository),
) -> dict:
    book = await books.get_by_id(book_id)
    if book is None:
        raise NotFoundError("Book", book_id)
    return book


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse, "description": "Missing fields."}},
)
async def create_book(
    book: BookCreate,
    user_id: str = Depends(get_current_user_id),
    books: BookRepository = Depends(get_book_repository),
) -> dict:
    """Create a book owned by the current user."""
    return await books.create(book.model_dump(), owner_id=user_id)


@router.put(
    "/{book_id}",
    response_model=BookResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Not the owner."},
        404: {"model": ErrorResponse, "description": "Book not found."},
    },
)
async def update_book(
    book_id: str,
    book: BookUpdate,
    user_id: str = Depends(get_current_user_id),
    books: BookRepository = Depends(get_book_repository),
) -> dict:
    """Partially update a book. Only provided fields are changed."""
    return await books.update(book_id, book.changes(), requester_id=user_id)


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        403: {"model": ErrorResponse, "description": "Not the owner."},
        404: {"model": ErrorResponse, "description": "Book not found."},
    },
)
async def delete_book(
    book_id: str,
    user_id: str = Depends(get_current_user_id),
    books: BookRepository = Depends(get_book_repository),
) -> Response:
    await books.delete(book_id, requester_id=user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
