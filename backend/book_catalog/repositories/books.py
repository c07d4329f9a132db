"""Resource store: book records with ownership-checked mutations."""
import uuid
from typing import Any, Optional

from book_catalog.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from book_catalog.core.logging import get_logger
from book_catalog.storage import StorageBackend

logger = get_logger("repositories.books")

BOOK_FIELDS = ("title", "author", "published_year")
IMMUTABLE_FIELDS = ("id", "owner_id")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class BookRepository:
    """
    Repository for books. Every mutation reloads the document, changes it
    in memory and writes the whole document back. Nothing guards against
    two requests interleaving those steps: the later save wins.
    """
    def __init__(self, storage: StorageBackend):
        self._storage = storage

    async def list_all(self) -> list[dict]:
        document = await self._storage.load()
        return list(document["books"])

    async def get_by_id(self, book_id: str) -> Optional[dict]:
        document = await self._storage.load()
        for item in document["books"]:
            if item.get("id") == book_id:
                return item
        return None

    async def create(self, fields: dict, owner_id: str) -> dict:
        """Create a book owned by ``owner_id``."""
        missing = [name for name in BOOK_FIELDS if _is_blank(fields.get(name))]
        if missing:
            raise ValidationError("Missing required fields", field=", ".join(missing))

        book = {name: fields[name] for name in BOOK_FIELDS}
        book["id"] = uuid.uuid4().hex
        book["owner_id"] = owner_id

        document = await self._storage.load()
        document["books"].append(book)
        await self._storage.save(document)
        logger.info(f"Created book {book['id']} for user {owner_id}")
        return book

    async def update(self, book_id: str, fields: dict, requester_id: str) -> dict:
        """Merge ``fields`` over the stored book; id and owner_id never change."""
        changes = {
            name: value
            for name, value in fields.items()
            if name in BOOK_FIELDS and value is not None
        }
        blank = [name for name, value in changes.items() if _is_blank(value)]
        if blank:
            raise ValidationError("Fields must not be empty", field=", ".join(blank))

        document = await self._storage.load()
        idx, book = self._locate(document, book_id, requester_id)
        updated = {**book, **changes}
        for name in IMMUTABLE_FIELDS:
            if name in book:
                updated[name] = book[name]
        document["books"][idx] = updated
        await self._storage.save(document)
        logger.info(f"Updated book {book_id}")
        return updated

    async def delete(self, book_id: str, requester_id: str) -> None:
        document = await self._storage.load()
        idx, _ = self._locate(document, book_id, requester_id)
        del document["books"][idx]
        await self._storage.save(document)
        logger.info(f"Deleted book {book_id}")

    def _locate(self, document: dict, book_id: str, requester_id: str) -> tuple[int, dict]:
        for idx, item in enumerate(document["books"]):
            if item.get("id") == book_id:
                if item.get("owner_id") != requester_id:
                    logger.warning(f"User {requester_id} denied write access to book {book_id}")
                    raise AuthorizationError("You do not have permission to modify this book")
                return idx, item
        raise NotFoundError("Book", book_id)
