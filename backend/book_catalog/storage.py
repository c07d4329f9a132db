"""Pluggable persistence backends for the catalog document.

The whole catalog lives in a single document of the shape
``{"users": [...], "books": [...]}``. Repositories load it, mutate it in
memory and save it back in full. Backends make no attempt to serialize
concurrent read-modify-write cycles: the last ``save`` wins.
"""
import asyncio
import copy
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional, Protocol, Union

from sqlalchemy.exc import SQLAlchemyError

from book_catalog.config import Settings
from book_catalog.core.exceptions import StorageError
from book_catalog.core.logging import get_logger
from book_catalog.database import (
    StoredDocument,
    close_db,
    init_db,
    make_engine,
    make_session_maker,
)

logger = get_logger("storage")

Document = dict[str, Any]


def empty_document() -> Document:
    return {"users": [], "books": []}


def normalize_document(document: Any) -> Document:
    """Fill in missing collections so callers can rely on both keys."""
    if not isinstance(document, dict):
        raise StorageError("Stored document is not an object")
    for key in ("users", "books"):
        value = document.setdefault(key, [])
        if not isinstance(value, list):
            raise StorageError(f"Stored document field '{key}' is not a list")
    return document


class StorageBackend(Protocol):
    """
    Storage port used by the repositories.
    """
    async def initialize(self) -> None:
        ...
    async def load(self) -> Document:
        ...
    async def save(self, document: Document) -> None:
        ...
    async def close(self) -> None:
        ...


class MemoryStorage:
    """
    In-process storage. Loads and saves deep copies so each caller works
    on its own snapshot, like a serialized store would give it.
    """
    name = "memory"

    def __init__(self, document: Optional[Document] = None):
        self._document = normalize_document(copy.deepcopy(document) if document else empty_document())

    async def initialize(self) -> None:
        return None

    async def load(self) -> Document:
        return copy.deepcopy(self._document)

    async def save(self, document: Document) -> None:
        self._document = normalize_document(copy.deepcopy(document))

    async def close(self) -> None:
        return None


class FileStorage:
    """
    JSON file storage. Each save rewrites the whole file atomically.
    """
    name = "file"

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    async def initialize(self) -> None:
        if not self.path.exists():
            logger.info(f"Creating catalog file at {self.path}")
            await self.save(empty_document())

    async def load(self) -> Document:
        try:
            raw = await asyncio.to_thread(self.path.read_text, encoding="utf-8")
        except FileNotFoundError:
            return empty_document()
        except OSError as e:
            raise StorageError(f"Could not read {self.path}: {e}", backend=self.name) from e
        try:
            return normalize_document(json.loads(raw))
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupt catalog file {self.path}: {e}", backend=self.name) from e

    async def save(self, document: Document) -> None:
        try:
            await asyncio.to_thread(self._write, json.dumps(document, indent=2))
        except (OSError, TypeError) as e:
            raise StorageError(f"Could not write {self.path}: {e}", backend=self.name) from e

    def _write(self, payload: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    async def close(self) -> None:
        return None


class SqlStorage:
    """
    SQLAlchemy-backed storage holding the document in a single table row.
    """
    name = "sql"
    document_key = "catalog"

    def __init__(self, database_url: str, echo: bool = False):
        self.engine = make_engine(database_url, echo=echo)
        self.session_maker = make_session_maker(self.engine)

    async def initialize(self) -> None:
        try:
            await init_db(self.engine)
        except SQLAlchemyError as e:
            raise StorageError(f"Could not initialize database: {e}", backend=self.name) from e

    async def load(self) -> Document:
        try:
            async with self.session_maker() as session:
                row = await session.get(StoredDocument, self.document_key)
        except SQLAlchemyError as e:
            raise StorageError(f"Could not load catalog: {e}", backend=self.name) from e
        if row is None:
            return empty_document()
        try:
            return normalize_document(json.loads(row.body))
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupt catalog row: {e}", backend=self.name) from e

    async def save(self, document: Document) -> None:
        body = json.dumps(document)
        try:
            async with self.session_maker() as session:
                row = await session.get(StoredDocument, self.document_key)
                if row is None:
                    session.add(StoredDocument(key=self.document_key, body=body))
                else:
                    row.body = body
                await session.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Could not save catalog: {e}", backend=self.name) from e

    async def close(self) -> None:
        await close_db(self.engine)


def build_storage(settings: Settings) -> StorageBackend:
    """Choose the storage backend configured by ``storage_mode``."""
    if settings.storage_mode == "file":
        return FileStorage(settings.storage_path)
    if settings.storage_mode == "sql":
        return SqlStorage(settings.database_url, echo=settings.debug)
    return MemoryStorage()
