"""Credential store: user records kept in the catalog document."""
import uuid
from datetime import datetime, timezone
from typing import Optional

from book_catalog.core.exceptions import ConflictError, NotFoundError
from book_catalog.core.logging import get_logger
from book_catalog.core.security import PasswordHasher
from book_catalog.storage import StorageBackend

logger = get_logger("repositories.users")


class UserRepository:
    """
    Repository for user records. Uniqueness of the identity is a
    check-then-insert inside one load/save cycle, not an atomic constraint.
    """
    def __init__(self, storage: StorageBackend, hasher: PasswordHasher):
        self._storage = storage
        self._hasher = hasher

    async def find_by_identity(self, identity: str) -> Optional[dict]:
        """Find a user whose username or email equals ``identity``."""
        document = await self._storage.load()
        return _find_identity(document["users"], identity)

    async def get_by_id(self, user_id: str) -> Optional[dict]:
        document = await self._storage.load()
        return _find(document["users"], "id", user_id)

    async def create(self, username: str, password: str, **profile) -> dict:
        """Create a user; raises ConflictError if the username or email is taken."""
        document = await self._storage.load()
        candidates = [username, profile.get("email")]
        if any(_find_identity(document["users"], c) is not None for c in candidates if c):
            raise ConflictError("Username already exists")

        user = {
            **profile,
            "id": uuid.uuid4().hex,
            "username": username,
            "password_hash": self._hasher.hash(password),
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        document["users"].append(user)
        await self._storage.save(document)
        logger.info(f"Created user {user['id']}")
        return dict(user)

    def verify_password(self, user: dict, password: str) -> bool:
        return self._hasher.verify(password, user.get("password_hash") or "")

    async def delete(self, user_id: str) -> None:
        """Delete a user. Their books are left in place."""
        document = await self._storage.load()
        for idx, item in enumerate(document["users"]):
            if item.get("id") == user_id:
                del document["users"][idx]
                await self._storage.save(document)
                logger.info(f"Deleted user {user_id}")
                return
        raise NotFoundError("User", user_id)


def _find(items: list[dict], key: str, value: str) -> Optional[dict]:
    for item in items:
        if item.get(key) == value:
            return item
    return None


def _find_identity(items: list[dict], identity: str) -> Optional[dict]:
    for item in items:
        if identity in (item.get("username"), item.get("email")):
            return item
    return None
