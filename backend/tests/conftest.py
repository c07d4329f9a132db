"""Shared test fixtures."""
import pytest
from httpx import ASGITransport, AsyncClient

from book_catalog.config import Settings
from book_catalog.core.security import PasswordHasher, TokenService
from book_catalog.main import create_app
from book_catalog.repositories.books import BookRepository
from book_catalog.repositories.users import UserRepository
from book_catalog.storage import MemoryStorage


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        testing=True,
        password_hash_rounds=10,
        storage_mode="memory",
        log_level="WARNING",
    )


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=10)


@pytest.fixture
def tokens(settings) -> TokenService:
    return TokenService(settings.jwt_secret)


@pytest.fixture
def users(storage, hasher) -> UserRepository:
    return UserRepository(storage, hasher)


@pytest.fixture
def books(storage) -> BookRepository:
    return BookRepository(storage)


@pytest.fixture
def app(settings, storage):
    return create_app(settings=settings, storage=storage)


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def register(client):
    """Register a user and return (token, user_id)."""
    async def _register(username: str = "testuser", password: str = "password123"):
        response = await client.post(
            "/api/auth/register",
            json={"username": username, "password": password},
        )
        assert response.status_code == 201, response.text
        data = response.json()
        return data["token"], data["user"]["id"]
    return _register


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
