"""Authentication service."""
from typing import Optional

from book_catalog.core.exceptions import AuthenticationError, NotFoundError
from book_catalog.core.logging import get_logger
from book_catalog.core.security import TokenService
from book_catalog.repositories.users import UserRepository
from book_catalog.schemas.user import LoginRequest, RegisterRequest

logger = get_logger("services.auth")


def public_user(user: dict) -> dict:
    """Strip a user record down to the fields clients may see."""
    return {"id": user["id"], "username": user["username"]}


class AuthService:
    """Service for authentication operations."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self.users = users
        self.tokens = tokens

    async def register_user(self, user_data: RegisterRequest) -> dict:
        """Register a new user and issue their first token."""
        user = await self.users.create(
            user_data.identity,
            user_data.password,
            **user_data.profile(),
        )
        logger.info(f"Registered user {user['id']}")
        return {"token": self.create_token(user), "user": public_user(user)}

    async def authenticate_user(self, identity: str, password: str) -> Optional[dict]:
        """Authenticate a user by username or email and password."""
        user = await self.users.find_by_identity(identity)
        if not user:
            return None
        if not self.users.verify_password(user, password):
            return None
        return user

    async def login(self, credentials: LoginRequest) -> dict:
        user = await self.authenticate_user(credentials.identity, credentials.password)
        if user is None:
            logger.info("Rejected login attempt")
            raise AuthenticationError("Invalid username or password")
        logger.info(f"User {user['id']} logged in")
        return {"token": self.create_token(user), "user": public_user(user)}

    async def get_user(self, user_id: str) -> dict:
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return public_user(user)

    async def delete_user(self, user_id: str) -> None:
        """Delete the user's account. Tokens stay valid until they expire."""
        await self.users.delete(user_id)

    def create_token(self, user: dict) -> str:
        """Create an access token for a user."""
        return self.tokens.create_access_token(user["id"])
