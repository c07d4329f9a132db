"""Security utilities for password hashing and JWT authentication."""
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from book_catalog.core.exceptions import AuthenticationError
from book_catalog.core.logging import get_logger

logger = get_logger("security")

# Bearer token security scheme; missing headers are handled by the guard
security = HTTPBearer(auto_error=False)


class PasswordHasher:
    """Salted bcrypt hashing with a configurable cost factor."""

    def __init__(self, rounds: int = 12):
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        """Hash a password. Every call uses a fresh random salt."""
        return self.pwd_context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash. Malformed hashes never match."""
        try:
            return self.pwd_context.verify(plain_password, hashed_password)
        except (ValueError, TypeError):
            logger.debug("Rejected malformed password hash")
            return False


class TokenService:
    """Issues and verifies signed, expiring access tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", expiration_hours: int = 1):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = timedelta(hours=expiration_hours)

    def create_access_token(
        self,
        user_id: str,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """Create a JWT access token for the given subject."""
        issued_at = datetime.now(timezone.utc)
        expire = issued_at + (expires_delta if expires_delta is not None else self.expires_in)

        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": expire,
        }

        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_token(self, token: str) -> Optional[str]:
        """Return the token subject, or None if the token is invalid or expired."""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            logger.debug(f"Token rejected: {e}")
            return None

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            logger.debug("Token rejected: missing subject")
            return None
        return subject


def authenticate_headers(headers: Mapping[str, str], tokens: TokenService) -> str:
    """Resolve the user id from an ``Authorization: Bearer <token>`` header."""
    authorization = headers.get("authorization") or headers.get("Authorization")
    if not authorization:
        raise AuthenticationError("No token provided")

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise AuthenticationError("No token provided")

    user_id = tokens.decode_token(parts[1])
    if user_id is None:
        raise AuthenticationError("Invalid token")
    return user_id


async def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """Get the authenticated user id and attach it to the request state."""
    # credentials only registers the bearer scheme in OpenAPI; the raw header is checked below
    user_id = authenticate_headers(request.headers, request.app.state.token_service)
    request.state.user_id = user_id
    return user_id
