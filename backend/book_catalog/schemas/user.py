"""User Pydantic schemas."""
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from book_catalog.schemas.common import RequestSchema


class RegisterRequest(RequestSchema):
    """Schema for registering a user. Either username or email is the identity."""

    username: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[str] = Field(None, min_length=1, max_length=255)
    name: Optional[str] = Field(None, max_length=255)
    password: str = Field(..., min_length=1, max_length=72)

    @model_validator(mode="after")
    def require_identity(self) -> "RegisterRequest":
        if not self.username and not self.email:
            raise ValueError("username or email is required")
        return self

    @property
    def identity(self) -> str:
        return self.username or self.email

    def profile(self) -> dict:
        """Optional profile fields stored alongside the identity."""
        fields = {"email": self.email, "name": self.name}
        return {k: v for k, v in fields.items() if v is not None}


class LoginRequest(RequestSchema):
    """Schema for user login."""

    username: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = Field(None, min_length=1)
    password: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def require_identity(self) -> "LoginRequest":
        if not self.username and not self.email:
            raise ValueError("username or email is required")
        return self

    @property
    def identity(self) -> str:
        return self.username or self.email


class UserPublic(BaseModel):
    """User fields safe to return to clients."""

    id: str
    username: str


class AuthResponse(BaseModel):
    """Token plus the authenticated user."""

    token: str
    user: UserPublic
