"""Application configuration and environment variables."""
from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

# Only honoured when ``testing`` is enabled.
TEST_JWT_SECRET = "test-secret-key"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Book Catalog"
    debug: bool = False
    testing: bool = False
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)

    # JWT Authentication
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_expiration_hours: int = Field(default=1, ge=1, le=24)

    # Password hashing (bcrypt cost factor)
    password_hash_rounds: int = Field(default=12, ge=10, le=16)

    # Storage
    storage_mode: Literal["memory", "file", "sql"] = "memory"
    storage_path: str = "db.json"
    database_url: str = "sqlite+aiosqlite:///./book_catalog.db"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore"
    }

    @model_validator(mode="after")
    def require_jwt_secret(self) -> "Settings":
        if not self.jwt_secret:
            if not self.testing:
                raise ValueError(
                    "JWT_SECRET must be set (or TESTING=true to use the test-only secret)"
                )
            self.jwt_secret = TEST_JWT_SECRET
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
