"""Book Pydantic schemas."""
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from book_catalog.schemas.common import RequestSchema


class BookFields(RequestSchema):
    # Immutable keys are accepted in bodies but never applied
    id: Optional[Any] = Field(None, exclude=True)
    owner_id: Optional[Any] = Field(None, exclude=True)

    @field_validator("title", "author", check_fields=False)
    @classmethod
    def not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("must not be blank")
        return v


class BookCreate(BookFields):
    """Schema for creating a book."""

    title: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    published_year: int


class BookUpdate(BookFields):
    """Schema for a partial book update. Only provided fields change."""

    title: Optional[str] = Field(None, min_length=1)
    author: Optional[str] = Field(None, min_length=1)
    published_year: Optional[int] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class BookResponse(BaseModel):
    """Schema for book response."""

    id: str
    title: str
    author: str
    published_year: int
    owner_id: Optional[str] = None
