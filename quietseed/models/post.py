from typing import Any, Optional
from datetime import datetime
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import Text
from pydantic import computed_field, field_validator

from quietseed.core.text import coerce_bool, coerce_datetime, utcnow
from quietseed.db.types import UTCDateTime
from quietseed.core.text import reading_time as estimate_reading_time

class Post(SQLModel, table=True):
    __tablename__ = "posts"

    id: Optional[int] = Field(default=None, primary_key=True)

    # Content
    title: str = Field(index=True)
    slug: str = Field(unique=True, index=True)  # URL-friendly title
    content: str = Field(sa_column=Column(Text, nullable=False))  # Trusted HTML from the editor
    excerpt: str  # Short summary for listings
    image_url: Optional[str] = None

    # Categorization; nullable so posts survive without a category
    category_id: Optional[int] = Field(default=None, foreign_key="categories.id", index=True)
    author_id: int = Field(foreign_key="users.id", index=True)
    featured: bool = Field(default=False)

    # Timestamps
    published_at: datetime = Field(index=True, sa_type=UTCDateTime)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)


class PostWithDetails(SQLModel):
    """A post flattened with its category and author for direct rendering."""

    id: int
    title: str
    slug: str
    content: str
    excerpt: str
    image_url: Optional[str] = None
    category_id: Optional[int] = None
    author_id: int
    featured: bool
    published_at: datetime
    created_at: datetime
    updated_at: datetime

    category_name: Optional[str] = None
    category_slug: Optional[str] = None
    author_name: str

    @computed_field
    @property
    def reading_time(self) -> str:
        return estimate_reading_time(self.content)


class _PostFields(SQLModel):
    # Browser forms send "true"/"false" and ISO date strings
    @field_validator("featured", mode="before", check_fields=False)
    @classmethod
    def _coerce_featured(cls, value: Any) -> Any:
        return value if value is None else coerce_bool(value)

    @field_validator("published_at", mode="before", check_fields=False)
    @classmethod
    def _coerce_published_at(cls, value: Any) -> Any:
        return value if value is None else coerce_datetime(value)


class PostCreate(_PostFields):
    title: str = Field(min_length=1)
    slug: Optional[str] = None
    content: str
    excerpt: Optional[str] = None
    image_url: Optional[str] = None
    published_at: Optional[datetime] = None
    category_id: Optional[int] = None
    author_id: Optional[int] = None
    featured: bool = False


class PostUpdate(_PostFields):
    title: Optional[str] = Field(default=None, min_length=1)
    slug: Optional[str] = None
    content: Optional[str] = None
    excerpt: Optional[str] = None
    image_url: Optional[str] = None
    published_at: Optional[datetime] = None
    category_id: Optional[int] = None
    author_id: Optional[int] = None
    featured: Optional[bool] = None
