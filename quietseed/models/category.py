from typing import Optional
from datetime import datetime
from sqlmodel import Field, SQLModel

from quietseed.core.text import utcnow
from quietseed.db.types import UTCDateTime

class Category(SQLModel, table=True):
    __tablename__ = "categories"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True)
    slug: str = Field(unique=True, index=True)
    description: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
