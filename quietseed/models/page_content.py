from typing import Dict, Optional
from datetime import datetime
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import Text

from quietseed.core.text import utcnow
from quietseed.db.types import UTCDateTime

# Pages that exist before anyone edits them
DEFAULT_PAGES: Dict[str, Dict[str, str]] = {
    "about": {
        "title": "About The Quiet Seed",
        "content": (
            "<p>The Quiet Seed is a space for mindful reflections, gentle guides, "
            "and thoughtful stories about slow living in a fast-paced world.</p>"
            "<p>Through reflective essays, mindfulness practices, personal stories, "
            "and philosophical musings, we explore the art of presence and the joy "
            "of living with intention. This is not about perfection, but about "
            "embracing the messy, beautiful journey of becoming more awake to our "
            "lives.</p>"
        ),
    },
}

class PageContent(SQLModel, table=True):
    __tablename__ = "page_contents"

    id: str = Field(primary_key=True)  # e.g. "about"
    title: str
    content: str = Field(sa_column=Column(Text, nullable=False))
    last_updated: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)


class PageContentUpdate(SQLModel):
    title: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = None
