from typing import Optional
from datetime import datetime
from sqlmodel import Field, SQLModel

from quietseed.core.text import utcnow
from quietseed.db.types import UTCDateTime

SITE_SETTINGS_ID = 1
DEFAULT_TAGLINE = (
    "A space for mindful reflections, gentle guides, and thoughtful stories "
    "about slow living in a fast-paced world."
)

class SiteSettings(SQLModel, table=True):
    __tablename__ = "site_settings"

    # Singleton row, always SITE_SETTINGS_ID
    id: Optional[int] = Field(default=SITE_SETTINGS_ID, primary_key=True)
    tagline: str = DEFAULT_TAGLINE
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)


class SiteSettingsUpdate(SQLModel):
    tagline: str = Field(min_length=10, max_length=200)
