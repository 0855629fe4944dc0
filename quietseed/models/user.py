from typing import Optional
from datetime import datetime
from sqlmodel import Field, SQLModel

from quietseed.core.text import utcnow
from quietseed.db.types import UTCDateTime

class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)

    # Credentials
    username: str = Field(unique=True, index=True)
    password_hash: str  # argon2 hash, never returned by the API

    # Profile
    display_name: str = ""
    is_admin: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)


class UserPublic(SQLModel):
    id: int
    username: str
    display_name: str
    is_admin: bool
    created_at: datetime


class UserCreate(SQLModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    display_name: Optional[str] = None


class UserUpdate(SQLModel):
    username: Optional[str] = Field(default=None, min_length=1)
    password: Optional[str] = Field(default=None, min_length=1)
    display_name: Optional[str] = None


class LoginRequest(SQLModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
