"""Persisted per-user tracking data."""

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel
from sqlmodel import Field, SQLModel, UniqueConstraint


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserShow(SQLModel, table=True):
    """A title on a user's list with their planning preferences."""

    __tablename__ = "user_shows"
    __table_args__ = (UniqueConstraint("user_id", "tmdb_id"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True)
    tmdb_id: int
    media_type: str = "tv"
    favorite: bool = False
    watch_live: bool = False
    sort_order: Optional[int] = None
    created_at: datetime = Field(default_factory=_utcnow)


class TrackRequest(BaseModel):
    """Request body for adding a title to a user's list."""

    tmdb_id: int
    media_type: Literal["movie", "tv"] = "tv"


class FlagsUpdate(BaseModel):
    """Request body for toggling favorite / watch live."""

    favorite: bool | None = None
    watch_live: bool | None = None


class OrderUpdate(BaseModel):
    """TMDB ids in the desired display order."""

    order: list[int]
