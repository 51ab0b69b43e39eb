from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from domain.watchlist import WatchListItem, sanitize_text


class LoginRequest(BaseModel):
    """Credentials for the watch list database; never stored."""
    username: str = ""
    password: str = ""


class AuthResponseOut(BaseModel):
    success: bool
    message: str


class AuthStatusOut(BaseModel):
    authenticated: bool
    username: Optional[str] = None


class WatchListItemIn(BaseModel):
    """Insert payload. `name` is sanitized while the request is parsed."""
    media_type: str = Field(..., description="movie | tv")
    name: str = ""
    rating: int
    would_watch_again: bool = False

    @field_validator("name", mode="before")
    @classmethod
    def _sanitize_name(cls, value):
        if not isinstance(value, str):
            return value
        return sanitize_text(value)


class WatchListItemOut(BaseModel):
    id: Optional[int] = None
    media_type: str
    name: str
    rating: int
    would_watch_again: bool
    unrecognized_media_type: Optional[str] = None

    @classmethod
    def from_item(cls, item: WatchListItem) -> "WatchListItemOut":
        return cls(**item.to_dict())


class DatabaseResponseOut(BaseModel):
    success: bool
    message: str
    rows_affected: int = 0
    data: Optional[List[WatchListItemOut]] = None


class DeleteRequest(BaseModel):
    ids: List[int] = Field(default_factory=list)


class ValidateRequest(BaseModel):
    name: str = ""
    rating: int = 0


class ValidateResponse(BaseModel):
    valid: bool
    errors: List[str] = Field(default_factory=list)


class WatchListSummaryOut(BaseModel):
    total: int = 0
    movies: int = 0
    tv_shows: int = 0
    would_watch_again: int = 0
    average_rating: Optional[float] = None


class SummaryResponse(BaseModel):
    success: bool
    message: str
    summary: Optional[WatchListSummaryOut] = None
