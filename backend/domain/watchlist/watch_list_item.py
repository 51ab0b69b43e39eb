from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from domain.watchlist.errors import InvalidMediaType


class MediaType(str, Enum):
    MOVIE = "movie"
    TV = "tv"

    @property
    def label(self) -> str:
        """Human wording used in user-facing messages."""
        return "movie" if self is MediaType.MOVIE else "TV show"

    @classmethod
    def parse(cls, value: object) -> "MediaType":
        """Strict parser for caller input; raises InvalidMediaType."""
        if isinstance(value, MediaType):
            return value
        tag = str(value or "").strip().lower()
        for member in cls:
            if member.value == tag:
                return member
        raise InvalidMediaType(value)

    @classmethod
    def from_stored(cls, tag: Optional[str]) -> tuple["MediaType", bool]:
        """Lenient parser for rows read back from storage.

        Returns (media_type, recognized). Unknown tags fall back to MOVIE.
        """
        try:
            return cls.parse(tag), True
        except InvalidMediaType:
            return cls.MOVIE, False


@dataclass(frozen=True)
class WatchListItem:
    """A movie or TV show on the watch list."""

    media_type: MediaType
    name: str
    rating: int
    would_watch_again: bool = False
    id: Optional[int] = None
    # Raw stored tag when it was not "movie"/"tv" (the item then reads as a movie).
    unrecognized_media_type: Optional[str] = None

    def to_dict(self) -> dict:
        out = {
            "id": self.id,
            "media_type": self.media_type.value,
            "name": self.name,
            "rating": self.rating,
            "would_watch_again": self.would_watch_again,
        }
        if self.unrecognized_media_type is not None:
            out["unrecognized_media_type"] = self.unrecognized_media_type
        return out


@dataclass(frozen=True)
class WatchListSummary:
    total: int = 0
    movies: int = 0
    tv_shows: int = 0
    would_watch_again: int = 0
    average_rating: Optional[float] = None


def summarize(items: Iterable[WatchListItem]) -> WatchListSummary:
    total = movies = tv_shows = rewatch = rating_sum = 0
    for item in items:
        total += 1
        if item.media_type is MediaType.TV:
            tv_shows += 1
        else:
            movies += 1
        if item.would_watch_again:
            rewatch += 1
        rating_sum += int(item.rating)
    return WatchListSummary(
        total=total,
        movies=movies,
        tv_shows=tv_shows,
        would_watch_again=rewatch,
        average_rating=round(rating_sum / total, 2) if total else None,
    )
