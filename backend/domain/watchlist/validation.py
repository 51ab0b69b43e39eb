from __future__ import annotations

import re
from typing import Sequence

from domain.watchlist.errors import (
    EmptyField,
    InvalidCharacters,
    InvalidRange,
    TooLong,
    TooManyItems,
    WatchListValidationError,
)
from domain.watchlist.watch_list_item import WatchListItem

MAX_NAME_LENGTH = 200
MIN_RATING = 1
MAX_RATING = 10
MAX_BATCH_DELETE_SIZE = 100
# `watch_list.id` is a 32-bit serial.
MAX_ID = 2**31 - 1

# Stricter than what the sanitizer lets through: no quotes, angle brackets or
# slashes. Escaped entities (`&amp;`, `&quot;`, ...) only use letters, `&`, `;`.
NAME_PATTERN = re.compile(r"^[a-zA-Z0-9\s.,!?\-_()':;&]+$")


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_name(name: str) -> None:
    trimmed = name.strip() if isinstance(name, str) else ""
    if not trimmed:
        raise EmptyField("Name")
    if len(trimmed) > MAX_NAME_LENGTH:
        raise TooLong("Name", MAX_NAME_LENGTH)
    if not NAME_PATTERN.match(trimmed):
        raise InvalidCharacters("Name")


def validate_rating(rating: int) -> None:
    if not _is_int(rating) or rating < MIN_RATING or rating > MAX_RATING:
        raise InvalidRange("Rating", rating, MIN_RATING, MAX_RATING)


def validate_ids_for_deletion(ids: Sequence[int]) -> None:
    if not ids:
        raise EmptyField("ID list")
    if len(ids) > MAX_BATCH_DELETE_SIZE:
        raise TooManyItems("ID list", MAX_BATCH_DELETE_SIZE)
    for item_id in ids:
        if not _is_int(item_id) or item_id <= 0 or item_id > MAX_ID:
            raise InvalidRange("ID", item_id, 1, MAX_ID)


def validate_watch_list_item(item: WatchListItem) -> None:
    validate_name(item.name)
    validate_rating(item.rating)


def collect_validation_errors(*, name: str, rating: int) -> list[WatchListValidationError]:
    """Run every field check and return all failures instead of the first one."""
    errors: list[WatchListValidationError] = []
    for check, value in ((validate_name, name), (validate_rating, rating)):
        try:
            check(value)
        except WatchListValidationError as exc:
            errors.append(exc)
    return errors
