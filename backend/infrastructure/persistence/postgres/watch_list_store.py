from __future__ import annotations

import logging
from typing import Any, List, Mapping, Sequence

from domain.watchlist import MediaType, WatchListItem, sanitize_text
from infrastructure.persistence.postgres.connection_manager import WATCH_LIST_TABLE, ManagedPool
from infrastructure.persistence.postgres.errors import DRIVER_ERRORS, translate_error

logger = logging.getLogger(__name__)


def placeholders(count: int, *, start: int = 1) -> str:
    """`$1, $2, ...` for `count` bound values; values are never inlined."""
    if count <= 0:
        raise ValueError("placeholders() needs at least one value")
    return ", ".join(f"${i}" for i in range(start, start + count))


def rows_affected(status: str) -> int:
    """Parse the affected-row count from a command tag like "DELETE 3" / "INSERT 0 1"."""
    try:
        return int((status or "").rsplit(" ", 1)[-1])
    except ValueError:
        return 0


def row_to_item(row: Mapping[str, Any]) -> WatchListItem:
    """Total mapping from a stored row; malformed fields degrade instead of failing."""
    raw_tag = row.get("media_type")
    media_type, recognized = MediaType.from_stored(raw_tag)
    if not recognized:
        logger.warning(
            "watch_list row %s has unrecognized media_type %r; reading it as a movie",
            row.get("id"),
            raw_tag,
        )
    try:
        rating = int(row.get("rating") or 0)
    except (TypeError, ValueError):
        rating = 0
    return WatchListItem(
        id=row.get("id"),
        media_type=media_type,
        name=sanitize_text(str(row.get("name") or "")),
        rating=rating,
        would_watch_again=bool(row.get("would_watch_again")),
        unrecognized_media_type=None if recognized else str(raw_tag),
    )


class PostgresWatchListStore:
    """Postgres-backed watch list queries (asyncpg), bound to the session pool."""

    def __init__(self, pool: ManagedPool) -> None:
        self._pool = pool

    async def list_items(self, *, limit: int = 1000) -> List[WatchListItem]:
        try:
            async with self._pool.acquire() as conn:
                rows = await conn.fetch(
                    f"""
                    SELECT id, media_type, name, rating, would_watch_again
                    FROM {WATCH_LIST_TABLE}
                    ORDER BY id
                    LIMIT $1
                    """,
                    int(limit),
                )
        except DRIVER_ERRORS as exc:
            raise translate_error(exc, context="list items") from exc
        return [row_to_item(dict(r)) for r in rows]

    async def exists_duplicate(self, *, name: str, media_type: MediaType) -> bool:
        try:
            async with self._pool.acquire() as conn:
                exists = await conn.fetchval(
                    f"""
                    SELECT EXISTS(
                        SELECT 1 FROM {WATCH_LIST_TABLE}
                        WHERE LOWER(TRIM(name)) = LOWER(TRIM($1))
                          AND media_type = $2
                    )
                    """,
                    name,
                    media_type.value,
                )
        except DRIVER_ERRORS as exc:
            raise translate_error(exc, context="duplicate check") from exc
        return bool(exists)

    async def insert_item(self, item: WatchListItem) -> int:
        try:
            async with self._pool.acquire() as conn:
                status = await conn.execute(
                    f"""
                    INSERT INTO {WATCH_LIST_TABLE} (media_type, name, rating, would_watch_again)
                    VALUES ($1, $2, $3, $4)
                    """,
                    item.media_type.value,
                    item.name,
                    int(item.rating),
                    bool(item.would_watch_again),
                )
        except DRIVER_ERRORS as exc:
            raise translate_error(exc, context="insert item") from exc
        return rows_affected(status)

    async def delete_items(self, ids: Sequence[int]) -> int:
        values = [int(i) for i in ids]
        sql = f"DELETE FROM {WATCH_LIST_TABLE} WHERE id IN ({placeholders(len(values))})"
        try:
            async with self._pool.acquire() as conn:
                status = await conn.execute(sql, *values)
        except DRIVER_ERRORS as exc:
            raise translate_error(exc, context="delete items") from exc
        return rows_affected(status)
