from __future__ import annotations

from typing import Any, AsyncContextManager, List, Protocol, Sequence

from domain.watchlist import MediaType, WatchListItem


class PoolPort(Protocol):
    """A bounded, credentialed connection pool owned by the session."""

    def acquire(self) -> AsyncContextManager[Any]:
        ...

    async def close(self) -> None:
        ...


class ConnectionManagerPort(Protocol):
    async def connect(self, username: str, password: str) -> PoolPort:
        """Open a pool for these credentials; raises StorageError."""
        ...

    async def verify(self, pool: PoolPort) -> None:
        """Check liveness, schema and read grant; raises StorageError."""
        ...


class WatchListStorePort(Protocol):
    async def list_items(self, *, limit: int) -> List[WatchListItem]:
        ...

    async def exists_duplicate(self, *, name: str, media_type: MediaType) -> bool:
        ...

    async def insert_item(self, item: WatchListItem) -> int:
        """Insert one item; returns rows affected."""
        ...

    async def delete_items(self, ids: Sequence[int]) -> int:
        """Delete by ids (already unique); returns rows affected."""
        ...
