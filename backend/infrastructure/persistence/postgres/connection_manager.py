from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any, AsyncIterator, Optional
from urllib.parse import quote

import asyncpg

from domain.watchlist import SchemaMissing
from infrastructure.persistence.postgres.errors import DRIVER_ERRORS, translate_error

logger = logging.getLogger(__name__)

WATCH_LIST_SCHEMA = "public"
WATCH_LIST_TABLE = "watch_list"


class ManagedPool:
    """An asyncpg pool plus the bookkeeping asyncpg does not do for us.

    asyncpg has no maximum connection lifetime, so a background task expires
    every pooled connection once per `max_lifetime_s`; expired connections
    are replaced the next time they are released.
    """

    def __init__(self, pool: Any, *, acquire_timeout_s: float, max_lifetime_s: float) -> None:
        self._pool = pool
        self._acquire_timeout_s = acquire_timeout_s
        self._max_lifetime_s = max_lifetime_s
        self._recycle_task: Optional[asyncio.Task] = None

    def start_recycling(self) -> None:
        if self._recycle_task is None and self._max_lifetime_s > 0:
            self._recycle_task = asyncio.create_task(self._recycle_forever())

    async def _recycle_forever(self) -> None:
        while True:
            await asyncio.sleep(self._max_lifetime_s)
            logger.debug("Expiring pooled connections older than %.0fs", self._max_lifetime_s)
            await self._pool.expire_connections()

    @contextlib.asynccontextmanager
    async def acquire(self) -> AsyncIterator[Any]:
        try:
            conn = await self._pool.acquire(timeout=self._acquire_timeout_s)
        except DRIVER_ERRORS as exc:
            raise translate_error(exc, context="acquire connection") from exc
        try:
            yield conn
        finally:
            await self._pool.release(conn)

    async def close(self) -> None:
        if self._recycle_task is not None:
            self._recycle_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._recycle_task
            self._recycle_task = None
        try:
            await self._pool.close()
        except DRIVER_ERRORS as exc:
            raise translate_error(exc, context="close pool") from exc
        logger.info("Connection pool closed")


class PostgresConnectionManager:
    """Opens and vets credentialed pools for the watch list database."""

    def __init__(
        self,
        *,
        host: str = "localhost",
        port: int = 5432,
        database: str = "defaultdb",
        sslmode: str = "require",
        pool_min_size: int = 1,
        pool_max_size: int = 5,
        acquire_timeout_s: float = 10.0,
        idle_timeout_s: float = 300.0,
        max_lifetime_s: float = 1800.0,
    ) -> None:
        self.host = host
        self.port = int(port)
        self.database = database
        self.sslmode = sslmode
        self.pool_min_size = int(pool_min_size)
        self.pool_max_size = int(pool_max_size)
        self.acquire_timeout_s = float(acquire_timeout_s)
        self.idle_timeout_s = float(idle_timeout_s)
        self.max_lifetime_s = float(max_lifetime_s)

    def build_database_url(self, username: str, password: str) -> str:
        return (
            f"postgresql://{quote(username, safe='')}:{quote(password, safe='')}"
            f"@{self.host}:{self.port}/{self.database}?sslmode={self.sslmode}"
        )

    async def connect(self, username: str, password: str) -> ManagedPool:
        try:
            pool = await asyncpg.create_pool(
                self.build_database_url(username, password),
                min_size=min(self.pool_min_size, self.pool_max_size),
                max_size=self.pool_max_size,
                timeout=self.acquire_timeout_s,
                max_inactive_connection_lifetime=self.idle_timeout_s,
            )
        except DRIVER_ERRORS + (ValueError,) as exc:
            # ValueError: malformed DSN pieces from config.
            raise translate_error(exc, context="connect") from exc

        managed = ManagedPool(
            pool,
            acquire_timeout_s=self.acquire_timeout_s,
            max_lifetime_s=self.max_lifetime_s,
        )
        managed.start_recycling()
        logger.info(
            "PostgreSQL pool opened for %s@%s:%s/%s (max_size=%d)",
            username,
            self.host,
            self.port,
            self.database,
            self.pool_max_size,
        )
        return managed

    async def verify(self, pool: ManagedPool) -> None:
        """Liveness, then table presence, then read grant.

        The three steps fail with different StorageError subclasses so that
        bad credentials, a missing table and a missing grant stay apart in logs.
        """
        async with pool.acquire() as conn:
            try:
                await conn.fetchval("SELECT 1")
                exists = await conn.fetchval(
                    """
                    SELECT EXISTS (
                        SELECT FROM information_schema.tables
                        WHERE table_schema = $1
                          AND table_name = $2
                    );
                    """,
                    WATCH_LIST_SCHEMA,
                    WATCH_LIST_TABLE,
                )
                if not exists:
                    raise SchemaMissing(f"verify: table {WATCH_LIST_SCHEMA}.{WATCH_LIST_TABLE} not found")
                await conn.fetchval(f"SELECT COUNT(*) FROM {WATCH_LIST_TABLE}")
            except DRIVER_ERRORS as exc:
                raise translate_error(exc, context="verify") from exc
