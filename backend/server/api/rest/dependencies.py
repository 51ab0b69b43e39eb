from __future__ import annotations

import logging
from functools import lru_cache

from application.watchlist.gateway import WatchListGateway
from application.watchlist.session import SessionState

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _build_gateway() -> WatchListGateway:
    from dataclasses import asdict

    from config.database import load_database_settings
    from infrastructure.persistence.postgres.connection_manager import PostgresConnectionManager
    from infrastructure.persistence.postgres.watch_list_store import PostgresWatchListStore

    return WatchListGateway(
        session=SessionState(),
        connections=PostgresConnectionManager(**asdict(load_database_settings())),
        store_factory=PostgresWatchListStore,
    )


def get_watch_list_gateway() -> WatchListGateway:
    return _build_gateway()


async def shutdown_dependencies() -> None:
    # Only tear down what was actually built.
    if _build_gateway.cache_info().currsize:
        await _build_gateway().logout()
        logger.info("Watch list session closed on shutdown")
