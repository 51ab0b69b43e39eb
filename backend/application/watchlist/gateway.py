from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Sequence, Union

from application.ports.watch_list_store_port import (
    ConnectionManagerPort,
    PoolPort,
    WatchListStorePort,
)
from application.watchlist.responses import AuthResponse, DatabaseResponse
from application.watchlist.session import SessionState
from domain.watchlist import (
    AuthorizationFailed,
    ConnectionFailed,
    DuplicateEntry,
    EmptyField,
    MediaType,
    StorageError,
    WatchListItem,
    WatchListValidationError,
    sanitize_text,
    validate_ids_for_deletion,
    validate_name,
    validate_rating,
)

logger = logging.getLogger(__name__)

LIST_LIMIT = 1000

AUTH_FAILED_MESSAGE = (
    "Authentication failed: Invalid credentials or insufficient database permissions"
)
CONNECTION_ERROR_MESSAGE = "Database connection error: Unable to connect to database."

StoreFactory = Callable[[PoolPort], WatchListStorePort]
ItemInput = Union[WatchListItem, Mapping[str, Any]]


def _storage_failure(exc: StorageError, *, action: str, fallback: str) -> DatabaseResponse:
    """Collapse a typed storage error into one of three coarse messages."""
    if isinstance(exc, AuthorizationFailed):
        return DatabaseResponse.failure(
            f"Database permission error: Insufficient privileges to {action}."
        )
    if isinstance(exc, ConnectionFailed):
        return DatabaseResponse.failure(CONNECTION_ERROR_MESSAGE)
    return DatabaseResponse.failure(fallback)


def _coerce_item(raw: ItemInput) -> WatchListItem:
    """Accept a WatchListItem or a plain mapping; media type is parsed strictly."""
    if isinstance(raw, WatchListItem):
        return WatchListItem(
            id=raw.id,
            media_type=MediaType.parse(raw.media_type),
            name=raw.name,
            rating=raw.rating,
            would_watch_again=bool(raw.would_watch_again),
        )
    if not isinstance(raw, Mapping):
        raise EmptyField("Item")
    return WatchListItem(
        id=raw.get("id"),
        media_type=MediaType.parse(raw.get("media_type")),
        name=raw.get("name") or "",
        rating=raw.get("rating"),  # type: ignore[arg-type]
        would_watch_again=bool(raw.get("would_watch_again", False)),
    )


class WatchListGateway:
    """Authenticated entry point for every watch list operation.

    Every method returns a structured response. Validation and session
    failures are detected before any network call; storage failures are
    translated at this boundary.
    """

    def __init__(
        self,
        *,
        session: SessionState,
        connections: ConnectionManagerPort,
        store_factory: StoreFactory,
    ) -> None:
        self._session = session
        self._connections = connections
        self._store_factory = store_factory

    @property
    def session(self) -> SessionState:
        return self._session

    # ===== authentication =====

    async def authenticate(self, username: str, password: str) -> AuthResponse:
        username = username or ""
        password = password or ""
        if not username.strip():
            return AuthResponse(success=False, message="Username cannot be empty")
        if not password.strip():
            return AuthResponse(success=False, message="Password cannot be empty")

        logger.info("Attempting authentication for user: %s", username)
        try:
            pool = await self._connections.connect(username, password)
        except StorageError as exc:
            logger.warning("Connection failed for user %s (%s): %s", username, exc.kind, exc)
            return AuthResponse(success=False, message=AUTH_FAILED_MESSAGE)

        try:
            await self._connections.verify(pool)
        except StorageError as exc:
            logger.warning("Permission check failed for user %s (%s): %s", username, exc.kind, exc)
            await self._close_pool(pool)
            return AuthResponse(success=False, message=AUTH_FAILED_MESSAGE)

        replaced = self._session.install(pool, username)
        if replaced is not None:
            logger.info("Closing previous connection pool after re-authentication")
            await self._close_pool(replaced)

        logger.info("Authentication successful for user: %s", username)
        return AuthResponse(success=True, message="Authentication successful")

    async def logout(self) -> AuthResponse:
        pool = self._session.clear()
        if pool is not None:
            await self._close_pool(pool)
        logger.info("Logout successful")
        return AuthResponse(success=True, message="Logged out successfully")

    @staticmethod
    async def _close_pool(pool: PoolPort) -> None:
        try:
            await pool.close()
        except StorageError as exc:
            logger.warning("Failed to close connection pool cleanly: %s", exc)

    def _store(self) -> WatchListStorePort:
        return self._store_factory(self._session.require_pool())

    # ===== data operations =====

    async def list_items(self) -> DatabaseResponse:
        logger.info("Fetching all watch list items")
        try:
            store = self._store()
        except WatchListValidationError as exc:
            return DatabaseResponse.failure(exc.message)

        try:
            items = await store.list_items(limit=LIST_LIMIT)
        except StorageError as exc:
            logger.error("Failed to retrieve watch list items: %s", exc)
            return _storage_failure(
                exc,
                action="read data",
                fallback="Failed to retrieve watch list items from database",
            )

        logger.info("Retrieved %d watch list items", len(items))
        return DatabaseResponse(
            success=True,
            message=f"Retrieved {len(items)} items successfully",
            rows_affected=len(items),
            data=items,
        )

    async def insert_item(self, item: ItemInput) -> DatabaseResponse:
        try:
            store = self._store()
            candidate = _coerce_item(item)
            name = sanitize_text(candidate.name)
            validate_name(name)
            validate_rating(candidate.rating)
            # Sanitization can empty a name (e.g. symbols only).
            if not name.strip():
                raise EmptyField("Name")
        except WatchListValidationError as exc:
            logger.info("Insert rejected: %s", exc)
            return DatabaseResponse.failure(exc.message)

        candidate = WatchListItem(
            media_type=candidate.media_type,
            name=name,
            rating=candidate.rating,
            would_watch_again=candidate.would_watch_again,
        )
        logger.info(
            "Inserting watch list item '%s' (%s) with rating %d",
            candidate.name,
            candidate.media_type.value,
            candidate.rating,
        )

        try:
            exists = await store.exists_duplicate(name=candidate.name, media_type=candidate.media_type)
        except StorageError as exc:
            logger.error("Failed to check for duplicates: %s", exc)
            return _storage_failure(
                exc,
                action="read data",
                fallback="Failed to verify uniqueness. Please try again.",
            )
        if exists:
            duplicate = DuplicateEntry(candidate.media_type.label, candidate.name)
            logger.info("Duplicate check failed: %s", duplicate)
            return DatabaseResponse.failure(duplicate.message)

        try:
            rows_affected = await store.insert_item(candidate)
        except StorageError as exc:
            logger.error("Failed to insert watch list item: %s", exc)
            return _storage_failure(
                exc,
                action="insert data",
                fallback="Failed to add item to watch list.",
            )

        logger.info("Inserted watch list item, rows affected: %d", rows_affected)
        return DatabaseResponse(
            success=True,
            message="Item added to watch list successfully",
            rows_affected=rows_affected,
        )

    async def delete_items(self, ids: Sequence[int]) -> DatabaseResponse:
        id_list = list(ids or [])
        logger.info("Deleting watch list items with ids: %s", id_list)
        try:
            store = self._store()
            validate_ids_for_deletion(id_list)
        except WatchListValidationError as exc:
            logger.info("Delete rejected: %s", exc)
            return DatabaseResponse.failure(exc.message)

        unique_ids = sorted(set(id_list))
        try:
            rows_affected = await store.delete_items(unique_ids)
        except StorageError as exc:
            logger.error("Failed to delete watch list items: %s", exc)
            return _storage_failure(
                exc,
                action="delete data",
                fallback="Failed to delete items from watch list",
            )

        logger.info("Deleted %d watch list item(s)", rows_affected)
        return DatabaseResponse(
            success=True,
            message=f"Successfully deleted {rows_affected} item(s)",
            rows_affected=rows_affected,
        )
