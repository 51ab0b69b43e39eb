from __future__ import annotations

import asyncio
import logging

from asyncpg import exceptions as pg_exc

from domain.watchlist import (
    AuthenticationFailed,
    AuthorizationFailed,
    ConnectionFailed,
    SchemaMissing,
    StorageError,
)

logger = logging.getLogger(__name__)

# Exceptions worth translating; anything else is a programming error and propagates.
DRIVER_ERRORS = (
    pg_exc.PostgresError,
    pg_exc.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)

_AUTHENTICATION = (
    pg_exc.InvalidPasswordError,
    pg_exc.InvalidAuthorizationSpecificationError,
)
_AUTHORIZATION = (pg_exc.InsufficientPrivilegeError,)
_SCHEMA = (
    pg_exc.UndefinedTableError,
    pg_exc.InvalidSchemaNameError,
    pg_exc.InvalidCatalogNameError,
)
_CONNECTION = (
    pg_exc.PostgresConnectionError,
    pg_exc.CannotConnectNowError,
    pg_exc.TooManyConnectionsError,
    pg_exc.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


def translate_error(exc: BaseException, *, context: str) -> StorageError:
    """Map a driver exception onto the typed StorageError family."""
    if isinstance(exc, StorageError):
        return exc
    if isinstance(exc, _AUTHENTICATION):
        return AuthenticationFailed(f"{context}: credentials rejected", cause=exc)
    if isinstance(exc, _AUTHORIZATION):
        return AuthorizationFailed(f"{context}: permission denied", cause=exc)
    if isinstance(exc, _SCHEMA):
        return SchemaMissing(f"{context}: relation or database missing", cause=exc)
    if isinstance(exc, _CONNECTION):
        return ConnectionFailed(f"{context}: connection failure ({type(exc).__name__})", cause=exc)
    logger.debug("Untyped database error during %s: %r", context, exc)
    return StorageError(f"{context}: {type(exc).__name__}", cause=exc)
