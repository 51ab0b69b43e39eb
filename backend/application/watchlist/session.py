from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional, Union

from application.ports.watch_list_store_port import PoolPort
from domain.watchlist import AuthenticationRequired


@dataclass(frozen=True)
class Unauthenticated:
    pass


@dataclass(frozen=True)
class Authenticated:
    pool: PoolPort
    username: str


SessionValue = Union[Unauthenticated, Authenticated]

UNAUTHENTICATED = Unauthenticated()


class SessionState:
    """Process-wide record of who is logged in and which pool is live.

    Pool and authentication flag are one immutable value, swapped under a
    single lock, so no reader ever sees one without the other. The lock is a
    plain `threading.Lock`: it is only held for the swap and never across an
    await. Closing a pool that was swapped out is the caller's job.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value: SessionValue = UNAUTHENTICATED

    def snapshot(self) -> SessionValue:
        with self._lock:
            return self._value

    @property
    def is_authenticated(self) -> bool:
        return isinstance(self.snapshot(), Authenticated)

    @property
    def username(self) -> Optional[str]:
        value = self.snapshot()
        return value.username if isinstance(value, Authenticated) else None

    def require_pool(self) -> PoolPort:
        value = self.snapshot()
        if not isinstance(value, Authenticated):
            raise AuthenticationRequired()
        return value.pool

    def install(self, pool: PoolPort, username: str) -> Optional[PoolPort]:
        """Make `pool` the live session; returns the pool it replaced, if any."""
        with self._lock:
            previous = self._value
            self._value = Authenticated(pool=pool, username=username)
        return previous.pool if isinstance(previous, Authenticated) else None

    def clear(self) -> Optional[PoolPort]:
        """Return to Unauthenticated; returns the pool that was live, if any."""
        with self._lock:
            previous = self._value
            self._value = UNAUTHENTICATED
        return previous.pool if isinstance(previous, Authenticated) else None
