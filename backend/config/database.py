import os
from dataclasses import dataclass


def _get_env_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {key} must be an integer, got {raw}") from exc


def _get_env_float(key: str, default: float) -> float:
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {key} must be a number, got {raw}") from exc


@dataclass(frozen=True)
class DatabaseSettings:
    """Where the watch list lives and how hard we try to reach it.

    Credentials are not part of it: they come from the user at login.
    """

    host: str = "localhost"
    port: int = 5432
    database: str = "defaultdb"
    sslmode: str = "require"
    pool_min_size: int = 1
    pool_max_size: int = 5
    acquire_timeout_s: float = 10.0
    idle_timeout_s: float = 300.0
    max_lifetime_s: float = 1800.0


def load_database_settings() -> DatabaseSettings:
    """Service-side accessor for the watch list database location and pool bounds.

    Notes:
    - Lives under `config.*` so the server layer can consume it without
      importing infrastructure; the connection manager receives plain values.
    - `.env` loading is centralized in `config.settings`; this only reads
      environment variables.
    """
    defaults = DatabaseSettings()
    return DatabaseSettings(
        host=(os.getenv("WATCHLIST_DB_HOST") or "").strip() or defaults.host,
        port=_get_env_int("WATCHLIST_DB_PORT", defaults.port),
        database=(os.getenv("WATCHLIST_DB_NAME") or "").strip() or defaults.database,
        sslmode=(os.getenv("WATCHLIST_DB_SSLMODE") or "").strip() or defaults.sslmode,
        pool_min_size=_get_env_int("WATCHLIST_POOL_MIN_SIZE", defaults.pool_min_size),
        pool_max_size=_get_env_int("WATCHLIST_POOL_MAX_SIZE", defaults.pool_max_size),
        acquire_timeout_s=_get_env_float("WATCHLIST_POOL_ACQUIRE_TIMEOUT_S", defaults.acquire_timeout_s),
        idle_timeout_s=_get_env_float("WATCHLIST_POOL_IDLE_TIMEOUT_S", defaults.idle_timeout_s),
        max_lifetime_s=_get_env_float("WATCHLIST_POOL_MAX_LIFETIME_S", defaults.max_lifetime_s),
    )
