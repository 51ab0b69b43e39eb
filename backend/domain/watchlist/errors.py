from __future__ import annotations

from typing import Optional


class WatchListError(Exception):
    """Base error for the watch list gateway.

    `message` is always safe to show to the end user.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


# ===== Validation / session errors (detected locally, never reach the store) =====


class WatchListValidationError(WatchListError):
    pass


class EmptyField(WatchListValidationError):
    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"{field} cannot be empty")


class TooLong(WatchListValidationError):
    def __init__(self, field: str, max_length: int) -> None:
        self.field = field
        self.max_length = max_length
        super().__init__(f"{field} cannot exceed {max_length} characters")


class InvalidRange(WatchListValidationError):
    def __init__(self, field: str, value: object, minimum: int, maximum: int) -> None:
        self.field = field
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"{field} value {value} is invalid. Must be between {minimum} and {maximum}"
        )


class InvalidCharacters(WatchListValidationError):
    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(
            f"{field} contains invalid characters. "
            "Only letters, numbers, spaces, and basic punctuation are allowed"
        )


class TooManyItems(WatchListValidationError):
    def __init__(self, field: str, max_items: int) -> None:
        self.field = field
        self.max_items = max_items
        super().__init__(f"{field} cannot exceed {max_items} items")


class InvalidMediaType(WatchListValidationError):
    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid media type: {value}. Must be 'movie' or 'tv'")


class AuthenticationRequired(WatchListValidationError):
    def __init__(self) -> None:
        super().__init__("Authentication required. Please login first.")


class DuplicateEntry(WatchListValidationError):
    def __init__(self, media_label: str, name: str) -> None:
        self.media_label = media_label
        self.name = name
        super().__init__(
            f"A {media_label} with the name '{name}' already exists in your watch list"
        )


# ===== Storage errors (raised by the persistence layer only) =====


class StorageError(WatchListError):
    """Opaque lower-level failure. Subclasses say which class of failure it was."""

    kind = "storage"

    def __init__(self, message: str = "Database operation failed", *, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class AuthenticationFailed(StorageError):
    """The server rejected the credentials."""

    kind = "authentication"


class AuthorizationFailed(StorageError):
    """Credentials were accepted but a required grant is missing."""

    kind = "authorization"


class SchemaMissing(StorageError):
    """The expected table does not exist (or is invisible to this role)."""

    kind = "schema"


class ConnectionFailed(StorageError):
    """Network, TLS or timeout failure talking to the server."""

    kind = "connection"
