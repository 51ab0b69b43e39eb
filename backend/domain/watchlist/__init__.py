from domain.watchlist.errors import (
    AuthenticationFailed,
    AuthenticationRequired,
    AuthorizationFailed,
    ConnectionFailed,
    DuplicateEntry,
    EmptyField,
    InvalidCharacters,
    InvalidMediaType,
    InvalidRange,
    SchemaMissing,
    StorageError,
    TooLong,
    TooManyItems,
    WatchListError,
    WatchListValidationError,
)
from domain.watchlist.sanitizer import MAX_TEXT_LENGTH, sanitize_text
from domain.watchlist.validation import (
    MAX_BATCH_DELETE_SIZE,
    MAX_NAME_LENGTH,
    MAX_RATING,
    MIN_RATING,
    collect_validation_errors,
    validate_ids_for_deletion,
    validate_name,
    validate_rating,
    validate_watch_list_item,
)
from domain.watchlist.watch_list_item import MediaType, WatchListItem, WatchListSummary, summarize

__all__ = [
    "MediaType",
    "WatchListItem",
    "WatchListSummary",
    "summarize",
    "sanitize_text",
    "MAX_TEXT_LENGTH",
    "MAX_NAME_LENGTH",
    "MIN_RATING",
    "MAX_RATING",
    "MAX_BATCH_DELETE_SIZE",
    "validate_name",
    "validate_rating",
    "validate_ids_for_deletion",
    "validate_watch_list_item",
    "collect_validation_errors",
    "WatchListError",
    "WatchListValidationError",
    "EmptyField",
    "TooLong",
    "InvalidRange",
    "InvalidCharacters",
    "TooManyItems",
    "InvalidMediaType",
    "AuthenticationRequired",
    "DuplicateEntry",
    "StorageError",
    "AuthenticationFailed",
    "AuthorizationFailed",
    "SchemaMissing",
    "ConnectionFailed",
]
