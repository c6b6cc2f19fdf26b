"""Exception hierarchy for bookingsync.

Submission failures are never raised from a sync pass; only the errors
below cross the public API.
"""


class BookingSyncError(Exception):
    """Base class for all bookingsync errors."""
    pass


class StorageError(BookingSyncError):
    """Raised when a store read or write fails. Never caught silently."""
    pass


class SchemaError(StorageError):
    """Raised when stored booking data does not match the booking schema."""
    pass


class ConfigError(BookingSyncError):
    """Raised when a SyncConfig fails validation."""
    pass
