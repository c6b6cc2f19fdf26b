"""
bookingsync - Offline-first booking synchronization

Bookings are saved to a durable local Pending store and pushed to the
booking service when it is reachable. Confirmed bookings move to the
Synced store; failed ones stay Pending for the next pass.

Invariants:
    Every saved booking is in exactly one of Pending or Synced
    A sync pass writes once, at the end, or not at all
"""

__version__ = "0.1.0"

from bookingsync.booking import Booking, new_booking
from bookingsync.config import SyncConfig
from bookingsync.core.errors import BookingSyncError, ConfigError, SchemaError, StorageError
from bookingsync.offline.channel import HttpSubmissionChannel, SubmissionChannel, SubmitOutcome
from bookingsync.offline.queue import BookingQueue
from bookingsync.offline.sync import Synchronizer, SyncResult
from bookingsync.store import JsonFileStore, MemoryStore, RecordStore

__all__ = [
    "Booking",
    "new_booking",
    "SyncConfig",
    "BookingQueue",
    "Synchronizer",
    "SyncResult",
    "SubmissionChannel",
    "HttpSubmissionChannel",
    "SubmitOutcome",
    "RecordStore",
    "JsonFileStore",
    "MemoryStore",
    "BookingSyncError",
    "StorageError",
    "SchemaError",
    "ConfigError",
    "__version__",
]
