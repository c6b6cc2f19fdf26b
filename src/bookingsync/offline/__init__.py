"""Offline-first booking queue.

Bookings save locally. Sync happens when connectivity allows.
A failed submission leaves the booking queued, never lost.

Usage:
    from bookingsync.offline import BookingQueue

    queue = BookingQueue.from_config()

    # Save while offline
    await queue.save(new_booking(customer_name="Jane", service_type="Wash"))

    # Sync when connected
    if is_connected():
        result = await queue.sync_pending()
"""
from .channel import (
    HttpSubmissionChannel,
    SubmissionChannel,
    SubmitOutcome,
    classify_status,
)
from .query import Page, filter_bookings, paginate
from .queue import BookingQueue
from .reconnect import ReconnectStatus, handle_reconnection, is_connected
from .sync import Synchronizer, SyncResult

__all__ = [
    # Queue
    "BookingQueue",
    # Sync
    "Synchronizer",
    "SyncResult",
    # Submission
    "SubmissionChannel",
    "HttpSubmissionChannel",
    "SubmitOutcome",
    "classify_status",
    # Reconnection
    "is_connected",
    "handle_reconnection",
    "ReconnectStatus",
    # Listing
    "Page",
    "filter_bookings",
    "paginate",
]
