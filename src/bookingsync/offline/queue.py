"""Local booking queue for offline operation.

BookingQueue owns the Pending and Synced keys of one store. Bookings are
saved to Pending while offline and moved to Synced by sync passes once the
remote confirms them.

Design constraints:
- One writer per store key: save() and sync_pending() share a lock
- Whole-sequence read-modify-write on every update
- No validation of booking content at this layer
"""
import asyncio
import logging

from ..booking import Booking, format_ts
from ..config import SyncConfig
from ..core.constants import PENDING_KEY, SYNCED_KEY
from ..core.errors import ConfigError
from ..core.receipt import emit_receipt
from ..store.base import RecordStore
from ..store.json_file import JsonFileStore
from .channel import HttpSubmissionChannel, SubmissionChannel
from .sync import Synchronizer, SyncResult

logger = logging.getLogger("bookingsync.queue")


class BookingQueue:
    """Offline-first booking queue.

    Attributes:
        store: Durable store holding both keys
        channel: Remote submission channel
        config: Active configuration
    """

    def __init__(
        self,
        store: RecordStore,
        channel: SubmissionChannel,
        config: SyncConfig | None = None,
    ):
        self.config = config or SyncConfig()
        errors = self.config.validate()
        if errors:
            raise ConfigError("; ".join(errors))

        self.store = store
        self.channel = channel
        self.synchronizer = Synchronizer(
            store,
            channel,
            submit_timeout=self.config.submit_timeout,
            max_concurrency=self.config.max_concurrency,
            tenant_id=self.config.tenant_id,
        )
        self._lock = asyncio.Lock()

    @classmethod
    def from_config(cls, config: SyncConfig | None = None) -> "BookingQueue":
        """Build a queue backed by a JSON file store and the HTTP channel."""
        config = config or SyncConfig.from_env()
        store = JsonFileStore(config.store_path)
        channel = HttpSubmissionChannel(
            config.endpoint,
            api_token=config.api_token,
            timeout=config.submit_timeout,
        )
        return cls(store, channel, config)

    async def save(self, booking: Booking) -> Booking:
        """Append booking to Pending.

        Args:
            booking: Unsynced booking to queue

        Returns:
            The queued booking

        Raises:
            ValueError: If booking is already marked synced
            StorageError: If the store read or write fails
        """
        if booking.is_synced:
            raise ValueError(f"Booking {booking.id} is already synced")

        async with self._lock:
            pending = await self.store.get(PENDING_KEY)
            pending.append(booking)
            await self.store.set(PENDING_KEY, pending)

        logger.debug("Queued booking %s (%d pending)", booking.id, len(pending))
        emit_receipt("booking_saved", {
            "tenant_id": self.config.tenant_id,
            "booking_id": booking.id,
            "service_type": booking.service_type,
            "queue_size": len(pending),
        })
        return booking

    async def get_pending(self) -> list[Booking]:
        """Bookings awaiting remote confirmation, oldest first."""
        return await self.store.get(PENDING_KEY)

    async def get_synced(self) -> list[Booking]:
        """Bookings confirmed by the remote, in confirmation order."""
        return await self.store.get(SYNCED_KEY)

    async def sync_pending(self) -> SyncResult:
        """Run one sync pass. Saves issued meanwhile wait for it to finish.

        A pass that did any work is recorded as last_sync in the store's
        state, so status() reports it from any process.

        Raises:
            StorageError: If reading or writing either store fails
        """
        async with self._lock:
            result = await self.synchronizer.sync_pending()
            if not result.skipped:
                state = await self.store.get_state()
                state["last_sync"] = {
                    "batch_id": result.batch_id,
                    "finished_at": result.finished_at,
                    "synced_count": result.synced_count,
                    "pending_count": result.pending_count,
                }
                await self.store.set_state(state)
        return result

    async def status(self) -> dict:
        """Get current queue status.

        Returns:
            Dict with pending_count, synced_count, oldest_pending_at, last_sync
        """
        pending = await self.get_pending()
        synced = await self.get_synced()
        state = await self.store.get_state()
        oldest = min((b.created_at for b in pending), default=None)
        return {
            "pending_count": len(pending),
            "synced_count": len(synced),
            "oldest_pending_at": format_ts(oldest) if oldest else None,
            "last_sync": state.get("last_sync"),
        }
