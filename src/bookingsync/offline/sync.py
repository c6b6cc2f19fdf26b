"""Sync pass: push Pending bookings to the remote and re-partition.

Sync process:
1. Read Pending and Synced snapshots
2. Return without writing if Pending is empty
3. Drop Pending entries already present in Synced (half-committed pass)
   and repeated ids after their first occurrence
4. Submit each remaining booking in order, bounded by a timeout
5. Accepted bookings are appended to Synced as new synced copies;
   everything else stays Pending in its original order
6. Re-read Pending and carry over bookings saved since step 1
7. Write Synced and Pending in one set_many call

Step 7 is the only write. A pass interrupted before it leaves the last
committed Pending/Synced pair untouched and the next pass starts over.
"""
import asyncio
import logging
import uuid
from dataclasses import asdict, dataclass, field

from ..booking import Booking
from ..core.constants import (
    MAX_CONCURRENCY_DEFAULT,
    PENDING_KEY,
    SUBMIT_TIMEOUT_SECONDS,
    SYNCED_KEY,
)
from ..core.receipt import emit_receipt, utc_now_iso
from ..store.base import RecordStore
from .channel import SubmissionChannel, SubmitOutcome

logger = logging.getLogger("bookingsync.sync")


@dataclass
class SyncResult:
    """Outcome of one sync pass. Per-record failures are counted, never raised."""
    batch_id: str
    attempted: int = 0
    synced_ids: list[str] = field(default_factory=list)
    pending_ids: list[str] = field(default_factory=list)
    rejected: int = 0
    unreachable: int = 0
    reconciled: int = 0
    duplicates: int = 0
    late_arrivals: int = 0
    skipped: bool = False
    finished_at: str | None = None

    @property
    def synced_count(self) -> int:
        return len(self.synced_ids)

    @property
    def pending_count(self) -> int:
        return len(self.pending_ids)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["synced_count"] = self.synced_count
        data["pending_count"] = self.pending_count
        return data


class Synchronizer:
    """Moves bookings from Pending to Synced as the remote confirms them.

    Not safe to run concurrently with another writer of the same store
    keys; BookingQueue serializes callers.
    """

    def __init__(
        self,
        store: RecordStore,
        channel: SubmissionChannel,
        submit_timeout: float = SUBMIT_TIMEOUT_SECONDS,
        max_concurrency: int = MAX_CONCURRENCY_DEFAULT,
        tenant_id: str = "default",
    ):
        self.store = store
        self.channel = channel
        self.submit_timeout = submit_timeout
        self.max_concurrency = max_concurrency
        self.tenant_id = tenant_id

    async def sync_pending(self) -> SyncResult:
        """Run one sync pass.

        Returns:
            SyncResult describing the pass

        Raises:
            StorageError: If reading or writing either store fails
        """
        result = SyncResult(batch_id=str(uuid.uuid4()))

        pending = await self.store.get(PENDING_KEY)
        synced = await self.store.get(SYNCED_KEY)

        if not pending:
            result.skipped = True
            result.finished_at = utc_now_iso()
            emit_receipt("sync_skipped", {
                "tenant_id": self.tenant_id,
                "batch_id": result.batch_id,
                "reason": "queue_empty",
            })
            return result

        synced_ids = {b.id for b in synced}
        seen_ids: set[str] = set()
        to_submit: list[Booking] = []
        for booking in pending:
            if booking.id in synced_ids:
                result.reconciled += 1
            elif booking.id in seen_ids:
                result.duplicates += 1
            else:
                seen_ids.add(booking.id)
                to_submit.append(booking)
        if result.reconciled:
            logger.warning(
                "Dropping %d pending booking(s) already present in synced store",
                result.reconciled,
            )
        if result.duplicates:
            logger.warning(
                "Dropping %d repeated pending booking id(s); first copy kept",
                result.duplicates,
            )

        outcomes = await self._submit_all(to_submit)
        result.attempted = len(to_submit)

        still_pending: list[Booking] = []
        new_synced = list(synced)
        for booking, outcome in zip(to_submit, outcomes):
            if outcome is SubmitOutcome.ACCEPTED:
                new_synced.append(booking.mark_synced())
                result.synced_ids.append(booking.id)
            else:
                still_pending.append(booking)
                if outcome is SubmitOutcome.REJECTED:
                    result.rejected += 1
                else:
                    result.unreachable += 1

        late = await self._late_arrivals(pending, synced_ids)
        result.late_arrivals = len(late)
        still_pending.extend(late)
        result.pending_ids = [b.id for b in still_pending]

        await self._commit(still_pending, new_synced)
        result.finished_at = utc_now_iso()

        logger.info(
            "Sync pass %s: %d synced, %d pending (%d rejected, %d unreachable)",
            result.batch_id, result.synced_count, result.pending_count,
            result.rejected, result.unreachable,
        )
        emit_receipt("sync_pass", {
            "tenant_id": self.tenant_id,
            "batch_id": result.batch_id,
            "attempted": result.attempted,
            "synced_count": result.synced_count,
            "pending_count": result.pending_count,
            "rejected": result.rejected,
            "unreachable": result.unreachable,
            "reconciled": result.reconciled,
            "duplicates": result.duplicates,
            "late_arrivals": result.late_arrivals,
        })
        return result

    async def _submit_all(self, bookings: list[Booking]) -> list[SubmitOutcome]:
        """Submit bookings, returning outcomes in input order."""
        if self.max_concurrency <= 1:
            outcomes = []
            for booking in bookings:
                outcomes.append(await self._submit_one(booking))
            return outcomes

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def bounded(booking: Booking) -> SubmitOutcome:
            async with semaphore:
                return await self._submit_one(booking)

        return list(await asyncio.gather(*(bounded(b) for b in bookings)))

    async def _submit_one(self, booking: Booking) -> SubmitOutcome:
        """Submit one booking. Timeouts and exceptions count as UNREACHABLE."""
        try:
            outcome = await asyncio.wait_for(
                self.channel.submit(booking), timeout=self.submit_timeout
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Submission of %s timed out after %.1fs", booking.id, self.submit_timeout
            )
            return SubmitOutcome.UNREACHABLE
        except Exception as e:
            logger.warning("Submission of %s raised %s: %s", booking.id, type(e).__name__, e)
            return SubmitOutcome.UNREACHABLE

        if not isinstance(outcome, SubmitOutcome):
            logger.warning("Channel returned %r for %s", outcome, booking.id)
            return SubmitOutcome.UNREACHABLE
        if outcome is SubmitOutcome.REJECTED:
            logger.warning("Remote rejected %s; kept pending", booking.id)
        return outcome

    async def _late_arrivals(
        self, snapshot: list[Booking], synced_ids: set[str]
    ) -> list[Booking]:
        """Bookings appended to Pending after the step-1 snapshot, in order."""
        seen = {b.id for b in snapshot} | synced_ids
        current = await self.store.get(PENDING_KEY)
        late = [b for b in current if b.id not in seen]
        if late:
            logger.info("Carrying over %d booking(s) saved during the pass", len(late))
        return late

    async def _commit(self, still_pending: list[Booking], synced: list[Booking]) -> None:
        # Synced before Pending: a lost second write duplicates, never drops
        await self.store.set_many({
            SYNCED_KEY: synced,
            PENDING_KEY: still_pending,
        })
