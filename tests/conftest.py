"""Test configuration and fixtures for the booking sync queue.

ScriptedChannel: submission channel with per-id outcomes
DedupRemote: remote that registers each id once
Fixtures: bookings, stores and queues for unit and scenario tests
"""
import asyncio
from datetime import datetime, timezone

import pytest

from bookingsync.booking import Booking
from bookingsync.config import SyncConfig
from bookingsync.core.errors import StorageError
from bookingsync.offline.channel import SubmissionChannel, SubmitOutcome
from bookingsync.offline.queue import BookingQueue
from bookingsync.store.memory import MemoryStore

HANG = "hang"


class ScriptedChannel(SubmissionChannel):
    """Returns a scripted outcome per booking id.

    An outcome may be a SubmitOutcome, an exception instance to raise,
    or HANG to never complete.
    """

    def __init__(self, outcomes: dict | None = None, default=SubmitOutcome.ACCEPTED):
        self.outcomes = outcomes or {}
        self.default = default
        self.calls: list[str] = []

    async def submit(self, booking: Booking) -> SubmitOutcome:
        self.calls.append(booking.id)
        outcome = self.outcomes.get(booking.id, self.default)
        if isinstance(outcome, Exception):
            raise outcome
        if outcome == HANG:
            await asyncio.sleep(3600)
        return outcome


class DedupRemote(SubmissionChannel):
    """Remote that deduplicates by id: a repeat id is 'already exists'."""

    def __init__(self):
        self.bookings: dict[str, Booking] = {}
        self.duplicates = 0

    async def submit(self, booking: Booking) -> SubmitOutcome:
        if booking.id in self.bookings:
            self.duplicates += 1
            return SubmitOutcome.ACCEPTED
        self.bookings[booking.id] = booking
        return SubmitOutcome.ACCEPTED


class CrashingStore(MemoryStore):
    """Memory store whose final commit fails before writing anything."""

    async def set_many(self, items):
        raise StorageError("disk unplugged")


def make_booking(booking_id: str, name: str = "", **kwargs) -> Booking:
    """Deterministic booking for tests."""
    return Booking(
        id=booking_id,
        customer_name=name,
        appointment_at=kwargs.pop("appointment_at", datetime(2026, 11, 2, 9, 30, tzinfo=timezone.utc)),
        created_at=kwargs.pop("created_at", datetime(2026, 10, 1, 8, 0, tzinfo=timezone.utc)),
        **kwargs,
    )


@pytest.fixture
def memory_store() -> MemoryStore:
    """Provide an empty MemoryStore."""
    return MemoryStore()


@pytest.fixture
def channel() -> ScriptedChannel:
    """Provide a channel that accepts everything by default."""
    return ScriptedChannel()


@pytest.fixture
def config(tmp_path) -> SyncConfig:
    """Provide a config pointing at a temporary store."""
    return SyncConfig(store_path=str(tmp_path / "store.json"), submit_timeout=1.0)


@pytest.fixture
def queue(memory_store, channel, config) -> BookingQueue:
    """Provide a BookingQueue over the memory store and scripted channel."""
    return BookingQueue(memory_store, channel, config)
