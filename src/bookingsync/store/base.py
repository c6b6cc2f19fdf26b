"""Record store abstraction.

A store maps a fixed key to an ordered sequence of bookings and keeps
one small state dict for queue bookkeeping. Every update overwrites the
whole value, so writers read-modify-write.

Implementations:
    1. MemoryStore - in-process, for tests and ephemeral use
    2. JsonFileStore - one JSON document on disk, atomic replace on write
"""
from abc import ABC, abstractmethod

from ..booking import Booking


class RecordStore(ABC):
    """Abstract base class for booking stores.

    get() never fails with "not found": an unwritten key reads as [].
    set() succeeds or fails as a whole and raises StorageError on failure.
    """

    @abstractmethod
    async def get(self, key: str) -> list[Booking]:
        """Return the sequence stored at key, or [] if never written."""
        pass

    @abstractmethod
    async def set(self, key: str, bookings: list[Booking]) -> None:
        """Durably overwrite the sequence stored at key."""
        pass

    @abstractmethod
    async def get_state(self) -> dict:
        """Return queue bookkeeping (last sync), or {} if never written."""
        pass

    @abstractmethod
    async def set_state(self, state: dict) -> None:
        """Durably overwrite queue bookkeeping. Values must be JSON types."""
        pass

    async def set_many(self, items: dict[str, list[Booking]]) -> None:
        """Overwrite several keys, in the mapping's order.

        Not atomic across keys. Stores that can commit every key in one
        write override this.
        """
        for key, bookings in items.items():
            await self.set(key, bookings)
