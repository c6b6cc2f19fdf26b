"""In-memory record store."""
import copy

from ..booking import Booking
from .base import RecordStore


class MemoryStore(RecordStore):
    """Dict-backed store holding serialized snapshots.

    Values are kept in their stored (dict) form so a caller can never
    alias what the store holds.
    """

    def __init__(self, initial: dict[str, list[Booking]] | None = None):
        self._data: dict[str, list[dict]] = {}
        self._state: dict = {}
        for key, bookings in (initial or {}).items():
            self._data[key] = [b.to_dict() for b in bookings]

    async def get(self, key: str) -> list[Booking]:
        return [Booking.from_dict(d) for d in self._data.get(key, [])]

    async def set(self, key: str, bookings: list[Booking]) -> None:
        self._data[key] = [b.to_dict() for b in bookings]

    async def set_many(self, items: dict[str, list[Booking]]) -> None:
        # Serialize everything first so a bad item leaves no key written
        staged = {key: [b.to_dict() for b in bookings] for key, bookings in items.items()}
        self._data.update(staged)

    async def get_state(self) -> dict:
        return copy.deepcopy(self._state)

    async def set_state(self, state: dict) -> None:
        self._state = copy.deepcopy(state)

    def snapshot(self) -> dict[str, list[dict]]:
        """Copy of the raw stored data, keyed by store key."""
        return {key: [dict(d) for d in value] for key, value in self._data.items()}
