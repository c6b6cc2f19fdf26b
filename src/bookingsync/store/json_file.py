"""Durable record store backed by a single JSON document.

Every key lives in one file, so set_many() commits Pending and Synced
together. Queue state sits in the same document under its own key.
Writes go to a temp file in the same directory and are
os.replace()d over the target, which is atomic on POSIX. An exclusive
fcntl lock on a sidecar file serializes writers across processes.
"""
import asyncio
import fcntl
import json
import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from ..booking import Booking
from ..core.constants import DEFAULT_STORE_PATH, STATE_KEY, STORE_LOCK_SUFFIX
from ..core.errors import SchemaError, StorageError
from .base import RecordStore

logger = logging.getLogger("bookingsync.store")


class JsonFileStore(RecordStore):
    """Store every key in one JSON file.

    Attributes:
        path: Path to the JSON document
    """

    def __init__(self, path: str | Path = DEFAULT_STORE_PATH):
        self.path = Path(path).expanduser()
        self._lock_path = self.path.with_name(self.path.name + STORE_LOCK_SUFFIX)

    async def get(self, key: str) -> list[Booking]:
        doc = await asyncio.to_thread(self._read_locked)
        raw = doc.get(key, [])
        if not isinstance(raw, list):
            raise SchemaError(f"Value at {key!r} must be a list")
        return [Booking.from_dict(d) for d in raw]

    async def set(self, key: str, bookings: list[Booking]) -> None:
        await self.set_many({key: bookings})

    async def set_many(self, items: dict[str, list[Booking]]) -> None:
        staged = {key: [b.to_dict() for b in bookings] for key, bookings in items.items()}
        await asyncio.to_thread(self._update_locked, staged)

    async def get_state(self) -> dict:
        doc = await asyncio.to_thread(self._read_locked)
        state = doc.get(STATE_KEY, {})
        if not isinstance(state, dict):
            raise SchemaError(f"Value at {STATE_KEY!r} must be an object")
        return state

    async def set_state(self, state: dict) -> None:
        await asyncio.to_thread(self._update_locked, {STATE_KEY: dict(state)})

    @contextmanager
    def _lock(self, exclusive: bool) -> Iterator[None]:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            f = open(self._lock_path, "a")
        except OSError as e:
            raise StorageError(f"Cannot open lock file {self._lock_path}: {e}") from e
        with f:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH)
            try:
                yield
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)

    def _read_doc(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                doc = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise StorageError(f"Corrupt store file {self.path}: {e}") from e
        except OSError as e:
            raise StorageError(f"Cannot read store file {self.path}: {e}") from e
        if not isinstance(doc, dict):
            raise StorageError(f"Store file {self.path} must hold a JSON object")
        return doc

    def _read_locked(self) -> dict:
        with self._lock(exclusive=False):
            return self._read_doc()

    def _update_locked(self, staged: dict) -> None:
        with self._lock(exclusive=True):
            doc = self._read_doc()
            doc.update(staged)
            self._write_doc(doc)
        logger.debug("Wrote %s to %s", sorted(staged), self.path)

    def _write_doc(self, doc: dict) -> None:
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=self.path.name + ".",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                json.dump(doc, tmp, indent=2, sort_keys=True)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Cannot write store file {self.path}: {e}") from e
