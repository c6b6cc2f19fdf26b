"""Tests for the record stores."""
import asyncio
import json
import os

import pytest

from bookingsync.core.constants import PENDING_KEY, SYNCED_KEY
from bookingsync.core.errors import SchemaError, StorageError
from bookingsync.store.base import RecordStore
from bookingsync.store.json_file import JsonFileStore
from bookingsync.store.memory import MemoryStore
from conftest import make_booking


def run(coro):
    return asyncio.run(coro)


class TestMemoryStore:
    """Test the in-memory store."""

    def test_unwritten_key_is_empty(self, memory_store):
        """get on a never-written key returns []."""
        assert run(memory_store.get(PENDING_KEY)) == []

    def test_overwrite(self, memory_store):
        """set replaces the whole sequence."""
        run(memory_store.set(PENDING_KEY, [make_booking("a"), make_booking("b")]))
        run(memory_store.set(PENDING_KEY, [make_booking("c")]))

        assert [b.id for b in run(memory_store.get(PENDING_KEY))] == ["c"]

    def test_returned_list_not_aliased(self, memory_store):
        """Mutating a returned list does not touch the store."""
        run(memory_store.set(PENDING_KEY, [make_booking("a")]))
        got = run(memory_store.get(PENDING_KEY))
        got.append(make_booking("b"))

        assert len(run(memory_store.get(PENDING_KEY))) == 1


class TestDefaultSetMany:
    """Test the RecordStore.set_many fallback."""

    def test_writes_in_mapping_order(self):
        """Keys are written one by one in the given order."""

        class RecordingStore(RecordStore):
            def __init__(self):
                self.order = []

            async def get(self, key):
                return []

            async def set(self, key, bookings):
                self.order.append(key)

            async def get_state(self):
                return {}

            async def set_state(self, state):
                pass

        store = RecordingStore()
        run(store.set_many({SYNCED_KEY: [], PENDING_KEY: []}))

        assert store.order == [SYNCED_KEY, PENDING_KEY]


class TestJsonFileStore:
    """Test the JSON document store."""

    @pytest.fixture
    def store(self, tmp_path) -> JsonFileStore:
        return JsonFileStore(tmp_path / "data" / "store.json")

    def test_missing_file_reads_empty(self, store):
        """A store that was never written reads as empty."""
        assert run(store.get(PENDING_KEY)) == []
        assert not store.path.exists()

    def test_survives_reopen(self, store):
        """Data written by one instance is read by another."""
        run(store.set(PENDING_KEY, [make_booking("a", "Jane")]))

        reopened = JsonFileStore(store.path)
        got = run(reopened.get(PENDING_KEY))

        assert [b.id for b in got] == ["a"]
        assert got[0].customer_name == "Jane"

    def test_set_many_writes_both_keys(self, store):
        """Both keys land in one document."""
        run(store.set_many({
            SYNCED_KEY: [make_booking("s").mark_synced()],
            PENDING_KEY: [make_booking("p")],
        }))

        doc = json.loads(store.path.read_text())
        assert [d["id"] for d in doc[PENDING_KEY]] == ["p"]
        assert [d["id"] for d in doc[SYNCED_KEY]] == ["s"]
        assert doc[SYNCED_KEY][0]["isSynced"] is True

    def test_set_keeps_other_keys(self, store):
        """Writing one key leaves the other untouched."""
        run(store.set(SYNCED_KEY, [make_booking("s").mark_synced()]))
        run(store.set(PENDING_KEY, [make_booking("p")]))

        assert [b.id for b in run(store.get(SYNCED_KEY))] == ["s"]

    def test_no_temp_files_left(self, store):
        """Atomic writes clean up after themselves."""
        run(store.set(PENDING_KEY, [make_booking("a")]))

        leftovers = [p.name for p in store.path.parent.iterdir() if p.name.endswith(".tmp")]
        assert leftovers == []

    def test_corrupt_file_raises(self, store):
        """Unparseable JSON raises StorageError."""
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{not json")

        with pytest.raises(StorageError, match="Corrupt"):
            run(store.get(PENDING_KEY))

    def test_invalid_utf8_raises(self, store):
        """Bytes that are not UTF-8 raise StorageError, not UnicodeDecodeError."""
        store.path.parent.mkdir(parents=True)
        store.path.write_bytes(b'{"rw_pending_bookings": ["\xff\xfe"]}')

        with pytest.raises(StorageError, match="Corrupt"):
            run(store.get(PENDING_KEY))

    def test_non_ascii_names_round_trip(self, store):
        """Names outside ASCII are written and read as UTF-8."""
        run(store.set(PENDING_KEY, [make_booking("a", "Zoë Åkesson")]))

        assert run(store.get(PENDING_KEY))[0].customer_name == "Zoë Åkesson"

    def test_non_object_document_raises(self, store):
        """A top-level JSON list is not a store document."""
        store.path.parent.mkdir(parents=True)
        store.path.write_text("[]")

        with pytest.raises(StorageError):
            run(store.get(PENDING_KEY))

    def test_malformed_booking_raises_schema_error(self, store):
        """A stored booking without an id raises SchemaError."""
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps({PENDING_KEY: [{"customerName": "Jane"}]}))

        with pytest.raises(SchemaError):
            run(store.get(PENDING_KEY))

    def test_failed_replace_keeps_previous_document(self, store, monkeypatch):
        """A failing write raises and leaves the old document in place."""
        run(store.set(PENDING_KEY, [make_booking("a")]))
        before = store.path.read_bytes()

        def broken_replace(src, dst):
            raise OSError("read-only file system")

        monkeypatch.setattr(os, "replace", broken_replace)

        with pytest.raises(StorageError):
            run(store.set(PENDING_KEY, [make_booking("b")]))

        monkeypatch.undo()
        assert store.path.read_bytes() == before
        leftovers = [p.name for p in store.path.parent.iterdir() if p.name.endswith(".tmp")]
        assert leftovers == []


class TestStoreState:
    """Test queue bookkeeping state."""

    def test_memory_state_round_trip(self, memory_store):
        assert run(memory_store.get_state()) == {}

        run(memory_store.set_state({"last_sync": {"synced_count": 2}}))
        state = run(memory_store.get_state())
        state["last_sync"]["synced_count"] = 99

        assert run(memory_store.get_state()) == {"last_sync": {"synced_count": 2}}

    def test_file_state_survives_reopen(self, tmp_path):
        """State is read back by a fresh instance and leaves bookings alone."""
        path = tmp_path / "store.json"
        run(JsonFileStore(path).set(PENDING_KEY, [make_booking("a")]))
        run(JsonFileStore(path).set_state({"last_sync": {"batch_id": "b1"}}))

        reopened = JsonFileStore(path)
        assert run(reopened.get_state()) == {"last_sync": {"batch_id": "b1"}}
        assert [b.id for b in run(reopened.get(PENDING_KEY))] == ["a"]

    def test_file_state_not_an_object(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text(json.dumps({"rw_sync_state": []}))

        with pytest.raises(SchemaError):
            run(JsonFileStore(path).get_state())
