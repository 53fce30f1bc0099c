import json
import tempfile
import unittest
from pathlib import Path

from dailyquiz.app.events import HISTORY_CHANGED, PERSISTENCE_WARNING, EventBus
from dailyquiz.errors import PersistenceWarning
from dailyquiz.results.history import HISTORY_KEY, HistoryStore
from dailyquiz.results.schema import dump_history, parse_history
from dailyquiz.storage.store import JsonFileStore, MemoryStore, StorageError

from tests.helpers import make_result


class FailingStore(MemoryStore):
    def set(self, key: str, value: str) -> None:
        raise StorageError("disk full")


class UnreadableStore(MemoryStore):
    def get(self, key: str):
        raise StorageError("permission denied")


def _bus_with(event: str):
    bus = EventBus()
    seen = []
    bus.subscribe(event, seen.append)
    return bus, seen


class SerializationTests(unittest.TestCase):
    def test_round_trip_is_lossless(self) -> None:
        results = [make_result(1, 1, 2), make_result(2, 0, 3), make_result(3, 5, 5)]
        self.assertEqual(parse_history(dump_history(results)), results)

    def test_stored_layout_uses_camel_case(self) -> None:
        [entry] = json.loads(dump_history([make_result(1, 1, 2)]))
        self.assertEqual(
            set(entry),
            {"id", "date", "score", "totalQuestions", "attemptNumber", "questionResults"},
        )
        self.assertEqual(
            set(entry["questionResults"][0]),
            {"id", "question", "correctAnswer", "selectedAnswer"},
        )
        self.assertIsNone(entry["questionResults"][1]["selectedAnswer"])

    def test_empty_history_round_trip(self) -> None:
        self.assertEqual(parse_history(dump_history([])), [])


class HistoryStoreTests(unittest.TestCase):
    def test_missing_blob_loads_empty(self) -> None:
        bus, warnings = _bus_with(PERSISTENCE_WARNING)
        h = HistoryStore(MemoryStore(), bus=bus)
        self.assertEqual(h.load(), ())
        self.assertEqual(h.next_attempt_number, 1)
        self.assertEqual(warnings, [])

    def test_corrupt_blob_loads_empty_with_warning(self) -> None:
        for blob in ("{not json", '{"a": 1}', '[{"score": "many"}]'):
            bus, warnings = _bus_with(PERSISTENCE_WARNING)
            h = HistoryStore(MemoryStore({HISTORY_KEY: blob}), bus=bus)
            self.assertEqual(h.load(), ())
            self.assertEqual(len(warnings), 1)
            self.assertIsInstance(warnings[0], PersistenceWarning)
            self.assertEqual(warnings[0].operation, "load")

    def test_unreadable_store_loads_empty(self) -> None:
        bus, warnings = _bus_with(PERSISTENCE_WARNING)
        h = HistoryStore(UnreadableStore(), bus=bus)
        self.assertEqual(h.load(), ())
        self.assertEqual(len(warnings), 1)

    def test_append_persists_whole_sequence(self) -> None:
        store = MemoryStore()
        h = HistoryStore(store)
        h.load()
        a, b = make_result(1), make_result(2)
        h.append(a)
        h.append(b)
        self.assertEqual(parse_history(store.get(HISTORY_KEY)), [a, b])

    def test_reload_in_new_process(self) -> None:
        store = MemoryStore()
        h = HistoryStore(store)
        h.load()
        results = [make_result(1, 1, 2), make_result(2, 2, 2)]
        for r in results:
            h.append(r)

        h2 = HistoryStore(store)
        self.assertEqual(list(h2.load()), results)
        self.assertEqual(h2.next_attempt_number, 3)

    def test_remove_only_matching_entry(self) -> None:
        store = MemoryStore()
        h = HistoryStore(store)
        h.load()
        a, b, c = make_result(1), make_result(2), make_result(3)
        for r in (a, b, c):
            h.append(r)

        self.assertTrue(h.remove(b.id))

        self.assertEqual(h.entries, (a, c))
        self.assertEqual(parse_history(store.get(HISTORY_KEY)), [a, c])

    def test_remove_unknown_id(self) -> None:
        h = HistoryStore(MemoryStore())
        h.load()
        h.append(make_result(1))
        self.assertFalse(h.remove("nope"))
        self.assertEqual(len(h), 1)

    def test_write_failure_is_swallowed(self) -> None:
        bus, warnings = _bus_with(PERSISTENCE_WARNING)
        h = HistoryStore(FailingStore(), bus=bus)
        h.load()
        r = make_result(1)
        h.append(r)
        self.assertEqual(h.entries, (r,))
        self.assertEqual(h.next_attempt_number, 2)
        self.assertEqual([w.operation for w in warnings], ["save"])
        self.assertFalse(h.persist())

    def test_attempt_numbers_continue_from_stored_count(self) -> None:
        store = MemoryStore({HISTORY_KEY: dump_history([make_result(i) for i in (1, 2, 3)])})
        h = HistoryStore(store)
        h.load()
        assigned = []
        for _ in range(4):
            n = h.next_attempt_number
            assigned.append(n)
            h.append(make_result(n))
        self.assertEqual(assigned, [4, 5, 6, 7])

    def test_changes_are_announced(self) -> None:
        bus, seen = _bus_with(HISTORY_CHANGED)
        h = HistoryStore(MemoryStore(), bus=bus)
        h.load()
        h.append(make_result(1))
        self.assertEqual(len(seen), 2)
        self.assertEqual(len(seen[-1]), 1)

    def test_get_by_id(self) -> None:
        h = HistoryStore(MemoryStore())
        h.load()
        r = make_result(1)
        h.append(r)
        self.assertIs(h.get(r.id), r)
        self.assertIsNone(h.get("missing"))


class JsonFileStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "nested" / "store.json"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_history_survives_restart(self) -> None:
        h = HistoryStore(JsonFileStore(self.path))
        h.load()
        results = [make_result(1, 2, 2), make_result(2, 0, 2)]
        for r in results:
            h.append(r)

        h2 = HistoryStore(JsonFileStore(self.path))
        self.assertEqual(list(h2.load()), results)

    def test_other_slots_are_kept(self) -> None:
        store = JsonFileStore(self.path)
        store.set("other", "value")
        store.set(HISTORY_KEY, "[]")
        self.assertEqual(store.get("other"), "value")
        store.delete("other")
        self.assertIsNone(store.get("other"))
        self.assertEqual(store.get(HISTORY_KEY), "[]")

    def test_corrupt_file_loads_empty_history(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text("garbage", encoding="utf-8")
        bus, warnings = _bus_with(PERSISTENCE_WARNING)
        h = HistoryStore(JsonFileStore(self.path), bus=bus)
        self.assertEqual(h.load(), ())
        self.assertEqual(len(warnings), 1)

        h.append(make_result(1))
        self.assertEqual(len(HistoryStore(JsonFileStore(self.path)).load()), 1)

    def test_corrupt_file_raises_storage_error(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text("[1, 2]", encoding="utf-8")
        with self.assertRaises(StorageError):
            JsonFileStore(self.path).get(HISTORY_KEY)


if __name__ == "__main__":
    unittest.main()
