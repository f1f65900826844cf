"""Tests for the history log"""
import json
from datetime import datetime, timezone

from multitimer.models.history import HistoryEntry
from multitimer.repositories.history import HISTORY_KEY, HistoryRepository
from multitimer.services.history import HistoryLog

from tests.conftest import FlakyStore


def entry(name: str, minute: int = 0) -> HistoryEntry:
    return HistoryEntry(name=name, completed_at=datetime(2025, 1, 1, 9, minute, tzinfo=timezone.utc))


async def test_load_absent_history_is_empty(history):
    assert await history.load() == []


async def test_append_inserts_newest_first_and_persists(history, store):
    await history.append(entry("First", 1))
    await history.append(entry("Second", 2))

    assert [e.name for e in history.entries()] == ["Second", "First"]
    document = json.loads(store._data[HISTORY_KEY])
    assert [record["name"] for record in document] == ["Second", "First"]


async def test_history_survives_reload(store):
    first = HistoryLog(HistoryRepository(store))
    await first.append(entry("Tea", 5))

    second = HistoryLog(HistoryRepository(store))
    loaded = await second.load()

    assert [e.name for e in loaded] == ["Tea"]
    assert loaded[0].completed_at == datetime(2025, 1, 1, 9, 5, tzinfo=timezone.utc)


async def test_loads_legacy_documents():
    store = FlakyStore({HISTORY_KEY: json.dumps([{"name": "Egg", "completedAt": 1700000000000}])})
    history = HistoryLog(HistoryRepository(store))

    loaded = await history.load()

    assert loaded[0].name == "Egg"
    assert loaded[0].completed_at.year == 2023


async def test_clear_empties_and_persists(history, store):
    await history.append(entry("Tea"))

    assert await history.clear() is True

    assert history.entries() == []
    assert json.loads(store._data[HISTORY_KEY]) == []


async def test_entries_are_snapshots(history):
    await history.append(entry("Tea"))
    entries = history.entries()
    entries.clear()
    assert len(history.entries()) == 1


async def test_failed_write_keeps_entry(history, store):
    store.fail_writes = True

    assert await history.append(entry("Tea")) is False

    assert [e.name for e in history.entries()] == ["Tea"]
    assert HISTORY_KEY not in store._data


async def test_unreadable_history_starts_empty(store):
    store._data[HISTORY_KEY] = "not json"
    history = HistoryLog(HistoryRepository(store))

    assert await history.load() == []


async def test_unreadable_records_are_skipped_not_restamped(store):
    store._data[HISTORY_KEY] = json.dumps([
        {"name": "New", "completedAt": "2025-05-01T12:00:00Z"},
        {"name": "Lost"},
        {"name": "Old", "time": "4/30/2025, 8:15:00 AM"},
    ])
    history = HistoryLog(HistoryRepository(store))

    loaded = await history.load()

    assert [e.name for e in loaded] == ["New", "Old"]
    assert loaded[1].completed_at == datetime(2025, 4, 30, 8, 15, tzinfo=timezone.utc)
