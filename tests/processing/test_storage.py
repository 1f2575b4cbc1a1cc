"""
Tests for log entries and storage sinks.
"""

from datetime import datetime, timezone

import pytest

from collectlog import FileLogStorage, LogEntry, MemoryLogStorage, read_log_file


class TestLogEntry:
    """Test the LogEntry record."""

    def test_defaults(self):
        entry = LogEntry("text")
        assert entry.timestamp is None
        assert entry.count == 1

    def test_to_dict(self):
        entry = LogEntry("text", "ts", 3)
        assert entry.to_dict() == {"text": "text", "timestamp": "ts", "count": 3}


class TestMemoryLogStorage:
    """Test the in-memory sink."""

    def test_records_batches(self):
        storage = MemoryLogStorage()
        batch = [LogEntry("a"), LogEntry("b", count=2)]

        storage.store_logs(batch)
        batch.clear()

        assert len(storage.batches) == 1
        assert storage.texts() == ["a", "b"]
        assert storage.entries()[1].count == 2

    def test_readiness_toggle(self):
        storage = MemoryLogStorage(ready=False)
        assert storage.is_ready() is False

        storage.ready = True
        assert storage.is_ready() is True

    def test_clear(self):
        storage = MemoryLogStorage()
        storage.store_logs([LogEntry("a")])
        storage.clear()
        assert storage.batches == []


class TestFileLogStorage:
    """Test the JSON-lines file sink."""

    def test_writes_one_line_per_entry(self, tmp_path):
        path = tmp_path / "logs" / "collected.jsonl"
        timestamp = datetime(2024, 1, 1, tzinfo=timezone.utc)

        with FileLogStorage(path) as storage:
            assert storage.is_ready()
            storage.store_logs([LogEntry("first", timestamp, 2), LogEntry("second")])
            storage.store_logs([LogEntry("third", "raw")])

        records = read_log_file(path)
        assert records == [
            {"text": "first", "timestamp": "2024-01-01T00:00:00Z", "count": 2},
            {"text": "second", "timestamp": None, "count": 1},
            {"text": "third", "timestamp": "raw", "count": 1},
        ]

    def test_appends_to_existing_file(self, tmp_path):
        path = tmp_path / "collected.jsonl"

        with FileLogStorage(path) as storage:
            storage.store_logs([LogEntry("one")])
        with FileLogStorage(path) as storage:
            storage.store_logs([LogEntry("two")])

        assert [r["text"] for r in read_log_file(path)] == ["one", "two"]

    def test_empty_batch_writes_nothing(self, tmp_path):
        path = tmp_path / "collected.jsonl"

        with FileLogStorage(path) as storage:
            storage.store_logs([])

        assert path.read_bytes() == b""

    def test_closed_storage(self, tmp_path):
        storage = FileLogStorage(tmp_path / "collected.jsonl")
        storage.close()
        storage.close()

        assert storage.is_ready() is False
        with pytest.raises(ValueError):
            storage.store_logs([LogEntry("late")])

    def test_unknown_timestamp_types_are_stringified(self, tmp_path):
        path = tmp_path / "collected.jsonl"

        class Tick:
            def __str__(self):
                return "tick-7"

        with FileLogStorage(path) as storage:
            storage.store_logs([LogEntry("x", Tick())])

        assert read_log_file(path)[0]["timestamp"] == "tick-7"
