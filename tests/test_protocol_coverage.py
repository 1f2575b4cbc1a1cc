"""
Tests that the concrete classes satisfy the runtime-checkable protocols.
"""

import asyncio
from io import StringIO

import pytest

from collectlog import (
    AsyncioScheduler,
    ConsoleTransport,
    FileLogStorage,
    LogCollector,
    LoggerTransport,
    LogStorage,
    ManualScheduler,
    MemoryLogStorage,
    Scheduler,
    ThreadingScheduler,
    TimerHandle,
)


class TestProtocols:
    """Protocol conformance checks."""

    def test_transports(self):
        collector = LogCollector(MemoryLogStorage(), scheduler=ManualScheduler())

        assert isinstance(ConsoleTransport(StringIO()), LoggerTransport)
        assert isinstance(collector, LoggerTransport)

    def test_storages(self, tmp_path):
        assert isinstance(MemoryLogStorage(), LogStorage)
        with FileLogStorage(tmp_path / "out.jsonl") as storage:
            assert isinstance(storage, LogStorage)
        assert not isinstance(object(), LogStorage)

    def test_schedulers(self):
        manual = ManualScheduler()
        assert isinstance(manual, Scheduler)
        assert isinstance(ThreadingScheduler(), Scheduler)
        assert isinstance(AsyncioScheduler(), Scheduler)
        assert isinstance(manual.call_later(1, lambda: None), TimerHandle)

    @pytest.mark.asyncio
    async def test_asyncio_handles(self):
        handle = AsyncioScheduler().call_later(10, lambda: None)
        try:
            assert isinstance(handle, TimerHandle)
        finally:
            handle.cancel()

    def test_threading_handles(self):
        handle = ThreadingScheduler().call_later(10, lambda: None)
        try:
            assert isinstance(handle, TimerHandle)
        finally:
            handle.cancel()
