"""Batching, formatting, scheduling and storage of collected logs."""

from .collector import LogCollector
from .formatting import MessageFormatter
from .scheduling import AsyncioScheduler, ManualScheduler, Scheduler, ThreadingScheduler
from .storage import FileLogStorage, LogEntry, LogStorage, MemoryLogStorage

__all__ = [
    "LogCollector",
    "MessageFormatter",
    "AsyncioScheduler",
    "ManualScheduler",
    "Scheduler",
    "ThreadingScheduler",
    "FileLogStorage",
    "LogEntry",
    "LogStorage",
    "MemoryLogStorage",
]
