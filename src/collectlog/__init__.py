"""
collectlog - leveled logging with batched delivery to remote storage.

Loggers filter calls by severity and fan them out to transports. The
LogCollector transport aggregates repeated lines and periodically hands
batches to a storage sink, caching them while the sink is not ready.
"""

# Core functionality
from .core.levels import Level, LEVEL_NAMES
from .core.config import CollectorConfig, LoggerOptions
from .core.logger import CallerInfo, Logger
from .core.registry import LoggerRegistry
from .core.transports import ConsoleTransport, LoggerTransport

# Processing
from .processing.collector import LogCollector
from .processing.formatting import MessageFormatter
from .processing.scheduling import (
    AsyncioScheduler,
    ManualScheduler,
    Scheduler,
    ThreadingScheduler,
    TimerHandle,
)
from .processing.storage import (
    FileLogStorage,
    LogEntry,
    LogStorage,
    MemoryLogStorage,
    read_log_file,
)

__version__ = "0.1.0"
__all__ = [
    # Levels and configuration
    "Level",
    "LEVEL_NAMES",
    "CollectorConfig",
    "LoggerOptions",
    # Loggers
    "CallerInfo",
    "Logger",
    "LoggerRegistry",
    "ConsoleTransport",
    "LoggerTransport",
    # Collection
    "LogCollector",
    "MessageFormatter",
    "AsyncioScheduler",
    "ManualScheduler",
    "Scheduler",
    "ThreadingScheduler",
    "TimerHandle",
    "FileLogStorage",
    "LogEntry",
    "LogStorage",
    "MemoryLogStorage",
    "read_log_file",
]
