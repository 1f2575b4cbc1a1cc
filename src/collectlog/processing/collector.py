"""
Batching log transport that delivers aggregated log lines to a storage sink.
"""

import logging
import threading
from dataclasses import replace
from functools import partial
from typing import Any, Dict, List, Optional, Tuple

from ..core.config import CollectorConfig
from ..core.levels import Level
from .formatting import MessageFormatter, stringify_json
from .scheduling import Scheduler, ThreadingScheduler, TimerHandle
from .storage import LogEntry, LogStorage


_diagnostics = logging.getLogger(__name__)


class LogCollector:
    """
    Log transport that batches messages for a LogStorage.

    Register it as a global transport to capture every log call. Each call is
    formatted into a line of text; a line identical to the previous one only
    increments that entry's count. Batches are handed to the storage when
    the periodic timer fires, when flush() is called, or as soon as the
    queued text length reaches ``max_entry_length``.

    While the storage is not ready, periodic flushes leave the queue alone.
    Size-triggered flushes move the queue into an output cache instead, and
    cached batches are delivered ahead of the live queue once the storage
    reports ready.
    """

    __slots__ = (
        "_storage",
        "_config",
        "_formatter",
        "_scheduler",
        "_timer",
        "_generation",
        "_queue",
        "_total_len",
        "_output_cache",
        "_lock",
        "_flush_lock",
        "_stats",
    )

    def __init__(
        self,
        storage: LogStorage,
        config: Optional[CollectorConfig] = None,
        scheduler: Optional[Scheduler] = None,
        **options: Any,
    ):
        """
        Initialize collector.

        Args:
            storage: Sink receiving the batches
            config: Batching configuration
            scheduler: Timer source, threading timers by default
            **options: CollectorConfig fields overriding ``config``
        """
        config = config or CollectorConfig()
        if options:
            config = replace(config, **options)

        self._storage = storage
        self._config = config
        self._formatter = MessageFormatter(
            stringify_objects=config.stringify_objects, stringify=self.stringify
        )
        self._scheduler = scheduler or ThreadingScheduler()
        self._timer: Optional[TimerHandle] = None
        self._generation = 0
        self._queue: List[LogEntry] = []
        self._total_len = 0
        self._output_cache: List[List[LogEntry]] = []
        self._lock = threading.RLock()
        self._flush_lock = threading.RLock()
        self._stats = {
            "messages_received": 0,
            "messages_aggregated": 0,
            "flush_attempts": 0,
            "batches_stored": 0,
            "batches_cached": 0,
            "store_errors": 0,
            "readiness_errors": 0,
        }

    @property
    def config(self) -> CollectorConfig:
        return self._config

    @property
    def storage(self) -> LogStorage:
        return self._storage

    @property
    def queue(self) -> Tuple[LogEntry, ...]:
        with self._lock:
            return tuple(self._queue)

    @property
    def total_length(self) -> int:
        return self._total_len

    @property
    def output_cache(self) -> Tuple[Tuple[LogEntry, ...], ...]:
        with self._lock:
            return tuple(tuple(batch) for batch in self._output_cache)

    @property
    def is_running(self) -> bool:
        return self._timer is not None

    def get_stats(self) -> Dict[str, Any]:
        """Get collector counters and current buffer sizes."""
        with self._lock:
            return {
                **self._stats,
                "queued_entries": len(self._queue),
                "total_length": self._total_len,
                "cached_batches": len(self._output_cache),
                "running": self._timer is not None,
            }

    # Transport interface

    def trace(self, timestamp: Any = None, *args: Any) -> None:
        self._log(Level.TRACE, timestamp, *args)

    def debug(self, timestamp: Any = None, *args: Any) -> None:
        self._log(Level.DEBUG, timestamp, *args)

    def info(self, timestamp: Any = None, *args: Any) -> None:
        self._log(Level.INFO, timestamp, *args)

    def log(self, timestamp: Any = None, *args: Any) -> None:
        self._log(Level.LOG, timestamp, *args)

    def warn(self, timestamp: Any = None, *args: Any) -> None:
        self._log(Level.WARN, timestamp, *args)

    def error(self, timestamp: Any = None, *args: Any) -> None:
        self._log(Level.ERROR, timestamp, *args)

    # Formatting hooks, overridable by subclasses

    def stringify(self, obj: Any) -> str:
        """Render an object argument as JSON, never raising."""
        return stringify_json(obj)

    def format_log_message(
        self, level: Level, timestamp: Any = None, *args: Any
    ) -> Optional[str]:
        """
        Format a log call into the text stored in the queue.

        Returns:
            Non-empty text, or None to discard the message
        """
        return self._formatter.format(level, timestamp, *args)

    # Lifecycle

    def start(self) -> None:
        """Start the periodic store task."""
        self._reschedule()

    def stop(self) -> None:
        """
        Stop the periodic store task and store pending entries.

        The final flush is not forced, so with a storage that is not ready
        the entries stay queued until the collector is started again.
        """
        self._cancel_timer()
        self._flush(force=False, reschedule=False)

    def flush(self) -> None:
        """Store the queued entries now if the storage is ready."""
        self._flush(force=False, reschedule=True)

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()

    # Internals

    def _log(self, level: Level, timestamp: Any, *args: Any) -> None:
        try:
            self._submit(level, timestamp, *args)
        except Exception:
            _diagnostics.warning("Failed to collect a %s message", level.value, exc_info=True)

    def _submit(self, level: Level, timestamp: Any, *args: Any) -> None:
        msg = self.format_log_message(level, timestamp, *args)
        if not msg:
            return

        with self._lock:
            self._stats["messages_received"] += 1
            previous = self._queue[-1] if self._queue else None
            if previous is not None and previous.text == msg:
                previous.count += 1
                self._stats["messages_aggregated"] += 1
            else:
                self._queue.append(LogEntry(text=msg, timestamp=timestamp, count=1))
                self._total_len += len(msg)
            overflow = self._total_len >= self._config.max_entry_length

        if overflow:
            self._flush(force=True, reschedule=True)

    def _flush(
        self, force: bool, reschedule: bool, generation: Optional[int] = None
    ) -> None:
        """
        Store the current batch.

        Args:
            force: Take the batch even when the storage is not ready, caching
                it for later delivery
            reschedule: Arm the next periodic flush afterwards
            generation: Timer generation that started this flush; the
                timer is only re-armed while it is still current
        """
        with self._flush_lock:
            if self._total_len > 0:
                self._stats["flush_attempts"] += 1
                ready = self._storage_ready()
                if ready or force:
                    with self._lock:
                        batch = self._queue
                        self._queue = []
                        self._total_len = 0
                        if ready:
                            cached = self._output_cache
                            self._output_cache = []
                        else:
                            self._output_cache.append(batch)
                            self._stats["batches_cached"] += 1

                    if ready:
                        for cached_batch in cached:
                            self._store(cached_batch)
                        self._store(batch)

            if reschedule:
                self._reschedule(generation)

    def _storage_ready(self) -> bool:
        try:
            return bool(self._storage.is_ready())
        except Exception:
            self._stats["readiness_errors"] += 1
            _diagnostics.warning("Log storage readiness check failed", exc_info=True)
            return False

    def _store(self, batch: List[LogEntry]) -> None:
        try:
            self._storage.store_logs(batch)
            self._stats["batches_stored"] += 1
        except Exception:
            self._stats["store_errors"] += 1
            _diagnostics.warning(
                "Log storage failed to store a batch of %d entries",
                len(batch),
                exc_info=True,
            )

    def _reschedule(self, generation: Optional[int] = None) -> None:
        with self._lock:
            # stop() or another reschedule ran while this timer was flushing
            if generation is not None and generation != self._generation:
                return
            self._cancel_timer()
            self._timer = self._scheduler.call_later(
                self._config.store_interval, partial(self._on_timer, self._generation)
            )

    def _cancel_timer(self) -> None:
        with self._lock:
            self._generation += 1
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()

    def _on_timer(self, generation: int) -> None:
        with self._lock:
            # A timer cancelled or replaced after it started firing
            if generation != self._generation or self._timer is None:
                return
            self._timer = None
        self._flush(force=False, reschedule=True, generation=generation)
