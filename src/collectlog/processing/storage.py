"""
Log entries and the storage sinks that receive batches of them.
"""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, Protocol, Sequence, Union, runtime_checkable

import msgspec


@dataclass
class LogEntry:
    """
    One or more consecutive identical log lines.

    ``count`` grows while the same text is logged back to back; a different
    message in between starts a new entry.
    """

    text: str
    timestamp: Any = None
    count: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@runtime_checkable
class LogStorage(Protocol):
    """Destination for batches of log entries."""

    def store_logs(self, batch: List[LogEntry]) -> None:
        ...

    def is_ready(self) -> bool:
        ...


class MemoryLogStorage:
    """Keeps every stored batch in memory. Readiness can be toggled."""

    __slots__ = ("batches", "ready")

    def __init__(self, ready: bool = True):
        self.batches: List[List[LogEntry]] = []
        self.ready = ready

    def store_logs(self, batch: List[LogEntry]) -> None:
        self.batches.append(list(batch))

    def is_ready(self) -> bool:
        return self.ready

    def entries(self) -> List[LogEntry]:
        """All stored entries, in storage order."""
        return [entry for batch in self.batches for entry in batch]

    def texts(self) -> List[str]:
        return [entry.text for entry in self.entries()]

    def clear(self) -> None:
        self.batches.clear()


def _encode_as_text(obj: Any) -> Any:
    """Write timestamps msgspec cannot encode as their str() form."""
    return str(obj)


class FileLogStorage:
    """
    Appends entries to a JSON-lines file.

    Each entry becomes one line holding ``text``, ``timestamp`` and
    ``count``. The storage is ready while the file is open.
    """

    __slots__ = ("_path", "_file", "_encoder")

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._file: Optional[BinaryIO] = open(self._path, "ab")
        self._encoder = msgspec.json.Encoder(enc_hook=_encode_as_text)

    @property
    def path(self) -> Path:
        return self._path

    def is_ready(self) -> bool:
        return self._file is not None and not self._file.closed

    def store_logs(self, batch: Sequence[LogEntry]) -> None:
        if self._file is None:
            raise ValueError(f"Log file {self._path} is closed")
        if not batch:
            return
        self._file.write(self._encoder.encode_lines(batch))
        self._file.flush()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def read_log_file(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Decode a file written by FileLogStorage into a list of mappings."""
    with open(path, "rb") as f:
        return [msgspec.json.decode(line) for line in f if line.strip()]
