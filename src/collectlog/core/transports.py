"""
Transport protocol and the default console transport.
"""

import sys
from datetime import date, datetime
from typing import Any, Optional, Protocol, TextIO, runtime_checkable

from .levels import Level


@runtime_checkable
class LoggerTransport(Protocol):
    """
    Receiver of log calls, one method per severity.

    Every method is called with the timestamp of the log call followed by
    the decorated log arguments.
    """

    def trace(self, timestamp: Any, *args: Any) -> None:
        ...

    def debug(self, timestamp: Any, *args: Any) -> None:
        ...

    def info(self, timestamp: Any, *args: Any) -> None:
        ...

    def log(self, timestamp: Any, *args: Any) -> None:
        ...

    def warn(self, timestamp: Any, *args: Any) -> None:
        ...

    def error(self, timestamp: Any, *args: Any) -> None:
        ...


class ConsoleTransport:
    """
    Writes each log call as a single space-separated line to a text stream.

    The stream defaults to ``sys.stderr`` and is looked up at write time, so
    stream redirection (e.g. by pytest's capsys) is honoured.
    """

    __slots__ = ("_stream", "_show_level")

    def __init__(self, stream: Optional[TextIO] = None, show_level: bool = True):
        self._stream = stream
        self._show_level = show_level

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def trace(self, timestamp: Any, *args: Any) -> None:
        self._write(Level.TRACE, timestamp, args)

    def debug(self, timestamp: Any, *args: Any) -> None:
        self._write(Level.DEBUG, timestamp, args)

    def info(self, timestamp: Any, *args: Any) -> None:
        self._write(Level.INFO, timestamp, args)

    def log(self, timestamp: Any, *args: Any) -> None:
        self._write(Level.LOG, timestamp, args)

    def warn(self, timestamp: Any, *args: Any) -> None:
        self._write(Level.WARN, timestamp, args)

    def error(self, timestamp: Any, *args: Any) -> None:
        self._write(Level.ERROR, timestamp, args)

    def _write(self, level: Level, timestamp: Any, args: tuple) -> None:
        parts = []
        if timestamp is not None:
            if isinstance(timestamp, (datetime, date)):
                parts.append(timestamp.isoformat())
            else:
                parts.append(str(timestamp))
        if self._show_level:
            parts.append(level.value.upper())
        parts.extend(str(arg) for arg in args)

        stream = self.stream
        stream.write(" ".join(parts) + "\n")
        stream.flush()
