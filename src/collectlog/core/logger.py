"""
Leveled logger that fans log calls out to transports.
"""

import logging
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, List, Optional, Union

from .config import LoggerOptions
from .levels import Level
from .transports import LoggerTransport

if TYPE_CHECKING:
    from .registry import LoggerRegistry


_diagnostics = logging.getLogger(__name__)

# Frames above Logger._log: Logger.<level>, then the call site
_CALLER_DEPTH = 2


@dataclass(frozen=True)
class CallerInfo:
    """Location of the code that issued a log call."""

    method_name: str = ""
    file_location: str = ""
    line: Optional[int] = None


class Logger:
    """
    Leveled logger.

    Each log call below the logger's level is dropped. Accepted calls are
    decorated with a UTC timestamp, the logger id and the caller's function
    name, then forwarded to the registry's global transports followed by the
    logger's own transports.
    """

    __slots__ = ("id", "options", "transports", "level", "_registry")

    def __init__(
        self,
        level: Union[Level, str] = Level.TRACE,
        id: Optional[str] = None,
        transports: Optional[List[LoggerTransport]] = None,
        options: Optional[LoggerOptions] = None,
        registry: Optional["LoggerRegistry"] = None,
    ):
        """
        Initialize logger.

        Args:
            level: Minimum level that will be forwarded to transports
            id: Optional identifier, rendered as a "[id]" prefix
            transports: Transports used by this logger only
            options: Behaviour switches for this logger
            registry: Registry providing global transports and options
        """
        self.id = id
        self.options = options or LoggerOptions()
        self.transports: List[LoggerTransport] = list(transports or [])
        self.level = Level.parse(level)
        self._registry = registry

    def set_level(self, level: Union[Level, str]) -> None:
        """Set the minimum level of this logger."""
        self.level = Level.parse(level)

    def trace(self, *args: Any) -> None:
        self._log(Level.TRACE, args)

    def debug(self, *args: Any) -> None:
        self._log(Level.DEBUG, args)

    def info(self, *args: Any) -> None:
        self._log(Level.INFO, args)

    def log(self, *args: Any) -> None:
        self._log(Level.LOG, args)

    def warn(self, *args: Any) -> None:
        self._log(Level.WARN, args)

    def error(self, *args: Any) -> None:
        self._log(Level.ERROR, args)

    def is_enabled_for(self, level: Union[Level, str]) -> bool:
        return Level.parse(level).severity >= self.level.severity

    @staticmethod
    def get_caller_info(depth: int = 1) -> CallerInfo:
        """
        Describe the caller ``depth`` frames above the function calling this.

        Returns an empty CallerInfo when the stack is shallower than requested.
        """
        try:
            frame = sys._getframe(depth + 1)
        except ValueError:
            return CallerInfo()
        code = frame.f_code
        return CallerInfo(
            method_name=code.co_name,
            file_location=code.co_filename,
            line=frame.f_lineno,
        )

    def _caller_info_enabled(self) -> bool:
        if self.options.disable_caller_info:
            return False
        if self._registry is not None:
            return not self._registry.global_options.disable_caller_info
        return True

    def _log(self, level: Level, args: tuple) -> None:
        if level.severity < self.level.severity:
            return

        prefixes: List[str] = []
        if self.id:
            prefixes.append(f"[{self.id}]")

        if self._caller_info_enabled():
            caller = self.get_caller_info(_CALLER_DEPTH)
            # Module-level and lambda frames carry no useful method name
            if len(caller.method_name) > 1 and not caller.method_name.startswith("<"):
                prefixes.append(f"<{caller.method_name}>: ")

        timestamp = datetime.now(timezone.utc)

        global_transports = (
            self._registry.global_transports if self._registry is not None else []
        )
        for transport in [*global_transports, *self.transports]:
            method = getattr(transport, level.value, None)
            if not callable(method):
                continue
            try:
                method(timestamp, *prefixes, *args)
            except Exception:
                _diagnostics.warning(
                    "Transport %r failed to handle a %s message",
                    transport,
                    level.value,
                    exc_info=True,
                )
