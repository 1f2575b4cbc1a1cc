"""
Explicitly owned registry of loggers, global transports and global options.
"""

from typing import Dict, List, Optional, Union

from .config import LoggerOptions
from .levels import Level
from .logger import Logger
from .transports import ConsoleTransport, LoggerTransport


_DEFAULT = object()


class LoggerRegistry:
    """
    Composes loggers and owns the state they share.

    A registry holds the transports used by every logger it creates, the
    options applied on top of each logger's own options, the level given to
    new loggers and the loggers it tracks for level changes. Call reset() to
    tear it down to its initial state.
    """

    __slots__ = (
        "_console",
        "_global_transports",
        "_global_options",
        "_level",
        "_id_loggers",
        "_loggers",
    )

    def __init__(self, console: Optional[LoggerTransport] = _DEFAULT):  # type: ignore[assignment]
        """
        Initialize registry.

        Args:
            console: Default global transport. A ConsoleTransport writing to
                stderr is used when omitted; pass None for no default transport.
        """
        self._console = ConsoleTransport() if console is _DEFAULT else console
        self._global_transports: List[LoggerTransport] = []
        self._global_options = LoggerOptions()
        self._level = Level.TRACE
        self._id_loggers: Dict[str, List[Logger]] = {}
        self._loggers: List[Logger] = []
        self.reset()

    @property
    def global_transports(self) -> List[LoggerTransport]:
        return list(self._global_transports)

    @property
    def global_options(self) -> LoggerOptions:
        return self._global_options

    @property
    def level(self) -> Level:
        return self._level

    @property
    def console(self) -> Optional[LoggerTransport]:
        return self._console

    def add_global_transport(self, transport: LoggerTransport) -> None:
        """Add a transport used by all loggers. Adding it twice has no effect."""
        if not any(t is transport for t in self._global_transports):
            self._global_transports.append(transport)

    def remove_global_transport(self, transport: LoggerTransport) -> None:
        """Remove a global transport if it is registered."""
        for index, t in enumerate(self._global_transports):
            if t is transport:
                del self._global_transports[index]
                return

    def set_global_options(self, options: Optional[LoggerOptions]) -> None:
        """Set options applied to all loggers. None restores the defaults."""
        self._global_options = options or LoggerOptions()

    def get_logger(
        self,
        id: Optional[str] = None,
        transports: Optional[List[LoggerTransport]] = None,
        options: Optional[LoggerOptions] = None,
    ) -> Logger:
        """Create a logger at the registry's current level and track it."""
        logger = self.get_untracked_logger(id, transports, options)
        if id:
            self._id_loggers.setdefault(id, []).append(logger)
        else:
            self._loggers.append(logger)
        return logger

    def get_untracked_logger(
        self,
        id: Optional[str] = None,
        transports: Optional[List[LoggerTransport]] = None,
        options: Optional[LoggerOptions] = None,
    ) -> Logger:
        """Create a logger that later level changes will not affect."""
        return Logger(self._level, id, transports, options, registry=self)

    def set_log_level_by_id(
        self, level: Union[Level, str], id: Optional[str] = None
    ) -> None:
        """
        Change the level of tracked loggers.

        Args:
            level: The new level
            id: Only loggers with this id are changed. When omitted, the
                loggers created without an id are changed.
        """
        targets = self._id_loggers.get(id, []) if id else self._loggers
        for logger in targets:
            logger.set_level(level)

    def set_log_level(self, level: Union[Level, str]) -> None:
        """Change the default level and the level of every tracked logger."""
        self._level = Level.parse(level)
        for logger in self._loggers:
            logger.set_level(self._level)
        for loggers in self._id_loggers.values():
            for logger in loggers:
                logger.set_level(self._level)

    def tracked_loggers(self, id: Optional[str] = None) -> List[Logger]:
        if id:
            return list(self._id_loggers.get(id, []))
        return list(self._loggers)

    def reset(self) -> None:
        """Forget tracked loggers and restore transports, options and level."""
        self._global_transports = [self._console] if self._console is not None else []
        self._global_options = LoggerOptions()
        self._level = Level.TRACE
        self._id_loggers = {}
        self._loggers = []
