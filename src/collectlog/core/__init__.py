"""Core collectlog functionality: levels, configuration, loggers and transports."""

from .config import CollectorConfig, LoggerOptions
from .levels import Level, LEVEL_NAMES
from .logger import CallerInfo, Logger
from .registry import LoggerRegistry
from .transports import ConsoleTransport, LoggerTransport

__all__ = [
    "CollectorConfig",
    "LoggerOptions",
    "Level",
    "LEVEL_NAMES",
    "CallerInfo",
    "Logger",
    "LoggerRegistry",
    "ConsoleTransport",
    "LoggerTransport",
]
