"""
Configuration objects for loggers and log collectors.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional


DEFAULT_MAX_ENTRY_LENGTH = 10000
DEFAULT_STORE_INTERVAL = 30.0

# Option names accepted from camelCase configuration sources
_LEGACY_KEYS = {
    "maxEntryLength": "max_entry_length",
    "storeInterval": "store_interval",
    "stringifyObjects": "stringify_objects",
    "disableCallerInfo": "disable_caller_info",
}


@dataclass(frozen=True)
class CollectorConfig:
    """
    Batching configuration for a LogCollector.

    Attributes:
        max_entry_length: Total queued text length that forces an early flush
        store_interval: Seconds between periodic flush attempts
        stringify_objects: Render object arguments as JSON at every level,
            not only at the error level
    """

    max_entry_length: int = DEFAULT_MAX_ENTRY_LENGTH
    store_interval: float = DEFAULT_STORE_INTERVAL
    stringify_objects: bool = False

    def __post_init__(self):
        if self.max_entry_length <= 0:
            raise ValueError(
                f"max_entry_length must be positive, got {self.max_entry_length}"
            )
        if self.store_interval <= 0:
            raise ValueError(
                f"store_interval must be positive, got {self.store_interval}"
            )

    @classmethod
    def from_dict(cls, options: Optional[Mapping[str, Any]]) -> "CollectorConfig":
        """
        Build a config from a mapping of options.

        Both snake_case and camelCase keys are accepted. Unknown keys are
        ignored and falsy values fall back to the defaults.
        """
        return cls(**_normalize_options(cls, options))


@dataclass(frozen=True)
class LoggerOptions:
    """Per-logger (or registry-wide) behaviour switches."""

    disable_caller_info: bool = False

    @classmethod
    def from_dict(cls, options: Optional[Mapping[str, Any]]) -> "LoggerOptions":
        return cls(**_normalize_options(cls, options))


def _normalize_options(cls, options: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    known = {f.name for f in fields(cls)}
    normalized: Dict[str, Any] = {}
    for key, value in (options or {}).items():
        name = _LEGACY_KEYS.get(key, key)
        if name in known and value:
            normalized[name] = value
    return normalized
