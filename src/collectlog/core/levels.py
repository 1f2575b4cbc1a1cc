"""
Ordered log severities.
"""

from enum import Enum
from typing import Union


class Level(str, Enum):
    """Supported log levels, ordered from least to most severe."""

    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    LOG = "log"
    WARN = "warn"
    ERROR = "error"

    @property
    def severity(self) -> int:
        """Numeric rank of the level, 0 for trace up to 5 for error."""
        return _SEVERITIES[self]

    @classmethod
    def parse(cls, value: Union["Level", str]) -> "Level":
        """
        Resolve a level from a Level member or a case-insensitive name.

        Raises:
            ValueError: If the name is not a known level
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown log level: {value!r}") from None


_SEVERITIES = {level: index for index, level in enumerate(Level)}

LEVEL_NAMES = tuple(level.value for level in Level)
