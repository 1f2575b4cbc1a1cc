"""
Rendering of log call arguments into a single line of text.
"""

import traceback
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Callable, Optional

import msgspec

from ..core.levels import Level


CIRCULAR_SENTINEL = "[object with circular refs?]"
UNPRINTABLE_SENTINEL = "[unprintable object]"
SEPARATOR = ","

_SCALARS = (str, bytes, bytearray, int, float, complex, Decimal, date, time)


def _encode_by_attributes(obj: Any) -> Any:
    """Render unknown objects in log text as their attribute dict, else str()."""
    try:
        return vars(obj)
    except TypeError:
        return str(obj)


_json_encoder = msgspec.json.Encoder(enc_hook=_encode_by_attributes)


class MessageFormatter:
    """
    Formats the arguments of a log call into one comma-separated string.

    Objects are rendered as JSON when ``stringify_objects`` is set or the
    message is logged at the error level; otherwise they are rendered with
    ``str()``. Exceptions are rendered with their traceback.
    """

    __slots__ = ("stringify_objects", "_stringify")

    def __init__(
        self,
        stringify_objects: bool = False,
        stringify: Optional[Callable[[Any], str]] = None,
    ):
        self.stringify_objects = stringify_objects
        self._stringify = stringify or stringify_json

    def format(self, level: Level, timestamp: Any = None, *args: Any) -> Optional[str]:
        """
        Render a log call.

        Args:
            level: Level the message is logged at
            timestamp: Leading argument, rendered only when truthy
            *args: Log arguments

        Returns:
            The rendered message, or None when there is nothing to log
        """
        structured = self.stringify_objects or level is Level.ERROR

        parts = []
        if timestamp:
            parts.append(self.render_arg(timestamp, structured))
        for arg in args:
            parts.append(self.render_arg(arg, structured))

        message = SEPARATOR.join(parts)
        return message or None

    def render_arg(self, arg: Any, structured: bool = False) -> str:
        if arg is None:
            return ""
        if isinstance(arg, BaseException):
            return render_exception(arg)
        if isinstance(arg, (datetime, date, time)):
            return arg.isoformat()
        if structured and not isinstance(arg, _SCALARS):
            return self._stringify(arg)
        try:
            return str(arg)
        except Exception:
            return UNPRINTABLE_SENTINEL


def stringify_json(obj: Any) -> str:
    """Render an object as compact JSON, or the circular-refs sentinel."""
    try:
        return _json_encoder.encode(obj).decode("utf-8")
    except Exception:
        return CIRCULAR_SENTINEL


def render_exception(exc: BaseException) -> str:
    """Render an exception with its formatted traceback, ending in the summary line."""
    try:
        lines = traceback.format_exception(type(exc), exc, exc.__traceback__)
    except Exception:
        return UNPRINTABLE_SENTINEL
    return "".join(lines).rstrip()
