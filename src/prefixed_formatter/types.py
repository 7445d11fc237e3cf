"""
types.py – Shared domain types.
All data flowing through the formatter uses these types.
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any

from prefixed_formatter.constants import PANIC_LEVELNO

# ── Enumerations ──────────────────────────────────────────────────────────────

class Level(IntEnum):
    """Log severity, ordered from least to most severe."""
    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4
    PANIC = 5

    @property
    def text(self) -> str:
        """Lower-case level name as written in logfmt output."""
        return _LEVEL_TEXT[self]

    @classmethod
    def from_levelno(cls, levelno: int) -> "Level":
        """Map a stdlib ``logging`` level number to the nearest Level at or below it."""
        if levelno >= PANIC_LEVELNO:
            return cls.PANIC
        if levelno >= logging.CRITICAL:
            return cls.FATAL
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARN
        if levelno >= logging.INFO:
            return cls.INFO
        return cls.DEBUG

    @classmethod
    def parse(cls, value: str) -> "Level":
        """
        Parse a level name case-insensitively.

        Accepts every name in ``Level.text`` plus the aliases ``warn`` and
        ``critical``.

        Raises
        ------
        ValueError
            If the name is not recognised.
        """
        key = value.strip().lower()
        try:
            return _LEVEL_ALIASES[key]
        except KeyError:
            raise ValueError(f"Unknown log level: {value!r}") from None


_LEVEL_TEXT: dict[Level, str] = {
    Level.DEBUG: "debug",
    Level.INFO: "info",
    Level.WARN: "warning",
    Level.ERROR: "error",
    Level.FATAL: "fatal",
    Level.PANIC: "panic",
}

_LEVEL_ALIASES: dict[str, Level] = {text: level for level, text in _LEVEL_TEXT.items()}
_LEVEL_ALIASES.update({"warn": Level.WARN, "critical": Level.FATAL})


class RenderMode(str, Enum):
    """Line layout chosen for a call, see ``select_mode``."""
    PLAIN = "plain"
    FORMATTED = "formatted"
    COLORED = "colored"

    @property
    def is_formatted(self) -> bool:
        return self is not RenderMode.PLAIN

    @property
    def is_colored(self) -> bool:
        return self is RenderMode.COLORED


# ── Entry type ────────────────────────────────────────────────────────────────

@dataclass
class LogEntry:
    """
    One log record handed to the formatter.

    Attributes
    ----------
    timestamp:
        When the record was emitted.
    level:
        Severity.
    message:
        Log message; may start with a ``[prefix]`` token.
    fields:
        Extra key/value data. Values may be strings, exceptions, or any
        printable object. The formatter copies ``time``, ``msg`` and
        ``level`` keys to ``fields.<key>`` in this mapping.
    output:
        Destination handle the record is written to. Only used to decide
        whether output goes to a terminal; ``None`` means "not a terminal".
    """

    timestamp: datetime.datetime
    level: Level
    message: str = ""
    fields: dict[str, Any] = field(default_factory=dict)
    output: Any = None
