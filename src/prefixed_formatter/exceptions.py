"""
exceptions.py – Custom exception hierarchy for the prefixed formatter.

Rendering itself never fails; these cover the edges around it: writing the
rendered bytes, building a configuration, and decoding input records.
"""

from __future__ import annotations

from typing import Any


class PrefixedFormatterError(Exception):
    """Base exception for the prefixed formatter. All formatter errors inherit from this."""


class OutputWriteError(PrefixedFormatterError):
    """
    Raised when the destination cannot accept a rendered line.

    The underlying ``OSError`` is chained as ``__cause__``.

    Attributes
    ----------
    sink:
        The object the line was being written to.
    """

    def __init__(self, sink: Any, detail: str) -> None:
        self.sink = sink
        self.detail = detail
        super().__init__(f"Could not write log line to {sink!r}: {detail}")


class ConfigurationError(PrefixedFormatterError):
    """
    Raised when a FormatterConfig is built with values of the wrong type.

    Attributes
    ----------
    option:
        Name of the offending option.
    """

    def __init__(self, option: str, detail: str) -> None:
        self.option = option
        self.detail = detail
        super().__init__(f"Invalid formatter option '{option}': {detail}")


class EntryDecodeError(PrefixedFormatterError):
    """
    Raised when an input record cannot be turned into a LogEntry.

    Attributes
    ----------
    line_number:
        1-based line number in the input stream.
    detail:
        Diagnostic detail.
    """

    def __init__(self, line_number: int, detail: str) -> None:
        self.line_number = line_number
        self.detail = detail
        super().__init__(f"Cannot decode log record on line {line_number}: {detail}")
