"""
logging.py – Hook the prefixed formatter into the standard ``logging`` package.

Provides ``PrefixedFormatter`` (a ``logging.Formatter`` that renders records
through ``LineFormatter``), ``configure_logging`` to install it, and
``get_logger`` for namespaced loggers. Use ``get_logger(__name__)`` at the
top of every module.
"""

from __future__ import annotations

import datetime
import logging
import sys
from typing import IO, TYPE_CHECKING, Any, Callable, Mapping, Optional

from prefixed_formatter.constants import ERROR_KEY, STACK_KEY
from prefixed_formatter.types import Level, LogEntry

if TYPE_CHECKING:
    from prefixed_formatter.config import FormatterConfig

ROOT_LOGGER_NAME = "prefixed_formatter"

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RECORD_ATTRS: frozenset[str] = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime", "fields"}


def configure_logging(
    level: str = "INFO",
    config: Optional["FormatterConfig"] = None,
    stream: Optional[IO[str]] = None,
    name: str = ROOT_LOGGER_NAME,
) -> logging.Logger:
    """
    Install a ``PrefixedFormatter`` handler on a logger.

    Call once at application entrypoint (CLI or script).

    Parameters
    ----------
    level:
        Logging level string: DEBUG, INFO, WARNING, ERROR, CRITICAL.
    config:
        Formatter options. Defaults to ``FormatterConfig()``.
    stream:
        Text stream to log to. Defaults to ``sys.stderr``.
    name:
        Logger to configure. Defaults to the package logger; pass ``""``
        for the root logger.

    Returns
    -------
    logging.Logger
        The configured logger.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    if stream is None:
        stream = sys.stderr

    handler = logging.StreamHandler(stream)
    handler.setFormatter(PrefixedFormatter(config, stream))

    target = logging.getLogger(name)
    target.setLevel(numeric_level)
    target.handlers.clear()
    target.addHandler(handler)
    target.propagate = False
    return target


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger scoped within the prefixed_formatter namespace.

    Parameters
    ----------
    name:
        Typically ``__name__`` of the calling module.

    Returns
    -------
    logging.Logger
    """
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


class PrefixedFormatter(logging.Formatter):
    """
    ``logging.Formatter`` that renders records with ``LineFormatter``.

    Fields are taken from ``extra=`` attributes and from an optional
    ``extra={"fields": {...}}`` mapping, which may also carry keys such as
    ``msg`` that ``extra`` itself refuses. ``prefix`` sets the label.
    Exceptions from ``exc_info`` are rendered under the ``error`` key. The
    traceback follows the line as an indented block in the aligned layout,
    and goes into a quoted ``stack`` field in logfmt so each record stays on
    one line.

    Parameters
    ----------
    config:
        Formatter options.
    stream:
        The handler's stream; used only to detect a terminal. Without it
        (for example when built by ``logging.config.dictConfig``) the output
        is never treated as a terminal, so the aligned layout needs
        ``force_formatting`` or ``force_colors``.
    terminal_check:
        Optional replacement for the default terminal detection.
    """

    def __init__(
        self,
        config: Optional["FormatterConfig"] = None,
        stream: Any = None,
        terminal_check: Optional[Callable[[Any], bool]] = None,
    ) -> None:
        super().__init__()
        from prefixed_formatter.formatter import LineFormatter

        if terminal_check is None:
            self._line_formatter = LineFormatter(config)
        else:
            self._line_formatter = LineFormatter(config, terminal_check=terminal_check)
        self._stream = stream

    def to_entry(self, record: logging.LogRecord) -> LogEntry:
        """Build the LogEntry for ``record``."""
        fields: dict[str, Any] = {
            key: value for key, value in record.__dict__.items() if key not in _RECORD_ATTRS
        }
        extra_fields = getattr(record, "fields", None)
        if isinstance(extra_fields, Mapping):
            fields.update(extra_fields)
        if _has_exception(record):
            fields.setdefault(ERROR_KEY, record.exc_info[1])

        return LogEntry(
            timestamp=datetime.datetime.fromtimestamp(record.created),
            level=Level.from_levelno(record.levelno),
            message=record.getMessage(),
            fields=fields,
            output=self._stream,
        )

    def format(self, record: logging.LogRecord) -> str:
        entry = self.to_entry(record)
        traceback_text = ""
        if _has_exception(record):
            if not record.exc_text:
                record.exc_text = self.formatException(record.exc_info)
            traceback_text = record.exc_text

        formatted = self._line_formatter.render_mode(entry.output).is_formatted
        if traceback_text and not formatted:
            entry.fields.setdefault(STACK_KEY, traceback_text)

        # StreamHandler appends its own terminator.
        line = self._line_formatter.format(entry).decode("utf-8")[:-1]
        if traceback_text and formatted:
            line += "\n" + _indent(traceback_text)
        return line


def _has_exception(record: logging.LogRecord) -> bool:
    return bool(record.exc_info) and record.exc_info[1] is not None


def _indent(text: str) -> str:
    return "\n".join(f"    {row}" for row in text.splitlines())
