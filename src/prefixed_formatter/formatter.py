"""
formatter.py – Render a LogEntry as a single text line.

Two layouts are produced:

- the terminal layout: timestamp, right-aligned level, optional ``prefix:``
  label, message, then ``key=value`` fields, optionally colorized;
- the logfmt layout: ``time=… level=… msg=… key=value …`` with values
  quoted whenever they contain anything besides ``[A-Za-z0-9.-]``.

``LineFormatter`` picks between them per call from its configuration and
whether the entry's output handle is a terminal (checked once per
formatter instance).
"""

from __future__ import annotations

import threading
import time
from typing import Any, BinaryIO, Callable, Optional

from prefixed_formatter.config import FormatterConfig
from prefixed_formatter.constants import (
    BARE_VALUE_CHARS,
    BLUE,
    CLASH_KEY_PREFIX,
    DEFAULT_TIMESTAMP_FORMAT,
    GREEN,
    LEVEL_TEXT_WIDTH,
    PREFIX_COLOR,
    PREFIX_KEY,
    PREFIX_PATTERN,
    RED,
    RESERVED_KEYS,
    RESET,
    SHORT_TIMESTAMP_DIGITS,
    TIMESTAMP_COLOR,
    YELLOW,
)
from prefixed_formatter.exceptions import OutputWriteError
from prefixed_formatter.types import Level, LogEntry, RenderMode
from prefixed_formatter.utils.logging import get_logger
from prefixed_formatter.utils.terminal import is_terminal

logger = get_logger(__name__)

_LEVEL_COLORS: dict[Level, str] = {
    Level.INFO: GREEN,
    Level.WARN: YELLOW,
    Level.ERROR: RED,
    Level.FATAL: RED,
    Level.PANIC: RED,
}

_QUOTE_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    '"': '\\"',
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


# ── Pure helpers ──────────────────────────────────────────────────────────────

def select_mode(config: FormatterConfig, is_terminal: bool) -> RenderMode:
    """
    Choose the layout for one call.

    Colors apply when forced or on a terminal, unless disabled. The terminal
    layout applies whenever colors do, when formatting is forced, or on a
    terminal. Everything else is logfmt.
    """
    colored = (config.force_colors or is_terminal) and not config.disable_colors
    formatted = config.force_formatting or is_terminal
    if colored:
        return RenderMode.COLORED
    if formatted:
        return RenderMode.FORMATTED
    return RenderMode.PLAIN


def extract_prefix(message: str) -> tuple[str, str]:
    """
    Split a leading ``[label]`` token off ``message``.

    Returns
    -------
    (label, remainder)
        ``label`` is the bracket content (possibly empty) and ``remainder``
        the rest of the message with surrounding whitespace stripped. When
        the message has no leading token, ``("", message)``.
    """
    match = PREFIX_PATTERN.match(message)
    if match is None:
        return "", message
    return match.group(1), message[match.end():].strip()


def needs_quoting(text: str) -> bool:
    """Return True if ``text`` has any character outside ``[A-Za-z0-9.-]``. Empty text does not."""
    return any(ch not in BARE_VALUE_CHARS for ch in text)


def quote(text: str) -> str:
    """Double-quote ``text``, escaping backslashes, quotes and non-printable characters."""
    out = ['"']
    for ch in text:
        escaped = _QUOTE_ESCAPES.get(ch)
        if escaped is not None:
            out.append(escaped)
        elif ch.isprintable():
            out.append(ch)
        else:
            code = ord(ch)
            if code < 0x80:
                out.append(f"\\x{code:02x}")
            elif code <= 0xFFFF:
                out.append(f"\\u{code:04x}")
            else:
                out.append(f"\\U{code:08x}")
    out.append('"')
    return "".join(out)


def resolve_field_clashes(fields: dict[str, Any]) -> None:
    """
    Copy user fields named ``time``, ``msg`` or ``level`` to ``fields.<name>``.

    The mapping is changed in place and the original keys are kept. Callers
    sharing one mapping between threads must synchronise around this.
    """
    for key in RESERVED_KEYS:
        if key in fields:
            fields[CLASH_KEY_PREFIX + key] = fields[key]


def _logfmt_value(value: Any) -> str:
    if isinstance(value, BaseException):
        text = str(value)
    elif isinstance(value, str):
        text = value
    else:
        return str(value)
    return quote(text) if needs_quoting(text) else text


# ── Formatter ─────────────────────────────────────────────────────────────────

class LineFormatter:
    """
    Thread-safe log line renderer.

    Parameters
    ----------
    config:
        Formatting options. Defaults to ``FormatterConfig()``.
    terminal_check:
        Callable answering "is this output handle a terminal". Called at most
        once per formatter, with the output handle of the first entry that
        is formatted.
    clock:
        Monotonic seconds source used for short timestamps.
    """

    def __init__(
        self,
        config: FormatterConfig | None = None,
        *,
        terminal_check: Callable[[Any], bool] = is_terminal,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config if config is not None else FormatterConfig()
        self._terminal_check = terminal_check
        self._clock = clock
        self._base_time = clock()
        self._is_terminal: Optional[bool] = None
        self._terminal_lock = threading.Lock()

    @property
    def config(self) -> FormatterConfig:
        return self._config

    def is_terminal(self, output: Any) -> bool:
        """
        Return the memoized terminal capability, resolving it from ``output`` on first use.

        Later calls return the first answer even if ``output`` differs.
        """
        resolved = self._is_terminal
        if resolved is None:
            first = False
            with self._terminal_lock:
                if self._is_terminal is None:
                    self._is_terminal = output is not None and bool(self._terminal_check(output))
                    first = True
                resolved = self._is_terminal
            # Outside the lock: this formatter may be the one rendering the log call.
            if first:
                logger.debug("Output %r resolved as terminal=%s", output, resolved)
        return resolved

    def elapsed_seconds(self) -> int:
        """Whole seconds since this formatter was created."""
        return int(self._clock() - self._base_time)

    def render_mode(self, output: Any) -> RenderMode:
        """Layout used for lines written to ``output``."""
        return select_mode(self._config, self.is_terminal(output))

    def format(self, entry: LogEntry) -> bytes:
        """
        Render ``entry`` as one UTF-8 line ending in ``\\n``.

        ``entry.fields`` gains ``fields.<key>`` copies of any ``time``,
        ``msg`` or ``level`` keys (see ``resolve_field_clashes``). The aligned
        layout prints both the copies and the original keys; logfmt prints
        only the copies.
        """
        resolve_field_clashes(entry.fields)
        keys = [k for k in entry.fields if k != PREFIX_KEY]
        if not self._config.disable_sorting:
            keys.sort()

        mode = self.render_mode(entry.output)
        timestamp_format = self._config.timestamp_format or DEFAULT_TIMESTAMP_FORMAT

        if mode.is_formatted:
            line = self._format_terminal(entry, keys, timestamp_format, mode.is_colored)
        else:
            line = self._format_logfmt(entry, keys, timestamp_format)
        return (line + "\n").encode("utf-8", errors="backslashreplace")

    def write(self, entry: LogEntry, out: BinaryIO) -> None:
        """
        Render ``entry`` and write it to the binary stream ``out``.

        Raises
        ------
        OutputWriteError
            If ``out`` rejects the write.
        """
        line = self.format(entry)
        try:
            out.write(line)
        except OSError as exc:
            raise OutputWriteError(out, str(exc)) from exc

    # ── Layouts ───────────────────────────────────────────────────────────────

    def _format_terminal(
        self,
        entry: LogEntry,
        keys: list[str],
        timestamp_format: str,
        colored: bool,
    ) -> str:
        if colored:
            level_color = _LEVEL_COLORS.get(entry.level, BLUE)
            reset, prefix_color, ts_color = RESET, PREFIX_COLOR, TIMESTAMP_COLOR
        else:
            level_color = reset = prefix_color = ts_color = ""

        level_text = "WARN" if entry.level == Level.WARN else entry.level.text.upper()

        message = entry.message
        prefix = ""
        if PREFIX_KEY in entry.fields:
            prefix = f" {prefix_color}{entry.fields[PREFIX_KEY]}:{reset}"
        else:
            label, trimmed = extract_prefix(message)
            if label:
                prefix = f" {prefix_color}{label}:{reset}"
                message = trimmed

        padding = self._config.effective_padding
        if padding:
            message = message.ljust(padding)

        parts = []
        if not self._config.disable_timestamp:
            if self._config.short_timestamp:
                stamp = f"{self.elapsed_seconds():0{SHORT_TIMESTAMP_DIGITS}d}"
            else:
                stamp = entry.timestamp.strftime(timestamp_format)
            parts.append(f"{ts_color}[{stamp}]{reset}")
        parts.append(f"{level_color}{level_text:>{LEVEL_TEXT_WIDTH}}{reset}{prefix}")
        if message:
            parts.append(message)

        line = " ".join(parts)
        for key in keys:
            line += f" {level_color}{key}{reset}={entry.fields[key]}"
        return line

    def _format_logfmt(self, entry: LogEntry, keys: list[str], timestamp_format: str) -> str:
        pairs = []
        if not self._config.disable_timestamp:
            pairs.append(f"time={_logfmt_value(entry.timestamp.strftime(timestamp_format))}")
        pairs.append(f"level={_logfmt_value(entry.level.text)}")
        if entry.message:
            pairs.append(f"msg={_logfmt_value(entry.message)}")
        for key in keys:
            # Reserved names only appear as their fields.<key> copies here.
            if key in RESERVED_KEYS:
                continue
            pairs.append(f"{key}={_logfmt_value(entry.fields[key])}")
        return " ".join(pairs)
