"""
records.py – Turn JSON-lines log records into LogEntry objects.

Each line is a JSON object. ``time`` (ISO-8601), ``level`` and ``msg`` fill
the entry itself; every other key becomes a field.
"""

from __future__ import annotations

import datetime
import json
from typing import Any, Iterable, Iterator

from prefixed_formatter.exceptions import EntryDecodeError
from prefixed_formatter.types import Level, LogEntry


def decode_entry(text: str, line_number: int, now: datetime.datetime | None = None) -> LogEntry:
    """
    Decode one JSON-lines record.

    Parameters
    ----------
    text:
        The raw line.
    line_number:
        1-based position of the line, used in error messages.
    now:
        Timestamp for records without ``time``. Defaults to the current time.

    Raises
    ------
    EntryDecodeError
        If the line is not a JSON object or its time/level cannot be parsed.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise EntryDecodeError(line_number, f"invalid JSON ({exc.msg})") from exc
    if not isinstance(data, dict):
        raise EntryDecodeError(line_number, "record must be a JSON object")

    timestamp = _parse_time(data.pop("time", None), line_number, now)

    raw_level = data.pop("level", "info")
    if not isinstance(raw_level, str):
        raise EntryDecodeError(line_number, f"level must be a string, got {raw_level!r}")
    try:
        level = Level.parse(raw_level)
    except ValueError as exc:
        raise EntryDecodeError(line_number, str(exc)) from exc

    message = data.pop("msg", "")
    if message is None:
        message = ""

    return LogEntry(timestamp=timestamp, level=level, message=str(message), fields=data)


def iter_entries(lines: Iterable[str]) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, line)`` for every non-blank line."""
    for number, line in enumerate(lines, start=1):
        if line.strip():
            yield number, line


def _parse_time(value: Any, line_number: int, now: datetime.datetime | None) -> datetime.datetime:
    if value is None:
        return now if now is not None else datetime.datetime.now()
    if not isinstance(value, str):
        raise EntryDecodeError(line_number, f"time must be an ISO-8601 string, got {value!r}")
    try:
        return datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise EntryDecodeError(line_number, f"cannot parse time {value!r}") from exc
