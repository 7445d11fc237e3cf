"""
tests/conftest.py – Shared fixtures for all tests.
"""
from __future__ import annotations

import datetime
import logging
from typing import Any, Callable

import pytest

from prefixed_formatter.config import FormatterConfig
from prefixed_formatter.formatter import LineFormatter
from prefixed_formatter.types import Level, LogEntry


@pytest.fixture()
def timestamp() -> datetime.datetime:
    return datetime.datetime(2024, 1, 2, 15, 4, 5)


@pytest.fixture()
def make_entry(timestamp: datetime.datetime) -> Callable[..., LogEntry]:
    """Build a LogEntry with sensible defaults; keyword arguments override them."""

    def _make(
        message: str = "test",
        level: Level = Level.DEBUG,
        fields: dict[str, Any] | None = None,
        output: Any = None,
    ) -> LogEntry:
        return LogEntry(
            timestamp=timestamp,
            level=level,
            message=message,
            fields=dict(fields or {}),
            output=output,
        )

    return _make


@pytest.fixture()
def render() -> Callable[..., str]:
    """Format one entry with a fresh formatter and return the decoded line."""

    def _render(entry: LogEntry, terminal: bool = False, **options: Any) -> str:
        formatter = LineFormatter(FormatterConfig(**options), terminal_check=lambda _: terminal)
        if terminal and entry.output is None:
            entry.output = object()
        return formatter.format(entry).decode("utf-8")

    return _render


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "FORCE_COLORS",
        "FORCE_FORMATTING",
        "DISABLE_COLORS",
        "DISABLE_TIMESTAMP",
        "SHORT_TIMESTAMP",
        "DISABLE_SORTING",
        "SPACE_PADDING",
        "TIMESTAMP_FORMAT",
    ):
        monkeypatch.delenv(f"PREFIXED_{name}", raising=False)


@pytest.fixture(autouse=True)
def _reset_package_loggers():
    yield
    for name in ("prefixed_formatter", "prefixed_formatter.demo"):
        log = logging.getLogger(name)
        log.handlers.clear()
        log.propagate = True
        log.setLevel(logging.NOTSET)
