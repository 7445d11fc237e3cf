"""
test_helpers.py – Unit tests for mode selection, prefix extraction, quoting and levels.
"""

from __future__ import annotations

import logging

import pytest

from prefixed_formatter.config import FormatterConfig
from prefixed_formatter.constants import PANIC_LEVELNO
from prefixed_formatter.formatter import (
    extract_prefix,
    needs_quoting,
    quote,
    resolve_field_clashes,
    select_mode,
)
from prefixed_formatter.types import Level, RenderMode


class TestSelectMode:
    """Every meaningful combination of the three flags and terminal capability."""

    @pytest.mark.parametrize(
        "force_colors,force_formatting,disable_colors,is_terminal,expected",
        [
            (False, False, False, False, RenderMode.PLAIN),
            (False, False, False, True, RenderMode.COLORED),
            (False, False, True, False, RenderMode.PLAIN),
            (False, False, True, True, RenderMode.FORMATTED),
            (False, True, False, False, RenderMode.FORMATTED),
            (False, True, False, True, RenderMode.COLORED),
            (False, True, True, False, RenderMode.FORMATTED),
            (False, True, True, True, RenderMode.FORMATTED),
            (True, False, False, False, RenderMode.COLORED),
            (True, False, False, True, RenderMode.COLORED),
            (True, False, True, False, RenderMode.PLAIN),
            (True, False, True, True, RenderMode.FORMATTED),
            (True, True, False, False, RenderMode.COLORED),
            (True, True, False, True, RenderMode.COLORED),
            (True, True, True, False, RenderMode.FORMATTED),
            (True, True, True, True, RenderMode.FORMATTED),
        ],
    )
    def test_truth_table(
        self, force_colors, force_formatting, disable_colors, is_terminal, expected
    ) -> None:
        config = FormatterConfig(
            force_colors=force_colors,
            force_formatting=force_formatting,
            disable_colors=disable_colors,
        )
        assert select_mode(config, is_terminal) is expected

    def test_mode_properties(self) -> None:
        assert not RenderMode.PLAIN.is_formatted
        assert RenderMode.FORMATTED.is_formatted and not RenderMode.FORMATTED.is_colored
        assert RenderMode.COLORED.is_formatted and RenderMode.COLORED.is_colored


class TestExtractPrefix:
    def test_extracts_label_and_trims(self) -> None:
        assert extract_prefix("[worker] did X") == ("worker", "did X")

    def test_shortest_match(self) -> None:
        assert extract_prefix("[a] [b] c") == ("a", "[b] c")

    def test_only_at_start(self) -> None:
        assert extract_prefix("did [worker] X") == ("", "did [worker] X")

    def test_no_brackets(self) -> None:
        assert extract_prefix("plain") == ("", "plain")

    def test_unclosed_bracket(self) -> None:
        assert extract_prefix("[worker did X") == ("", "[worker did X")

    def test_label_may_contain_spaces(self) -> None:
        assert extract_prefix("[http server]   listening  ") == ("http server", "listening")


class TestQuoting:
    @pytest.mark.parametrize("text", ["abc", "ABC", "0.1", "a-b", ""])
    def test_bare_text(self, text) -> None:
        assert needs_quoting(text) is False

    @pytest.mark.parametrize("text", ["a b", "a_b", "a=b", "é", "a\n", '"'])
    def test_text_needing_quotes(self, text) -> None:
        assert needs_quoting(text) is True

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("a b", '"a b"'),
            ("\x00", '"\\x00"'),
            ("\x7f", '"\\x7f"'),
            ("\r\n", '"\\r\\n"'),
            ("\u200b", '"\\u200b"'),
            ("naïve", '"naïve"'),
            ("\\", '"\\\\"'),
        ],
    )
    def test_quote_escapes(self, text, expected) -> None:
        assert quote(text) == expected


class TestResolveFieldClashes:
    def test_copies_reserved_keys(self) -> None:
        fields = {"time": 1, "msg": 2, "level": 3, "other": 4}
        resolve_field_clashes(fields)
        assert fields == {
            "time": 1,
            "msg": 2,
            "level": 3,
            "other": 4,
            "fields.time": 1,
            "fields.msg": 2,
            "fields.level": 3,
        }

    def test_leaves_other_fields_alone(self) -> None:
        fields = {"animal": "walrus"}
        resolve_field_clashes(fields)
        assert fields == {"animal": "walrus"}


class TestLevel:
    def test_ordering(self) -> None:
        assert Level.DEBUG < Level.INFO < Level.WARN < Level.ERROR < Level.FATAL < Level.PANIC

    @pytest.mark.parametrize(
        "levelno,expected",
        [
            (logging.NOTSET, Level.DEBUG),
            (logging.DEBUG, Level.DEBUG),
            (logging.INFO, Level.INFO),
            (logging.WARNING, Level.WARN),
            (logging.ERROR, Level.ERROR),
            (logging.CRITICAL, Level.FATAL),
            (PANIC_LEVELNO, Level.PANIC),
            (25, Level.INFO),
        ],
    )
    def test_from_levelno(self, levelno, expected) -> None:
        assert Level.from_levelno(levelno) is expected

    @pytest.mark.parametrize(
        "name,expected",
        [("debug", Level.DEBUG), ("WARN", Level.WARN), ("warning", Level.WARN), ("Critical", Level.FATAL), (" panic ", Level.PANIC)],
    )
    def test_parse(self, name, expected) -> None:
        assert Level.parse(name) is expected

    def test_parse_unknown(self) -> None:
        with pytest.raises(ValueError, match="verbose"):
            Level.parse("verbose")
