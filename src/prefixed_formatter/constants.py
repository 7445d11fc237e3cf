"""
constants.py – Immutable project-wide constants.
Do NOT modify these at runtime.
"""

from __future__ import annotations

import re

# ── ANSI escape sequences ────────────────────────────────────────────────────
RESET = "\033[0m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
CYAN = "\033[36m"
LIGHT_BLACK = "\033[90m"

PREFIX_COLOR: str = CYAN
TIMESTAMP_COLOR: str = LIGHT_BLACK

# ── Field keys ───────────────────────────────────────────────────────────────
PREFIX_KEY = "prefix"
ERROR_KEY = "error"
STACK_KEY = "stack"

# Keys the plain layout writes itself; user fields with these names are
# re-emitted under "fields.<key>".
RESERVED_KEYS: tuple[str, ...] = ("time", "msg", "level")
CLASH_KEY_PREFIX = "fields."

# ── Layout ───────────────────────────────────────────────────────────────────
# Month, space, day, time of day: "Jan 02 15:04:05"
DEFAULT_TIMESTAMP_FORMAT = "%b %d %H:%M:%S"
LEVEL_TEXT_WIDTH = 5
SHORT_TIMESTAMP_DIGITS = 4

# Leading "[label]" token of a message, shortest match.
PREFIX_PATTERN = re.compile(r"^\[(.*?)\]")

# Characters a logfmt value may contain without being quoted.
BARE_VALUE_CHARS: frozenset[str] = frozenset(
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "0123456789"
    "-."
)

# ── Environment variables read by FormatterConfig.from_env ──────────────────
ENV_PREFIX = "PREFIXED_"
TRUTHY_VALUES: frozenset[str] = frozenset({"1", "true", "yes", "on"})

# ── Standard-library level numbers ──────────────────────────────────────────
# logging has no level above CRITICAL; records at or above this render as PANIC.
PANIC_LEVELNO = 60
