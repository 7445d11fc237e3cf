"""
config.py – Formatter configuration using environment variables and/or explicit overrides.
All settings are immutable after construction (frozen dataclass).
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from prefixed_formatter.constants import ENV_PREFIX, TRUTHY_VALUES
from prefixed_formatter.exceptions import ConfigurationError
from prefixed_formatter.utils.logging import get_logger

load_dotenv()

logger = get_logger(__name__)


@dataclass(frozen=True)
class FormatterConfig:
    """
    Immutable formatter configuration.

    Parameters
    ----------
    force_colors:
        Colorize output even when the destination is not a terminal.
    force_formatting:
        Use the aligned terminal layout, without colors, for non-terminal output.
    disable_colors:
        Never colorize, even on a terminal.
    disable_timestamp:
        Leave the timestamp out. Useful when output goes to a log system that
        stamps lines itself.
    short_timestamp:
        Print seconds elapsed since the formatter was created instead of the
        wall-clock time.
    timestamp_format:
        ``strftime`` format for full timestamps. Empty means the default
        month/day/time stamp.
    disable_sorting:
        Keep fields in insertion order instead of sorting them by name.
    space_padding:
        Minimum width the message is padded to in the terminal layout.
        Zero or negative means no padding.
    """

    force_colors: bool = False
    force_formatting: bool = False
    disable_colors: bool = False
    disable_timestamp: bool = False
    short_timestamp: bool = False
    timestamp_format: str = ""
    disable_sorting: bool = False
    space_padding: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.space_padding, bool) or not isinstance(self.space_padding, int):
            raise ConfigurationError("space_padding", f"expected int, got {self.space_padding!r}")
        if not isinstance(self.timestamp_format, str):
            raise ConfigurationError("timestamp_format", f"expected str, got {self.timestamp_format!r}")

    @property
    def effective_padding(self) -> int:
        return max(self.space_padding, 0)

    def replace(self, **changes: object) -> "FormatterConfig":
        """Return a copy with the given options changed."""
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_env(cls) -> "FormatterConfig":
        """Construct config entirely from ``PREFIXED_*`` environment variables."""
        return cls(
            force_colors=_env_flag("FORCE_COLORS"),
            force_formatting=_env_flag("FORCE_FORMATTING"),
            disable_colors=_env_flag("DISABLE_COLORS"),
            disable_timestamp=_env_flag("DISABLE_TIMESTAMP"),
            short_timestamp=_env_flag("SHORT_TIMESTAMP"),
            timestamp_format=os.getenv(ENV_PREFIX + "TIMESTAMP_FORMAT", ""),
            disable_sorting=_env_flag("DISABLE_SORTING"),
            space_padding=_env_int("SPACE_PADDING"),
        )


def _env_flag(name: str) -> bool:
    return os.getenv(ENV_PREFIX + name, "").strip().lower() in TRUTHY_VALUES


def _env_int(name: str) -> int:
    raw = os.getenv(ENV_PREFIX + name, "").strip()
    if not raw:
        return 0
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s%s=%r: not an integer", ENV_PREFIX, name, raw)
        return 0
