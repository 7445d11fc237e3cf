"""
Prefixed Formatter
==================
Log line formatter with ``[prefix]`` labels, aligned and colorized levels
for terminals, and logfmt output everywhere else.
"""

from prefixed_formatter.config import FormatterConfig
from prefixed_formatter.exceptions import (
    ConfigurationError,
    EntryDecodeError,
    OutputWriteError,
    PrefixedFormatterError,
)
from prefixed_formatter.formatter import LineFormatter, select_mode
from prefixed_formatter.types import Level, LogEntry, RenderMode
from prefixed_formatter.utils.logging import PrefixedFormatter, configure_logging

__version__ = "0.1.0"
__all__ = [
    "FormatterConfig",
    "LineFormatter",
    "LogEntry",
    "Level",
    "RenderMode",
    "PrefixedFormatter",
    "configure_logging",
    "select_mode",
    "ConfigurationError",
    "EntryDecodeError",
    "OutputWriteError",
    "PrefixedFormatterError",
]
