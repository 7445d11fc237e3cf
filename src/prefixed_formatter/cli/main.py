"""
main.py – CLI entry points for the prefixed formatter.

Commands:
  prefixed_demo     Log a short demo session through the formatter.
  prefixed_render   Render JSON-lines log records as formatted lines.

Usage:
  prefixed_demo --force-colors --short-timestamp
  prefixed_render --file app.jsonl --force-formatting --space-padding 40
  cat app.jsonl | prefixed_render --disable-timestamp
"""

from __future__ import annotations

import sys
from typing import Any, Callable, IO

import click

from prefixed_formatter.config import FormatterConfig
from prefixed_formatter.demo import run_demo
from prefixed_formatter.exceptions import EntryDecodeError, OutputWriteError
from prefixed_formatter.formatter import LineFormatter
from prefixed_formatter.records import decode_entry, iter_entries
from prefixed_formatter.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


# ── Shared options ────────────────────────────────────────────────────────────

_FLAG_OPTIONS = [
    ("--force-colors", "Colorize even when not writing to a terminal."),
    ("--force-formatting", "Use the aligned layout even when not writing to a terminal."),
    ("--disable-colors", "Never colorize."),
    ("--disable-timestamp", "Leave out timestamps."),
    ("--short-timestamp", "Print seconds since start instead of wall-clock time."),
    ("--disable-sorting", "Keep fields in their original order."),
]


def _formatter_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach one option per FormatterConfig field."""
    func = click.option(
        "--space-padding",
        default=None,
        type=int,
        help="Pad messages to this width in the aligned layout (default: 0).",
    )(func)
    func = click.option(
        "--timestamp-format",
        default=None,
        help="strftime format for full timestamps (default: 'Jan 02 15:04:05').",
    )(func)
    for flag, help_text in reversed(_FLAG_OPTIONS):
        func = click.option(flag, is_flag=True, default=False, help=help_text)(func)
    return func


def _build_config(options: dict[str, Any]) -> FormatterConfig:
    """Merge explicit CLI options over the PREFIXED_* environment."""
    config = FormatterConfig.from_env()
    # Unset options are None; flags can only switch a setting on.
    changes = {
        key: value for key, value in options.items() if value is not None and value is not False
    }
    return config.replace(**changes) if changes else config


# ── prefixed_demo ─────────────────────────────────────────────────────────────

@click.command("prefixed_demo")
@_formatter_options
@click.option("--log-level", default="DEBUG", show_default=True)
def prefixed_demo(log_level: str, **options: Any) -> None:
    """Log a short demo session to stderr through the prefixed formatter."""
    config = _build_config(options)
    log = configure_logging(log_level, config=config, name="prefixed_formatter.demo")
    run_demo(log)


# ── prefixed_render ───────────────────────────────────────────────────────────

@click.command("prefixed_render")
@click.option(
    "--file",
    "input_file",
    default="-",
    type=click.File("r", encoding="utf-8"),
    help="JSON-lines input; '-' reads stdin.",
)
@_formatter_options
@click.option(
    "--skip-invalid/--no-skip-invalid",
    default=False,
    show_default=True,
    help="Log and skip records that cannot be decoded instead of stopping.",
)
@click.option("--log-level", default="WARNING", show_default=True)
def prefixed_render(
    input_file: IO[str],
    skip_invalid: bool,
    log_level: str,
    **options: Any,
) -> None:
    """Render JSON-lines log records (time, level, msg, fields) to stdout."""
    configure_logging(log_level)
    config = _build_config(options)

    out = click.get_binary_stream("stdout")
    formatter = LineFormatter(config)
    rendered = skipped = 0

    for number, line in iter_entries(input_file):
        try:
            entry = decode_entry(line, number)
        except EntryDecodeError as exc:
            if not skip_invalid:
                click.echo(f"ERROR: {exc}", err=True)
                sys.exit(1)
            logger.warning("Skipping record: %s", exc)
            skipped += 1
            continue

        entry.output = out
        try:
            formatter.write(entry, out)
        except OutputWriteError as exc:
            click.echo(f"ERROR: {exc}", err=True)
            sys.exit(1)
        rendered += 1

    out.flush()
    logger.debug("Rendered %d records, skipped %d", rendered, skipped)


if __name__ == "__main__":
    # Allow running directly: python -m prefixed_formatter.cli.main
    prefixed_render()
