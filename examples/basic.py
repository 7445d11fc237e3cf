"""
basic.py – Example: wire the prefixed formatter into standard logging.

Usage:
  python examples/basic.py
  python examples/basic.py | cat        # not a terminal: logfmt output

Note: PREFIXED_* variables in the environment or a .env file adjust the layout.
"""

from __future__ import annotations

import logging
import sys

from prefixed_formatter.config import FormatterConfig
from prefixed_formatter.demo import run_demo
from prefixed_formatter.utils.logging import PrefixedFormatter

# ── Configuration ─────────────────────────────────────────────────────────────
STREAM = sys.stdout


def main() -> None:
    # Read options from the environment, then pad messages for aligned fields
    config = FormatterConfig.from_env().replace(space_padding=45)

    handler = logging.StreamHandler(STREAM)
    handler.setFormatter(PrefixedFormatter(config, STREAM))

    log = logging.getLogger("beach")
    log.setLevel(logging.DEBUG)
    log.addHandler(handler)
    log.propagate = False

    run_demo(log)

    # A prefix can also be given as a field, and reserved keys are kept aside
    log.info("Tide report", extra={"prefix": "tide", "fields": {"time": "high", "msg": "rising"}})


if __name__ == "__main__":
    main()
