"""
demo.py – A short walrus-watching log session showing every level, prefix labels and fields.
"""

from __future__ import annotations

import logging

from prefixed_formatter.constants import PANIC_LEVELNO


class BeachPanic(RuntimeError):
    """Raised at the end of the demo so the recovery path gets logged."""


def run_demo(log: logging.Logger) -> None:
    """Emit the demo records on ``log``. The logger should allow DEBUG records."""
    try:
        log.debug(
            "Started observing beach",
            extra={"prefix": "main", "animal": "walrus", "number": 8},
        )
        log.info(
            "A group of walrus emerges from the ocean",
            extra={"prefix": "main", "animal": "walrus", "size": 10},
        )
        log.warning(
            "The group's number increased tremendously!",
            extra={"prefix": "main", "omg": True, "number": 122},
        )
        log.debug("[sensor] Temperature changes", extra={"temperature": -4})
        log.log(
            PANIC_LEVELNO,
            "It's over 9000!",
            extra={"prefix": "sensor", "animal": "orca", "size": 9009},
        )
        raise BeachPanic("It's over 9000!")
    except BeachPanic:
        log.critical(
            "The ice breaks!",
            exc_info=True,
            extra={"prefix": "main", "omg": True, "number": 100},
        )
