"""
terminal.py – Decide whether an output handle is an interactive terminal.
"""

from __future__ import annotations

import os
from typing import Any


def is_terminal(output: Any) -> bool:
    """
    Return True if ``output`` is attached to a TTY.

    Accepts a file-like object with ``isatty()``, or an integer file
    descriptor. ``None`` and anything that cannot answer are treated as
    "not a terminal".
    """
    if output is None:
        return False
    try:
        if isinstance(output, int):
            return os.isatty(output)
        isatty = getattr(output, "isatty", None)
        if isatty is None:
            return False
        return bool(isatty())
    except (OSError, ValueError):
        # Closed or detached streams raise ValueError.
        return False
