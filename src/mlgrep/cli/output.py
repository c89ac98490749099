"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import os
import sys
from typing import IO

from rich.console import Console


def make_console(stream: IO[str] | None = None, *, force_terminal: bool | None = None) -> Console:
    """Create the rich console used for highlighting and terminal detection."""
    return Console(file=stream or sys.stdout, force_terminal=force_terminal, highlight=False, emoji=False)


def should_highlight(mode: str, stream: IO[str] | None = None) -> bool:
    """Decide whether matched text is highlighted.

    Parameters
    ----------
    mode : str
        ``always``, ``never`` or ``auto``
    stream : IO[str], optional
        Output stream checked in ``auto`` mode; uses sys.stdout unless
        otherwise specified.

    Returns
    -------
    bool
        True if highlighting escape codes should be written

    Notes
    -----
    In ``auto`` mode highlighting is used when:
    - the output stream is a terminal
    - AND the ``NO_COLOR`` environment variable is not set

    """
    if mode == "always":
        return True
    if mode == "never":
        return False

    if os.environ.get("NO_COLOR"):
        return False

    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    if not callable(isatty):
        return False
    try:
        return bool(isatty()) and make_console(target).is_terminal
    except (OSError, ValueError):
        return False
