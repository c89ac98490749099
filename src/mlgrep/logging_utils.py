#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Centralized logging setup for the mlgrep command line."""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

from mlgrep.constants import DEFAULT_LOG_LEVEL, PROGRAM_NAME


def resolve_log_level(log_level: int | str | None) -> int:
    """Turn a level name or number into a ``logging`` level.

    Unknown names fall back to ``DEFAULT_LOG_LEVEL``.
    """
    if log_level is None:
        return getattr(logging, DEFAULT_LOG_LEVEL)
    if isinstance(log_level, int):
        return log_level
    level = getattr(logging, str(log_level).strip().upper(), None)
    if not isinstance(level, int):
        return getattr(logging, DEFAULT_LOG_LEVEL)
    return level


def configure_logging(
    log_level: int | str | None,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Configure root logging handlers for a search run.

    Diagnostics go to stderr; stdout carries only matched records.

    Parameters
    ----------
    log_level : int | str | None
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Optional path to a log file for teeing log output.
    trace_mode : bool, default False
        When true, emit timestamps and logger names for debugging traces.
    stream : IO[str], optional
        Console stream; defaults to ``sys.stderr``.

    Returns
    -------
    logging.Logger
        The configured root logger instance.

    """
    resolved_level = resolve_log_level(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    if trace_mode:
        formatter = logging.Formatter(
            "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )
    else:
        formatter = logging.Formatter(f"{PROGRAM_NAME}: %(levelname)s: %(message)s")

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            root_logger.info("Logging to file: %s", log_file)

    return root_logger
