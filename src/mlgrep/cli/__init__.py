#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for mlgrep.

Examples
--------
Records (paragraphs separated by blank lines or ---- rules) containing
"error"::

    $ mlgrep error app.log

Records containing both patterns, case-insensitively::

    $ mlgrep -a -i timeout retry -- app.log

One record per timestamped log entry, counted per file::

    $ mlgrep -t -c --match-header ERROR app.log app.log.1.gz

Custom separator::

    $ mlgrep --rs '^commit [0-9a-f]+$' Fixes -- history.txt

Defaults can be kept in ``.mlgrep.toml`` (or YAML/JSON, or a
``[tool.mlgrep]`` table in pyproject.toml); ``MLGREP_CONFIG`` points at an
explicit file.
"""

import logging
import os
import sys
from functools import partial
from typing import Sequence

from mlgrep.cli.builder import (
    EXIT_NO_MATCH,
    EXIT_SUCCESS,
    collect_option_overrides,
    create_parser,
    get_exit_code_for_exception,
    parse_invocation,
)
from mlgrep.cli.config import apply_config, load_config_with_priority
from mlgrep.cli.output import make_console, should_highlight
from mlgrep.constants import CONFIG_ENV_VAR, STDIN_NAME
from mlgrep.engine.driver import GrepDriver
from mlgrep.engine.types import RunCounters
from mlgrep.exceptions import MlgrepError, ValidationError
from mlgrep.inputs import open_source
from mlgrep.logging_utils import configure_logging
from mlgrep.options import GrepOptions

logger = logging.getLogger(__name__)


def _silence_stdout() -> None:
    """Point stdout at devnull after the reader went away.

    Keeps the interpreter's final flush from raising another
    ``BrokenPipeError`` on exit.
    """
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    except (OSError, ValueError):
        logger.debug("stdout has no file descriptor to redirect")


def build_options(args, config: dict) -> GrepOptions:
    """Combine defaults, config file values and command line flags."""
    options = apply_config(GrepOptions(), config)
    overrides = collect_option_overrides(args)
    if not overrides:
        return options
    try:
        return options.create_updated(**overrides)
    except ValueError as exc:
        raise ValidationError(str(exc), original_error=exc) from exc


def _exit_status(counters: RunCounters) -> int:
    return EXIT_SUCCESS if counters.success else EXIT_NO_MATCH


def main(argv: Sequence[str] | None = None) -> int:
    """Run mlgrep and return the process exit status."""
    parser = create_parser()
    try:
        invocation = parse_invocation(parser, sys.argv[1:] if argv is None else argv)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 0

    args = invocation.args
    configure_logging(args.log_level, log_file=args.log_file, trace_mode=args.trace)

    try:
        config = load_config_with_priority(explicit_path=args.config, env_var_path=os.environ.get(CONFIG_ENV_VAR))
        options = build_options(args, config)
        highlight = not options.count and should_highlight(options.highlight, sys.stdout)
        driver = GrepDriver(
            invocation.patterns,
            options,
            highlight=highlight,
            stream=sys.stdout,
            console=make_console(sys.stdout, force_terminal=True) if highlight else None,
        )
    except MlgrepError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return get_exit_code_for_exception(exc)

    sources = invocation.files or [STDIN_NAME]
    opener = partial(open_source, encoding=options.encoding, errors=options.encoding_errors)
    try:
        counters = driver.run(sources, opener)
    except KeyboardInterrupt:
        logger.debug("Interrupted")
        counters = driver.counters
    except BrokenPipeError:
        _silence_stdout()
        counters = driver.counters
    except OSError as exc:
        print(f"Error: cannot write output: {exc}", file=sys.stderr)
        return get_exit_code_for_exception(exc)

    logger.debug("Run summary: %s", counters.to_dict())
    return _exit_status(counters)


__all__ = ["main", "build_options"]
