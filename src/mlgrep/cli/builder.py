#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Argument parser construction and exit codes for the mlgrep CLI."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Sequence

from mlgrep.constants import DEFAULT_SEPARATOR, HIGHLIGHT_MODES, MATCH_MODES, PROGRAM_NAME, STDIN_NAME
from mlgrep.exceptions import ConfigError, FileError, ValidationError
from mlgrep.options import GrepOptions

EXIT_SUCCESS = 0
EXIT_NO_MATCH = 1
EXIT_FILE_ERROR = 1
EXIT_VALIDATION_ERROR = 2
EXIT_ERROR = 2

_DESCRIPTION = "Find multi-line records matching PATTERN(s) in FILE(s) or stdin."

_EPILOG = f"""\
Records are separated by lines matching the record separator
(default: {DEFAULT_SEPARATOR!r}, i.e. blank lines and ----/==== rules).
Arguments after '--' are always files. Without '--', arguments are
patterns up to the first one that names an existing file or '-'.

exit status: 0 if a record matched, 1 if none matched or an input
could not be read, 2 on configuration errors.
"""


@dataclass
class Invocation:
    """Parsed command line: options namespace plus patterns and files."""

    args: argparse.Namespace
    patterns: List[str] = field(default_factory=list)
    files: List[str] = field(default_factory=list)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for ``mlgrep``."""
    from mlgrep import __version__

    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        usage=f"{PROGRAM_NAME} [OPTIONS] PATTERN [PATTERN...] [--] [FILE...]",
        description=_DESCRIPTION,
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("args", nargs="*", metavar="PATTERN|FILE", help="Search patterns, then input files")
    parser.add_argument(
        "-e",
        "--regexp",
        dest="patterns",
        action="append",
        metavar="PATTERN",
        help="Search pattern (repeatable); all positional arguments are then files",
    )

    match_group = parser.add_argument_group("matching")
    mode_group = match_group.add_mutually_exclusive_group()
    mode_group.add_argument(
        "-a", "--and", dest="match_mode", action="store_const", const="all", help="Records must match ALL patterns"
    )
    mode_group.add_argument(
        "--any", dest="match_mode", action="store_const", const="any", help="Records must match ANY pattern (default)"
    )
    mode_group.add_argument("--mode", dest="match_mode", choices=list(MATCH_MODES), help="Pattern combination mode")
    match_group.add_argument(
        "-v",
        "--invert-match",
        dest="invert_match",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Select records that do not match",
    )
    match_group.add_argument(
        "-i",
        "--ignore-case",
        dest="ignore_case",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Case-insensitive matching",
    )
    match_group.add_argument(
        "-F",
        "--fixed-strings",
        dest="fixed_strings",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Patterns are literal strings, not regular expressions",
    )
    match_group.add_argument(
        "--match-header",
        dest="match_header",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Also search the separator line that opens each record",
    )

    record_group = parser.add_argument_group("records")
    record_group.add_argument(
        "-r", "--rs", dest="separator", metavar="REGEX", help="Record separator regular expression"
    )
    record_group.add_argument(
        "-t",
        "--timestamp",
        dest="timestamp",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Start a record at every line beginning with a log timestamp (overrides --rs)",
    )

    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "-c",
        "--count",
        dest="count",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Print only the number of matching records",
    )
    output_group.add_argument(
        "-o", "--ors", dest="output_separator", metavar="STRING", help="Line printed between output records"
    )
    output_group.add_argument(
        "--color",
        "--colour",
        "--highlight",
        dest="highlight",
        choices=list(HIGHLIGHT_MODES),
        help="Highlight matched text (default: auto)",
    )
    output_group.add_argument("--highlight-style", dest="highlight_style", metavar="STYLE", help="Rich highlight style")
    output_group.add_argument("--encoding", dest="encoding", help="Input text encoding (default: utf-8)")

    general_group = parser.add_argument_group("general")
    general_group.add_argument("--config", metavar="PATH", help="Configuration file overriding discovered defaults")
    general_group.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Diagnostic logging level (default: WARNING)",
    )
    general_group.add_argument("--log-file", metavar="PATH", help="Also write diagnostics to PATH")
    general_group.add_argument("--trace", action="store_true", help="Timestamped diagnostics with logger names")
    general_group.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def split_patterns_and_files(arguments: Sequence[str]) -> tuple[List[str], List[str]]:
    """Split positional arguments into patterns and files.

    The first argument is always a pattern. The first later argument that
    is ``-`` or names an existing path starts the file list.
    """
    for idx, argument in enumerate(arguments):
        if idx == 0:
            continue
        if argument == STDIN_NAME or Path(argument).exists():
            return list(arguments[:idx]), list(arguments[idx:])
    return list(arguments), []


def parse_invocation(parser: argparse.ArgumentParser, argv: Sequence[str]) -> Invocation:
    """Parse ``argv`` into an ``Invocation``.

    Everything after the first ``--`` is a file. Exits through
    ``parser.error`` when no pattern was given.
    """
    argv = list(argv)
    explicit_files: List[str] | None = None
    if "--" in argv:
        cut = argv.index("--")
        argv, explicit_files = argv[:cut], argv[cut + 1 :]

    args = parser.parse_intermixed_args(argv)
    positionals: List[str] = list(args.args)

    if args.patterns:
        patterns = list(args.patterns)
        files = positionals + (explicit_files or [])
    elif explicit_files is not None:
        patterns, files = positionals, explicit_files
    else:
        patterns, files = split_patterns_and_files(positionals)

    if not patterns:
        parser.error("at least one PATTERN is required")
    return Invocation(args=args, patterns=patterns, files=files)


def collect_option_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Return the ``GrepOptions`` fields explicitly set on the command line."""
    overrides: Dict[str, Any] = {}
    for option in fields(GrepOptions):
        value = getattr(args, option.name, None)
        if value is not None:
            overrides[option.name] = value
    return overrides


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (ValidationError, ConfigError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, (FileError, OSError)):
        return EXIT_FILE_ERROR

    return EXIT_ERROR
