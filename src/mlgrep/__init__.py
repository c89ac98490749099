#  Copyright (c) 2025 Tom Villani, Ph.D.
"""mlgrep - grep for multi-line records.

mlgrep treats its input as a sequence of records separated by a
configurable boundary pattern (blank lines and ``----`` rules by default,
or log timestamps) and reports whole records that match one or more
patterns, instead of single lines.

Examples
--------
Filter an in-memory log::

    >>> import io
    >>> from mlgrep import grep_records
    >>> text = "a\\n\\n b\\nfoo\\n\\nc\\n"
    >>> [record.body for record in grep_records(io.StringIO(text), ["foo"])]
    [(' b', 'foo')]

Count matching records::

    >>> from mlgrep import count_records
    >>> count_records(io.StringIO(text), ["foo"])
    1

"""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence

from mlgrep.engine import (
    GrepDriver,
    MatchState,
    OutputMode,
    OutputRenderer,
    PatternSet,
    Record,
    RecordMatcher,
    RunCounters,
    Separator,
    normalize_pattern,
    segment_records,
    segment_text,
)
from mlgrep.exceptions import (
    ConfigError,
    DecompressionError,
    FileAccessError,
    FileError,
    InvalidPatternError,
    MlgrepError,
    ValidationError,
)
from mlgrep.options import GrepOptions

__version__ = "0.3.0"


def grep_records(
    stream: Iterable[str],
    patterns: Sequence[str],
    options: GrepOptions | None = None,
    *,
    source: str | None = None,
) -> Iterator[Record]:
    """Yield the records of ``stream`` selected by ``patterns``.

    Parameters
    ----------
    stream : Iterable[str]
        Text lines, e.g. an open file or ``io.StringIO``
    patterns : Sequence[str]
        One or more regular expressions (literal strings with
        ``fixed_strings``)
    options : GrepOptions, optional
        Matching and separator configuration; output settings are ignored
    source : str, optional
        Name attached to the yielded records

    Raises
    ------
    InvalidPatternError
        If a pattern or the separator does not compile; raised before the
        stream is read

    """
    driver = GrepDriver(patterns, options)
    return driver.records(stream, source)


def count_records(stream: Iterable[str], patterns: Sequence[str], options: GrepOptions | None = None) -> int:
    """Return the number of records of ``stream`` selected by ``patterns``."""
    return sum(1 for _ in grep_records(stream, patterns, options))


__all__ = [
    "ConfigError",
    "DecompressionError",
    "FileAccessError",
    "FileError",
    "GrepDriver",
    "GrepOptions",
    "InvalidPatternError",
    "MatchState",
    "MlgrepError",
    "OutputMode",
    "OutputRenderer",
    "PatternSet",
    "Record",
    "RecordMatcher",
    "RunCounters",
    "Separator",
    "ValidationError",
    "__version__",
    "count_records",
    "grep_records",
    "normalize_pattern",
    "segment_records",
    "segment_text",
]
