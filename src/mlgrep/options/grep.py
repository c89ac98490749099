#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for a record search run."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from mlgrep.constants import (
    DEFAULT_ENCODING,
    DEFAULT_ENCODING_ERRORS,
    DEFAULT_HIGHLIGHT_STYLE,
    DEFAULT_SEPARATOR,
    HIGHLIGHT_MODES,
    MATCH_MODES,
    TIMESTAMP_SEPARATOR,
    HighlightMode,
    MatchMode,
)
from mlgrep.options.base import CloneFrozenMixin

_ENCODING_ERROR_POLICIES = ("strict", "replace", "ignore", "backslashreplace", "surrogateescape")


@dataclass(frozen=True)
class GrepOptions(CloneFrozenMixin):
    """Search configuration toggles used by the CLI and API.

    Every field can also be set from a configuration file; the CLI applies
    file values first and command line flags on top.
    """

    match_mode: MatchMode = field(
        default="any",
        metadata={
            "help": "Record matches when ANY pattern occurs, or only when ALL patterns occur",
            "choices": list(MATCH_MODES),
            "importance": "core",
        },
    )
    invert_match: bool = field(
        default=False,
        metadata={
            "help": "Select records that do NOT match (applied after the any/all combination)",
            "importance": "core",
        },
    )
    ignore_case: bool = field(
        default=False,
        metadata={
            "help": "Case-insensitive matching for patterns, highlighting and the separator",
            "importance": "core",
        },
    )
    fixed_strings: bool = field(
        default=False,
        metadata={
            "help": "Treat patterns as literal strings instead of regular expressions",
            "importance": "core",
        },
    )
    count: bool = field(
        default=False,
        metadata={
            "help": "Print only the number of matching records per input",
            "importance": "core",
        },
    )
    highlight: HighlightMode = field(
        default="auto",
        metadata={
            "help": "Highlight matched text: always, never, or auto (only on a terminal)",
            "choices": list(HIGHLIGHT_MODES),
            "importance": "core",
        },
    )
    highlight_style: str = field(
        default=DEFAULT_HIGHLIGHT_STYLE,
        metadata={
            "help": "Rich style used to emphasize matched text (e.g. 'bold red', 'reverse')",
            "importance": "advanced",
        },
    )
    separator: str = field(
        default=DEFAULT_SEPARATOR,
        metadata={
            "help": "Regular expression that recognizes the line starting a new record",
            "importance": "core",
        },
    )
    timestamp: bool = field(
        default=False,
        metadata={
            "help": "Start a new record at every line beginning with a log timestamp (overrides separator)",
            "importance": "core",
        },
    )
    output_separator: str | None = field(
        default=None,
        metadata={
            "help": "Line printed between matched records (default: a blank line)",
            "importance": "advanced",
        },
    )
    match_header: bool = field(
        default=False,
        metadata={
            "help": "Also search the separator line that opens each record",
            "importance": "advanced",
        },
    )
    encoding: str = field(
        default=DEFAULT_ENCODING,
        metadata={
            "help": "Text encoding of the inputs",
            "importance": "advanced",
        },
    )
    encoding_errors: str = field(
        default=DEFAULT_ENCODING_ERRORS,
        metadata={
            "help": "How undecodable bytes are handled (strict, replace, ignore, ...)",
            "choices": list(_ENCODING_ERROR_POLICIES),
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Validate enumerated values at construction time."""
        if self.match_mode not in MATCH_MODES:
            raise ValueError(f"match_mode must be one of {', '.join(MATCH_MODES)}, got {self.match_mode!r}")
        if self.highlight not in HIGHLIGHT_MODES:
            raise ValueError(f"highlight must be one of {', '.join(HIGHLIGHT_MODES)}, got {self.highlight!r}")
        if self.encoding_errors not in _ENCODING_ERROR_POLICIES:
            raise ValueError(f"encoding_errors must be one of {', '.join(_ENCODING_ERROR_POLICIES)}")
        if not isinstance(self.separator, str):
            raise ValueError("separator must be a string")
        if self.output_separator is not None and not isinstance(self.output_separator, str):
            raise ValueError("output_separator must be a string")

    @property
    def require_all(self) -> bool:
        """Whether every pattern has to occur in a record."""
        return self.match_mode == "all"

    @property
    def effective_separator(self) -> str:
        """Separator regex actually used, honoring the timestamp preset."""
        return TIMESTAMP_SEPARATOR if self.timestamp else self.separator

    @property
    def regex_flags(self) -> int:
        """Flags shared by the search patterns and the separator."""
        return re.IGNORECASE if self.ignore_case else 0


__all__ = ["GrepOptions"]
