#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Record boundary recognition.

A separator is one regular expression. Most separators look at a single
line; an expression containing a newline is tested against a window of
consecutive lines so multi-line boundaries can be written as one pattern.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from itertools import islice
from typing import TYPE_CHECKING, Sequence

from mlgrep.constants import DEFAULT_SEPARATOR, MAX_SEPARATOR_WINDOW, TIMESTAMP_SEPARATOR
from mlgrep.engine.patterns import compile_pattern

if TYPE_CHECKING:
    from mlgrep.options.grep import GrepOptions

logger = logging.getLogger(__name__)


def separator_window(pattern: str) -> int:
    """Number of lines a separator pattern needs to see at once.

    One line, plus one for every newline the pattern can match, counted as
    literal newlines and ``\\n`` escapes.
    """
    newlines = pattern.count("\n") + len(re.findall(r"(?<!\\)(?:\\\\)*\\n", pattern))
    return max(1, min(1 + newlines, MAX_SEPARATOR_WINDOW))


@dataclass(frozen=True)
class Separator:
    """Compiled boundary predicate.

    Attributes
    ----------
    regex : re.Pattern[str]
        Boundary pattern, compiled with ``re.MULTILINE``
    window : int
        How many lines the pattern is tested against

    """

    regex: re.Pattern[str]
    window: int = 1

    @classmethod
    def compile(cls, pattern: str = DEFAULT_SEPARATOR, *, ignore_case: bool = False) -> "Separator":
        """Compile a separator pattern.

        Raises
        ------
        InvalidPatternError
            If the pattern is not a valid regular expression

        """
        flags = re.MULTILINE | (re.IGNORECASE if ignore_case else 0)
        regex = compile_pattern(pattern, flags=flags, role="separator")
        window = separator_window(pattern)
        logger.debug("Record separator %r (window of %d line(s))", pattern, window)
        return cls(regex=regex, window=window)

    @classmethod
    def timestamp(cls, *, ignore_case: bool = False) -> "Separator":
        """Separator that starts a record at each timestamped log line."""
        return cls.compile(TIMESTAMP_SEPARATOR, ignore_case=ignore_case)

    @classmethod
    def from_options(cls, options: "GrepOptions") -> "Separator":
        """Build the separator configured by ``options``."""
        return cls.compile(options.effective_separator, ignore_case=options.ignore_case)

    @property
    def pattern(self) -> str:
        """The separator's regex source."""
        return self.regex.pattern

    def match(self, lines: Sequence[str]) -> int:
        """Test for a boundary at the first of ``lines``.

        Parameters
        ----------
        lines : Sequence[str]
            The next unconsumed lines, without terminators (a list or the
            segmenter's deque). Only the first ``window`` lines are looked at.

        Returns
        -------
        int
            Number of lines making up the boundary (the new record's header),
            or 0 when no boundary starts at the first line

        """
        if not lines:
            return 0
        if self.window == 1:
            return 1 if self.regex.search(lines[0]) is not None else 0

        candidate = list(islice(lines, self.window))
        text = "\n".join(candidate)
        found = self.regex.search(text)
        if found is None or found.start() > len(candidate[0]):
            return 0

        start, end = found.span()
        consumed = text.count("\n", 0, end) + 1
        if end > start and text[end - 1] == "\n":
            consumed -= 1
        return min(consumed, len(candidate))

    def is_boundary(self, line: str) -> bool:
        """Whether a single line opens a new record."""
        return self.match([line]) > 0
