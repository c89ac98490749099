#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Search pattern compilation and the ANY/ALL combination.

Patterns are compiled once, up front, so a bad expression is reported before
any input is read.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Sequence

from mlgrep.exceptions import InvalidPatternError, ValidationError

logger = logging.getLogger(__name__)


def normalize_pattern(pattern: str, *, fixed_strings: bool = False) -> str:
    """Return the regex source for a user-supplied pattern.

    Literal patterns are escaped; regular expressions are passed through
    unchanged since Python's ``re`` dialect is the one users write in.
    """
    if fixed_strings:
        return re.escape(pattern)
    return pattern


def compile_pattern(
    pattern: str,
    *,
    flags: int = 0,
    fixed_strings: bool = False,
    role: str = "pattern",
    position: int | None = None,
) -> re.Pattern[str]:
    """Compile a single pattern, raising ``InvalidPatternError`` on failure."""
    source = normalize_pattern(pattern, fixed_strings=fixed_strings)
    try:
        return re.compile(source, flags)
    except re.error as exc:
        raise InvalidPatternError(pattern, role=role, position=position, original_error=exc) from exc


def merge_spans(spans: Iterable[tuple[int, int]]) -> list[tuple[int, int]]:
    """Merge overlapping or touching spans into a sorted, disjoint list."""
    merged: list[tuple[int, int]] = []
    for start, end in sorted(spans):
        if merged and start <= merged[-1][1]:
            if end > merged[-1][1]:
                merged[-1] = (merged[-1][0], end)
            continue
        merged.append((start, end))
    return merged


@dataclass(frozen=True)
class PatternSet:
    """Compiled search patterns plus the combination flags.

    Attributes
    ----------
    patterns : tuple[re.Pattern[str], ...]
        Compiled patterns, in the order given
    require_all : bool
        ALL mode when true (every pattern must occur somewhere in the record),
        ANY mode otherwise
    invert : bool
        Flip the combined outcome

    """

    patterns: tuple[re.Pattern[str], ...]
    require_all: bool = False
    invert: bool = False

    @classmethod
    def compile(
        cls,
        patterns: Sequence[str],
        *,
        ignore_case: bool = False,
        fixed_strings: bool = False,
        require_all: bool = False,
        invert: bool = False,
    ) -> "PatternSet":
        """Compile ``patterns`` into a ``PatternSet``.

        Raises
        ------
        ValidationError
            If no pattern was given
        InvalidPatternError
            If any pattern fails to compile

        """
        if isinstance(patterns, str):
            patterns = [patterns]
        if not patterns:
            raise ValidationError("At least one search pattern is required", parameter_name="patterns")

        flags = re.IGNORECASE if ignore_case else 0
        compiled = tuple(
            compile_pattern(pattern, flags=flags, fixed_strings=fixed_strings, position=position)
            for position, pattern in enumerate(patterns, start=1)
        )
        logger.debug(
            "Compiled %d pattern(s), mode=%s, invert=%s, ignore_case=%s",
            len(compiled),
            "all" if require_all else "any",
            invert,
            ignore_case,
        )
        return cls(patterns=compiled, require_all=require_all, invert=invert)

    def __len__(self) -> int:
        return len(self.patterns)

    def combine(self, hits: Sequence[bool]) -> bool:
        """Apply ANY/ALL to per-pattern hits, then the inversion."""
        outcome = all(hits) if self.require_all else any(hits)
        return outcome != self.invert

    def evaluate(self, lines: Iterable[str]) -> bool:
        """Decide whether a record made of ``lines`` is selected.

        Each pattern only needs to match one line; under ALL mode different
        patterns may match different lines.
        """
        hits = [False] * len(self.patterns)
        remaining = len(self.patterns)
        for line in lines:
            for idx, pattern in enumerate(self.patterns):
                if hits[idx] or pattern.search(line) is None:
                    continue
                hits[idx] = True
                remaining -= 1
                if not self.require_all or remaining == 0:
                    return self.combine(hits)
        return self.combine(hits)

    def find_spans(self, line: str) -> list[tuple[int, int]]:
        """Return the merged spans of ``line`` matched by any pattern.

        Zero-width matches are skipped since there is nothing to emphasize.
        """
        spans: list[tuple[int, int]] = []
        for pattern in self.patterns:
            for match in pattern.finditer(line):
                start, end = match.span()
                if start != end:
                    spans.append((start, end))
        return merge_spans(spans)

    def describe(self) -> str:
        """Short human-readable summary used in log messages."""
        joined = (" AND " if self.require_all else " OR ").join(p.pattern for p in self.patterns)
        return f"NOT ({joined})" if self.invert else joined
