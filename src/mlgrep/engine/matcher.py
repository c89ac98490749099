#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Apply a ``PatternSet`` to records."""

from __future__ import annotations

from mlgrep.engine.patterns import PatternSet
from mlgrep.engine.types import MatchState, Record


class RecordMatcher:
    """Decide whether records are selected, and where their matches are.

    Parameters
    ----------
    patterns : PatternSet
        Compiled patterns and combination flags
    match_header : bool, default False
        Search the header as well as the body. By default the header is
        context only.
    collect_spans : bool, default False
        Compute highlight spans for selected records

    """

    def __init__(self, patterns: PatternSet, *, match_header: bool = False, collect_spans: bool = False) -> None:
        self.patterns = patterns
        self.match_header = match_header
        self.collect_spans = collect_spans

    def _scanned_lines(self, record: Record) -> tuple[int, list[str]]:
        """Return the offset of the first scanned line and the scanned lines."""
        if self.match_header:
            return 0, record.lines()
        return len(record.header_lines()), list(record.body)

    def match(self, record: Record) -> MatchState:
        """Evaluate ``record`` against the pattern set."""
        offset, lines = self._scanned_lines(record)
        matched = self.patterns.evaluate(lines)
        state = MatchState(matched=matched)
        if matched and self.collect_spans:
            for idx, line in enumerate(lines):
                spans = self.patterns.find_spans(line)
                if spans:
                    state.spans[offset + idx] = spans
        return state

    def __call__(self, record: Record) -> bool:
        return self.match(record).matched
