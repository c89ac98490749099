#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Shared data structures for the record search engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Mapping


class OutputMode(Enum):
    """How matched records are written."""

    PLAIN = auto()
    HIGHLIGHT = auto()
    COUNT = auto()


@dataclass(frozen=True)
class Record:
    """A multi-line record cut from an input stream.

    ``header`` holds the separator text that opened the record, or ``None``
    for a record that starts at the top of the stream without a boundary.
    Lines are kept without their line terminators.
    """

    header: str | None
    body: tuple[str, ...]
    source: str | None = None
    index: int = 0

    def header_lines(self) -> list[str]:
        """Return the header split into lines (empty when there is none)."""
        if self.header is None:
            return []
        return self.header.split("\n")

    def lines(self) -> list[str]:
        """Return header lines followed by body lines, as found in the input."""
        return self.header_lines() + list(self.body)

    @property
    def has_blank_header(self) -> bool:
        """True when the header is missing or made of whitespace only."""
        return self.header is None or not self.header.strip()

    @property
    def text(self) -> str:
        """The record as newline-terminated text."""
        return "".join(f"{line}\n" for line in self.lines())


@dataclass
class MatchState:
    """Per-record match outcome.

    ``spans`` maps a line offset within ``Record.lines()`` to the
    ``(start, end)`` character spans to emphasize on that line.
    """

    matched: bool
    spans: dict[int, list[tuple[int, int]]] = field(default_factory=dict)


@dataclass
class RunCounters:
    """Accumulated results of one search invocation."""

    matched: int = 0
    scanned: int = 0
    per_source: dict[str, int] = field(default_factory=dict)
    failed_sources: list[str] = field(default_factory=list)

    def record_match(self, source: str | None) -> None:
        """Count one accepted record."""
        self.matched += 1
        key = source or ""
        self.per_source[key] = self.per_source.get(key, 0) + 1

    def start_source(self, source: str) -> None:
        """Register ``source`` so it reports zero when nothing matches."""
        self.per_source.setdefault(source, 0)

    def source_count(self, source: str) -> int:
        """Number of records accepted from ``source``."""
        return self.per_source.get(source, 0)

    @property
    def any_matched(self) -> bool:
        """Whether at least one record was accepted."""
        return self.matched > 0

    @property
    def success(self) -> bool:
        """Found something and no source failed."""
        return self.any_matched and not self.failed_sources

    def to_dict(self) -> Mapping[str, object]:
        """Return a plain summary suitable for logging or JSON."""
        return {
            "matched": self.matched,
            "scanned": self.scanned,
            "per_source": dict(self.per_source),
            "failed_sources": list(self.failed_sources),
        }
