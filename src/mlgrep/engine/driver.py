#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Run a record search over one or more named sources."""

from __future__ import annotations

import logging
from contextlib import ExitStack
from typing import IO, Callable, ContextManager, Iterable, Iterator, Sequence

from rich.console import Console

from mlgrep.engine.matcher import RecordMatcher
from mlgrep.engine.patterns import PatternSet
from mlgrep.engine.renderer import OutputRenderer
from mlgrep.engine.segmenter import segment_records
from mlgrep.engine.separator import Separator
from mlgrep.engine.types import OutputMode, Record, RunCounters
from mlgrep.exceptions import FileError
from mlgrep.options.grep import GrepOptions

logger = logging.getLogger(__name__)

SourceOpener = Callable[[str], ContextManager[Iterable[str]]]


def read_lines(name: str, stream: Iterable[str]) -> Iterator[str]:
    """Iterate ``stream``, reporting read and decode failures as ``FileError``."""
    try:
        yield from stream
    except FileError:
        raise
    except (OSError, UnicodeDecodeError, EOFError) as exc:
        raise FileError(f"Error reading {name}: {exc}", file_path=name, original_error=exc) from exc


def resolve_output_mode(options: GrepOptions, highlight: bool) -> OutputMode:
    """Pick the output mode; count wins over highlighting."""
    if options.count:
        return OutputMode.COUNT
    return OutputMode.HIGHLIGHT if highlight else OutputMode.PLAIN


class GrepDriver:
    """Compile a search once and run it over sources in order.

    Patterns and the separator are compiled in the constructor so any
    configuration error surfaces before input is read.

    Parameters
    ----------
    patterns : Sequence[str]
        Search patterns
    options : GrepOptions, optional
        Search configuration
    highlight : bool, default False
        Emphasize matched text; the caller decides based on the terminal
    stream : IO[str], optional
        Output destination, ``sys.stdout`` by default
    console : Console, optional
        Rich console used for highlight styling

    """

    def __init__(
        self,
        patterns: Sequence[str],
        options: GrepOptions | None = None,
        *,
        highlight: bool = False,
        stream: IO[str] | None = None,
        console: Console | None = None,
    ) -> None:
        self.options = options or GrepOptions()
        self.pattern_set = PatternSet.compile(
            patterns,
            ignore_case=self.options.ignore_case,
            fixed_strings=self.options.fixed_strings,
            require_all=self.options.require_all,
            invert=self.options.invert_match,
        )
        self.separator = Separator.from_options(self.options)
        self.mode = resolve_output_mode(self.options, highlight)
        self.counters = RunCounters()
        self.matcher = RecordMatcher(
            self.pattern_set,
            match_header=self.options.match_header,
            collect_spans=self.mode is OutputMode.HIGHLIGHT,
        )
        self.renderer = OutputRenderer(
            self.mode,
            self.counters,
            stream=stream,
            console=console,
            highlight_style=self.options.highlight_style,
            output_separator=self.options.output_separator,
        )
        logger.debug("Searching for %s", self.pattern_set.describe())

    def records(self, stream: Iterable[str], name: str | None = None) -> Iterator[Record]:
        """Yield the records of ``stream`` that the pattern set selects.

        Nothing is written and the run counters are not touched.
        """
        for record in segment_records(stream, self.separator, source=name):
            if self.matcher(record):
                yield record

    def run_source(self, name: str, stream: Iterable[str]) -> int:
        """Search one already-opened source and return its match count."""
        self.counters.start_source(name)
        before = self.counters.matched
        for record in segment_records(stream, self.separator, source=name):
            self.counters.scanned += 1
            self.renderer.emit(record, self.matcher.match(record))
        found = self.counters.matched - before
        logger.debug("%s: %d matching record(s)", name, found)
        return found

    def _source_failed(self, name: str, exc: Exception) -> None:
        logger.error("%s: %s", name, getattr(exc, "message", None) or exc)
        self.counters.failed_sources.append(name)

    def run(self, sources: Sequence[str], opener: SourceOpener) -> RunCounters:
        """Search ``sources`` in order, opening each with ``opener``.

        A source that cannot be opened or read is logged and skipped; the run
        goes on with the remaining sources and is marked as failed. Errors
        writing the output propagate.
        """
        label_counts = len(sources) > 1
        for name in sources:
            with ExitStack() as stack:
                try:
                    stream = stack.enter_context(opener(name))
                except (FileError, OSError) as exc:
                    self._source_failed(name, exc)
                    continue
                try:
                    found = self.run_source(name, read_lines(name, stream))
                except FileError as exc:
                    self._source_failed(name, exc)
                    continue
            if self.mode is OutputMode.COUNT:
                self.renderer.write_count(found, name if label_counts else None)
        self.renderer.flush()
        return self.counters

    @property
    def success(self) -> bool:
        """Whether the run found a record and every source was readable."""
        return self.counters.success
