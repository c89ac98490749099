#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Write selected records to the output stream.

Highlighting uses rich styles for the escape codes only. Line text is
written as read: never wrapped, cropped, tab-expanded, stripped of control
characters or parsed for markup.
"""

from __future__ import annotations

import sys
from typing import IO, Sequence

from rich.color import ColorSystem
from rich.console import Console
from rich.errors import StyleSyntaxError
from rich.style import Style

from mlgrep.constants import DEFAULT_HIGHLIGHT_STYLE
from mlgrep.engine.types import MatchState, OutputMode, Record, RunCounters
from mlgrep.exceptions import ValidationError

_COLOR_SYSTEMS = {
    "standard": ColorSystem.STANDARD,
    "256": ColorSystem.EIGHT_BIT,
    "truecolor": ColorSystem.TRUECOLOR,
    "windows": ColorSystem.WINDOWS,
}


def highlight_line(
    line: str,
    spans: Sequence[tuple[int, int]] | None,
    style: Style,
    color_system: ColorSystem = ColorSystem.STANDARD,
) -> str:
    """Return ``line`` with each of ``spans`` wrapped in the escape codes of ``style``.

    ``spans`` must be sorted and disjoint, as produced by ``merge_spans``.
    """
    pieces: list[str] = []
    position = 0
    for start, end in spans or ():
        pieces.append(line[position:start])
        pieces.append(style.render(line[start:end], color_system=color_system))
        position = end
    pieces.append(line[position:])
    return "".join(pieces)


def visible_header_lines(record: Record) -> list[tuple[int, str]]:
    """Header lines to print, paired with their offset in ``Record.lines()``.

    Blank lines folded in front of the header are dropped since the output
    record separator already provides the spacing. A blank header prints
    nothing.
    """
    if record.has_blank_header:
        return []
    numbered = list(enumerate(record.header_lines()))
    while numbered and not numbered[0][1].strip():
        numbered.pop(0)
    return numbered


class OutputRenderer:
    """Render selected records in plain, highlight or count mode.

    Parameters
    ----------
    mode : OutputMode
        Output mode
    counters : RunCounters
        Run-wide accumulator; incremented once per selected record
    stream : IO[str], optional
        Destination, ``sys.stdout`` by default
    console : Console, optional
        Console whose color system decides the escape codes in highlight mode
    highlight_style : str, default "bold red"
        Rich style for matched text
    output_separator : str, optional
        Line written between records; a blank line when not given

    Raises
    ------
    ValidationError
        If ``highlight_style`` is not a valid rich style in highlight mode

    """

    def __init__(
        self,
        mode: OutputMode,
        counters: RunCounters,
        *,
        stream: IO[str] | None = None,
        console: Console | None = None,
        highlight_style: str = DEFAULT_HIGHLIGHT_STYLE,
        output_separator: str | None = None,
    ) -> None:
        self.mode = mode
        self.counters = counters
        self.stream = stream if stream is not None else sys.stdout
        self.output_separator = output_separator
        self.emitted = 0
        self._style = Style.null()
        self._color_system = ColorSystem.STANDARD
        if mode is OutputMode.HIGHLIGHT:
            try:
                self._style = Style.parse(highlight_style)
            except StyleSyntaxError as exc:
                raise ValidationError(
                    f"Invalid highlight style {highlight_style!r}: {exc}",
                    parameter_name="highlight_style",
                    parameter_value=highlight_style,
                    original_error=exc,
                ) from exc
            console = console or Console(file=self.stream, force_terminal=True, highlight=False)
            self._color_system = _COLOR_SYSTEMS.get(console.color_system or "standard", ColorSystem.STANDARD)

    def emit(self, record: Record, state: MatchState) -> bool:
        """Account for ``record`` and write it when it was selected.

        Returns
        -------
        bool
            Whether the record was selected

        """
        if not state.matched:
            return False
        self.counters.record_match(record.source)
        if self.mode is OutputMode.COUNT:
            return True

        if self.emitted:
            separator = "" if self.output_separator is None else self.output_separator
            self.stream.write(separator + "\n")

        numbered = visible_header_lines(record)
        body_offset = len(record.header_lines())
        numbered.extend((body_offset + idx, line) for idx, line in enumerate(record.body))
        for offset, line in numbered:
            if self.mode is OutputMode.HIGHLIGHT:
                self._write_highlighted(line, state.spans.get(offset))
            else:
                self.stream.write(line + "\n")
        self.emitted += 1
        return True

    def _write_highlighted(self, line: str, spans: list[tuple[int, int]] | None) -> None:
        self.stream.write(highlight_line(line, spans, self._style, self._color_system) + "\n")

    def write_count(self, count: int, label: str | None = None) -> None:
        """Write one count line, prefixed with ``label`` when given."""
        self.stream.write(f"{label}:{count}\n" if label is not None else f"{count}\n")

    def flush(self) -> None:
        """Flush the destination stream."""
        self.stream.flush()
