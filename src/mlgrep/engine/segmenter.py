#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Split a text stream into records.

Records are produced lazily: only the record being assembled and the
separator's look-ahead window are held in memory.
"""

from __future__ import annotations

import io
import logging
from collections import deque
from typing import Iterable, Iterator

from mlgrep.engine.separator import Separator
from mlgrep.engine.types import Record

logger = logging.getLogger(__name__)


def _strip_terminator(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def _is_blank(header: str | None) -> bool:
    return header is None or not header.strip()


def segment_records(
    stream: Iterable[str],
    separator: Separator,
    *,
    source: str | None = None,
) -> Iterator[Record]:
    """Yield the records of ``stream`` in input order.

    A boundary line becomes the header of the record it opens. Runs of
    boundaries that only carry blank text (blank lines, or blank lines in
    front of a rule) are folded into one header so they never produce empty
    records, and trailing blank boundaries at the end of the stream are
    dropped.

    Parameters
    ----------
    stream : Iterable[str]
        Text lines, with or without line terminators (an open text file,
        ``io.StringIO``, ``sys.stdin`` or a list)
    separator : Separator
        Boundary predicate
    source : str, optional
        Name attached to every record

    Yields
    ------
    Record
        Records whose ``lines()`` concatenate back to the input

    """
    lines = (_strip_terminator(line) for line in stream)
    pending: deque[str] = deque()
    exhausted = False

    header: str | None = None
    body: list[str] = []
    index = 0

    while True:
        while not exhausted and len(pending) < separator.window:
            try:
                pending.append(next(lines))
            except StopIteration:
                exhausted = True
        if not pending:
            break

        consumed = separator.match(pending)
        if not consumed:
            body.append(pending.popleft())
            continue

        boundary = "\n".join(pending.popleft() for _ in range(consumed))
        if not body and _is_blank(header):
            header = boundary if header is None else f"{header}\n{boundary}"
            continue

        yield Record(header=header, body=tuple(body), source=source, index=index)
        index += 1
        header = boundary
        body = []

    if body or not _is_blank(header):
        yield Record(header=header, body=tuple(body), source=source, index=index)
        index += 1

    logger.debug("Segmented %d record(s) from %s", index, source or "<stream>")


def segment_text(text: str, separator: Separator, *, source: str | None = None) -> list[Record]:
    """Segment an in-memory string; convenience wrapper for small inputs."""
    return list(segment_records(io.StringIO(text), separator, source=source))
