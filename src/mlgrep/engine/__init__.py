#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Record segmentation and matching engine."""

from mlgrep.engine.driver import GrepDriver, resolve_output_mode
from mlgrep.engine.matcher import RecordMatcher
from mlgrep.engine.patterns import PatternSet, normalize_pattern
from mlgrep.engine.renderer import OutputRenderer, highlight_line
from mlgrep.engine.segmenter import segment_records, segment_text
from mlgrep.engine.separator import Separator
from mlgrep.engine.types import MatchState, OutputMode, Record, RunCounters

__all__ = [
    "GrepDriver",
    "MatchState",
    "OutputMode",
    "OutputRenderer",
    "PatternSet",
    "Record",
    "RecordMatcher",
    "RunCounters",
    "Separator",
    "highlight_line",
    "normalize_pattern",
    "resolve_output_mode",
    "segment_records",
    "segment_text",
]
