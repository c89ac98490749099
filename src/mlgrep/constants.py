#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values shared across mlgrep.

The separator presets live here so the options layer, the engine and the
CLI help text all agree on them.
"""

from __future__ import annotations

from typing import Literal

PROGRAM_NAME = "mlgrep"

# Blank line, or a rule made of 3+ dashes or 3+ equals signs.
DEFAULT_SEPARATOR = r"^$|^(?:-{3,}|={3,})\s*$"

_WEEKDAY = r"(?:Mon|Tue|Wed|Thu|Fri|Sat|Sun)[a-z]*,?\s+"
_MONTH = r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\.?"
_MONTH_DAY = rf"(?:{_MONTH}\s+\d{{1,2}}(?:st|nd|rd|th)?,?|\d{{1,2}}\s+{_MONTH},?)"
_ISO_DATE = r"\d{4}[-/]\d{1,2}[-/]\d{1,2}"
_TIME = r"\d{1,2}:\d{2}(?::\d{2}(?:[.,]\d+)?)?"

# Log timestamps such as "2024-03-01 12:00:01", "2024-03-01T12:00:01Z",
# "Mar  1 12:00:01" or "Fri Mar  1 12:00:01 2024", at the start of a line.
TIMESTAMP_SEPARATOR = (
    rf"^\[?(?:{_WEEKDAY})?(?:{_MONTH_DAY}(?:\s+\d{{4}})?|{_ISO_DATE})[\sT,]+{_TIME}"
    r"(?:\s*(?:Z|[+-]\d{2}:?\d{2}|[A-Z]{3,4}))?(?:\s+\d{4})?\b"
)

DEFAULT_HIGHLIGHT_STYLE = "bold red"
DEFAULT_ENCODING = "utf-8"
DEFAULT_ENCODING_ERRORS = "replace"
DEFAULT_LOG_LEVEL = "WARNING"

# Separators are tested against a window of at most this many lines.
MAX_SEPARATOR_WINDOW = 16

HighlightMode = Literal["always", "never", "auto"]
MatchMode = Literal["any", "all"]

HIGHLIGHT_MODES: tuple[str, ...] = ("always", "never", "auto")
MATCH_MODES: tuple[str, ...] = ("any", "all")

STDIN_NAME = "-"

CONFIG_FILENAMES = [".mlgrep.toml", ".mlgrep.yaml", ".mlgrep.yml", ".mlgrep.json"]
CONFIG_ENV_VAR = "MLGREP_CONFIG"

# Magic numbers of the compressed formats read transparently.
GZIP_MAGIC = b"\x1f\x8b"
BZIP2_MAGIC = b"BZh"
XZ_MAGIC = b"\xfd7zXZ\x00"
