#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for mlgrep.

Options are frozen dataclasses; use ``create_updated`` to derive a modified
copy.
"""

from mlgrep.options.base import CloneFrozenMixin
from mlgrep.options.grep import GrepOptions

__all__ = ["CloneFrozenMixin", "GrepOptions"]
