#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Base classes for mlgrep option dataclasses."""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    Options objects are immutable once built; changing a setting means
    producing a modified copy.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def field_names(cls) -> set[str]:
        """Return the names of all option fields."""
        return {item.name for item in fields(cls)}  # type: ignore[arg-type]

    def with_mapping(self, values: Mapping[str, Any]) -> tuple[Self, list[str]]:
        """Apply the known keys of ``values`` and report the unknown ones.

        Returns
        -------
        tuple[Self, list[str]]
            The updated options and the sorted list of ignored keys

        """
        known = self.field_names()
        accepted = {key: value for key, value in values.items() if key in known}
        ignored = sorted(key for key in values if key not in known)
        if not accepted:
            return self, ignored
        return self.create_updated(**accepted), ignored
