from __future__ import annotations

"""Container type for palettes.

This module defines the :class:`Palette` dataclass: an ordered list of
colors plus the palette's own identity and storage location.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .color_types import Color


@dataclass
class Palette:
    """Ordered collection of colors.

    Attributes
    ----------
    id:
        Palette identifier inside the project's palette list.
    name:
        Display name (e.g. ``"Char_A"``).
    location:
        Storage path of the palette file.
    colors:
        Colors in palette order.
    capacity:
        Maximum number of colors the storage accepts, or None for no
        limit.
    """

    id: str
    name: str
    location: str
    colors: List[Color] = field(default_factory=list)
    capacity: Optional[int] = None

    def __len__(self) -> int:
        return len(self.colors)

    @property
    def color_count(self) -> int:
        return len(self.colors)

    @property
    def is_full(self) -> bool:
        return self.capacity is not None and len(self.colors) >= self.capacity

    def color_ids(self) -> list[str]:
        """Return color identifiers in palette order."""
        return [c.id for c in self.colors]

    def color_at(self, index: int) -> Color:
        return self.colors[index]

    def find(self, color_id: str) -> Optional[Color]:
        """Return the color with ``color_id`` or None."""
        for c in self.colors:
            if c.id == color_id:
                return c
        return None

    def index_of(self, color_id: str) -> int:
        """Return the palette index of ``color_id``; raise KeyError if absent."""
        for i, c in enumerate(self.colors):
            if c.id == color_id:
                return i
        raise KeyError(color_id)
