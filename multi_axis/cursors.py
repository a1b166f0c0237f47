"""
Cursors — Up to three vertical read-out markers bound to sample indices.

Cursors never move on their own; they are placed explicitly (or toggled)
and only clamped when the data gets shorter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .colors import Theme, get_theme
from .config import MAX_CURSORS
from .errors import SlotIndexError
from .geometry import Rect
from .index_resolver import nearest_index
from .series import SeriesSlot
from .viewport import ViewportTransform


@dataclass
class CursorInfo:
    enabled: bool = False
    index: int = 0
    color: tuple[int, int, int] = (255, 0, 255)
    name: str = ""


@dataclass(frozen=True)
class CursorReadout:
    """Values of every enabled series at a cursor's index."""
    name: str
    index: int
    color: tuple[int, int, int]
    values: tuple[tuple[str, float], ...]


class CursorSet:
    """Fixed array of MAX_CURSORS cursors."""

    def __init__(self, theme: Optional[Theme] = None):
        colors = (theme or get_theme("light")).cursor_colors
        self._cursors = tuple(
            CursorInfo(color=colors[i % len(colors)], name=f"Cursor {i + 1}")
            for i in range(MAX_CURSORS)
        )

    def __len__(self) -> int:
        return len(self._cursors)

    def __getitem__(self, idx: int) -> CursorInfo:
        self._check(idx)
        return self._cursors[idx]

    def __iter__(self):
        return iter(self._cursors)

    def enabled(self) -> tuple[CursorInfo, ...]:
        return tuple(c for c in self._cursors if c.enabled)

    def place_nearest(self, idx: int, position: tuple[float, float],
                      plot: Rect, viewport: ViewportTransform,
                      max_points: int) -> bool:
        """
        Snap cursor ``idx`` to the sample nearest ``position`` and enable it.

        No-op (returns False) when there is at most one sample or the
        position lies outside the plot rectangle.
        """
        cursor = self[idx]
        if max_points <= 1 or not plot.contains(*position):
            return False
        cursor.index = nearest_index(position[0], plot, viewport, max_points)
        cursor.enabled = True
        return True

    def toggle(self, idx: int, position: Optional[tuple[float, float]] = None,
               plot: Optional[Rect] = None,
               viewport: Optional[ViewportTransform] = None,
               max_points: int = 0) -> bool:
        """
        Flip cursor ``idx``. When enabling with a placement position, the
        cursor snaps there; otherwise it keeps its previous index.
        Returns the new enabled state.
        """
        cursor = self[idx]
        cursor.enabled = not cursor.enabled
        if cursor.enabled and position is not None and plot is not None \
                and viewport is not None:
            self.place_nearest(idx, position, plot, viewport, max_points)
        return cursor.enabled

    def clamp_all(self, max_points: int) -> None:
        """Keep every index inside [0, max_points-1] after data changes."""
        top = max(0, max_points - 1)
        for cursor in self._cursors:
            cursor.index = max(0, min(top, cursor.index))

    def readout(self, idx: int, slots: Sequence[SeriesSlot],
                max_points: int) -> CursorReadout:
        cursor = self[idx]
        index = max(0, min(max(0, max_points - 1), cursor.index))
        values = tuple(
            (slot.name, slot.value_at(index))
            for slot in slots
            if slot.enabled and slot.count > index
        )
        return CursorReadout(cursor.name, index, cursor.color, values)

    def _check(self, idx: int) -> None:
        if not 0 <= idx < len(self._cursors):
            raise SlotIndexError("cursor", idx, len(self._cursors))
