"""
Geometry — Integer pixel rectangles and plot-area layout.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """Pixel rectangle. ``right``/``bottom`` are exclusive."""

    x: int
    y: int
    width: int
    height: int

    @property
    def left(self) -> int:
        return self.x

    @property
    def top(self) -> int:
        return self.y

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x < self.right and self.top <= y < self.bottom

    @classmethod
    def from_corners(cls, a: tuple[int, int], b: tuple[int, int]) -> 'Rect':
        """Normalized rectangle spanning two arbitrary corner points."""
        x1, x2 = min(a[0], b[0]), max(a[0], b[0])
        y1, y2 = min(a[1], b[1]), max(a[1], b[1])
        return cls(x1, y1, x2 - x1, y2 - y1)

    @classmethod
    def from_area(cls, area: tuple[float, float, float, float],
                  width: int, height: int, floor: int = 10) -> 'Rect':
        """
        Lay out the plot rectangle from a normalized area and the control size.

        Width and height never drop below ``floor`` pixels.
        """
        ax, ay, aw, ah = area
        return cls(
            int(ax * width),
            int(ay * height),
            max(floor, int(aw * width)),
            max(floor, int(ah * height)),
        )
