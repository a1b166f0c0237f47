"""
Viewport — Shared horizontal pan/zoom for all series.

Coordinate spaces:
==================
    world fraction   position along the data, 0 = first sample, 1 = last
    pixel fraction   position across the plot rectangle, 0 = left, 1 = right

One mapping pair is used everywhere (drawing, hit-testing, zoom anchoring):

    pixel = (world - pan_x) * zoom_x          forward
    world = pan_x + pixel / zoom_x            inverse

So ``pan_x`` is the world fraction shown at the left edge of the plot and
``1 / zoom_x`` is the width of the visible window in world fractions.

Pan clamp rule (holds after every mutation):
    1/zoom_x >= 1  →  identity view (pan_x = 0, zoom_x = 1)
    otherwise      →  pan_x ∈ [-0.5, 1 - 1/zoom_x + 0.5]
"""

from __future__ import annotations

from .config import (
    PAN_OVERSCROLL, RECT_X_EPSILON, ZOOM_MAX, ZOOM_MIN, ZOOM_STEP,
)
from .geometry import Rect


def _clamp01(v: float) -> float:
    return max(0.0, min(1.0, v))


class ViewportTransform:
    """Horizontal pan/zoom state with its clamp rules."""

    __slots__ = ('_pan_x', '_zoom_x')

    def __init__(self, pan_x: float = 0.0, zoom_x: float = 1.0):
        self._pan_x = float(pan_x)
        self._zoom_x = min(ZOOM_MAX, max(ZOOM_MIN, float(zoom_x)))
        self.clamp_pan()

    @property
    def pan_x(self) -> float:
        return self._pan_x

    @property
    def zoom_x(self) -> float:
        return self._zoom_x

    @property
    def view_width(self) -> float:
        """Visible window width in world fractions."""
        return 1.0 / self._zoom_x

    # ──────────────────────────────────────────────────────
    # Mapping
    # ──────────────────────────────────────────────────────
    def to_pixel_fraction(self, world):
        """World fraction → pixel fraction. Works on numpy arrays too."""
        return (world - self._pan_x) * self._zoom_x

    def to_world_fraction(self, pixel):
        """Pixel fraction → world fraction. Works on numpy arrays too."""
        return self._pan_x + pixel / self._zoom_x

    def visible_world_range(self) -> tuple[float, float]:
        return (self._pan_x, self._pan_x + 1.0 / self._zoom_x)

    # ──────────────────────────────────────────────────────
    # Mutators
    # ──────────────────────────────────────────────────────
    def zoom(self, pixel_x: float, plot: Rect, wheel_delta: int) -> None:
        """
        Wheel zoom anchored at the pointer.

        A positive wheel delta zooms in (zoom_x * 1.12), anything else
        zooms out (zoom_x / 1.12). The world position under the pointer
        stays under the pointer, unless the clamp rule has to move it.
        The sign is chosen so N notches in followed by N notches out at
        the same pointer return to the starting view.
        """
        if plot.width <= 0:
            return
        frac = (pixel_x - plot.left) / plot.width
        world_before = self.to_world_fraction(frac)

        if wheel_delta > 0:
            new_zoom = self._zoom_x * ZOOM_STEP
        else:
            new_zoom = self._zoom_x / ZOOM_STEP
        self._zoom_x = min(ZOOM_MAX, max(ZOOM_MIN, new_zoom))

        self._pan_x = world_before - frac / self._zoom_x
        self.clamp_pan()

    def clamp_pan(self) -> None:
        view_width = 1.0 / self._zoom_x
        if view_width >= 1.0:
            self._pan_x = 0.0
            self._zoom_x = 1.0
            return
        lo = -PAN_OVERSCROLL
        hi = 1.0 - view_width + PAN_OVERSCROLL
        self._pan_x = max(lo, min(hi, self._pan_x))

    def pan_by(self, delta: float) -> None:
        """Shift pan_x by ``delta`` world fractions, then clamp."""
        self._pan_x += delta
        self.clamp_pan()

    def rectangle_zoom_x(self, x1_frac: float, x2_frac: float) -> bool:
        """
        Zoom so the pixel-fraction band [x1, x2] fills the plot.

        Both ends are clamped to [0, 1]. A band narrower than 1e-6 is
        ignored (returns False). Otherwise zoom_x = 1/(x2-x1) and pan_x = x1,
        independent of the current view.
        """
        x1 = _clamp01(x1_frac)
        x2 = _clamp01(x2_frac)
        if not x2 > x1 + RECT_X_EPSILON:
            return False
        self._zoom_x = min(ZOOM_MAX, max(ZOOM_MIN, 1.0 / (x2 - x1)))
        self._pan_x = x1
        self.clamp_pan()
        return True

    def reset(self) -> None:
        self._pan_x = 0.0
        self._zoom_x = 1.0

    def __repr__(self) -> str:
        return f"ViewportTransform(pan_x={self._pan_x:.6g}, zoom_x={self._zoom_x:.6g})"
