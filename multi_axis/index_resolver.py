"""
Index resolution — Snap pixel positions to integer sample indices.

All series share the horizontal axis: sample ``i`` of the longest series
(``max_points`` samples) sits at world fraction ``i / (max_points - 1)``.
"""

from __future__ import annotations

import numpy as np

from .geometry import Rect
from .viewport import ViewportTransform


def nearest_index(pixel_x: float, plot: Rect, viewport: ViewportTransform,
                  max_points: int) -> int:
    """Nearest sample index under a pixel X, clamped to [0, max_points-1]."""
    if max_points <= 1 or plot.width <= 0:
        return 0
    frac = (pixel_x - plot.left) / plot.width
    world = viewport.to_world_fraction(frac)
    idx = int(round(world * (max_points - 1)))
    return max(0, min(max_points - 1, idx))


def index_to_pixel_x(index, plot: Rect, viewport: ViewportTransform,
                     max_points: int):
    """Pixel X of a sample index (scalar or array). Inverse of nearest_index."""
    denom = max(1, max_points - 1)
    frac = viewport.to_pixel_fraction(np.asarray(index, dtype=np.float64) / denom)
    return plot.left + frac * plot.width


def visible_index_range(viewport: ViewportTransform,
                        max_points: int) -> tuple[float, float]:
    """Fractional sample positions at the left and right plot edges."""
    left, right = viewport.visible_world_range()
    n = max(1, max_points - 1)
    return (left * n, right * n)


def x_tick_indices(viewport: ViewportTransform, max_points: int,
                   count: int = 24) -> np.ndarray:
    """
    Evenly spaced tick positions (fractional sample indices) across the
    visible window. Positions whose pixel fraction falls outside
    [-0.05, 1.05] are dropped. Empty when there is nothing to index.
    """
    if max_points <= 1 or count < 2:
        return np.zeros(0, dtype=np.float64)
    idx_left, idx_right = visible_index_range(viewport, max_points)
    ticks = np.linspace(idx_left, idx_right, count)
    frac = viewport.to_pixel_fraction(ticks / (max_points - 1))
    return ticks[(frac >= -0.05) & (frac <= 1.05)]
