"""
Configuration — Capacity constants and chart layout settings.
"""

from __future__ import annotations

from dataclasses import dataclass

from .geometry import Rect


# ── Fixed capacity ──
MAX_SERIES = 5
MAX_CURSORS = 3

# ── Horizontal viewport ──
ZOOM_MIN = 0.05
ZOOM_MAX = 100.0
ZOOM_STEP = 1.12          # per wheel notch
PAN_OVERSCROLL = 0.5      # fraction of a viewport allowed past each data edge
RECT_X_EPSILON = 1e-6     # minimum horizontal extent of a rectangle zoom

# ── Vertical ranges ──
DEFAULT_RANGE = (0.0, 1.0)
AUTOSCALE_PADDING = 0.05
SET_RANGE_EPSILON = 1e-9
EDIT_EPSILON = 1e-6

# ── Gestures / layout ──
RECT_ZOOM_MIN_PX = 6
MIN_PLOT_PX = 10


@dataclass
class ChartConfig:
    """
    Master configuration for the chart control.

    Layout diagram (area fractions are relative to the control size):
    ┌─────────────────────────── width ────────────────────────────┐
    │                        area_y * height                        │
    │   ┌─max┐┌─max┐ ┌───────────────────────────────────────────┐ │
    │   │ a1 ││ a0 │ │ legend                                    │ │
    │   └────┘└────┘ │                                           │ │
    │  axis columns  │           PLOT AREA                       │ │
    │  (axis_spacing)│     (area_w * width) x (area_h * height)  │ │
    │   ┌─min┐┌─min┐ │                                           │ │
    │   └────┘└────┘ └───────────────────────────────────────────┘ │
    │                  0    tick    tick    tick    ...    n-1      │
    └──────────────────────────────────────────────────────────────┘
    """

    # ── Control size ──
    width: int = 1000
    height: int = 600

    # ── Normalized chart area (x, y, w, h) in [0, 1] ──
    area: tuple[float, float, float, float] = (0.06, 0.04, 0.92, 0.92)

    # ── Left-side axis label columns ──
    axis_base_offset: int = 8     # gap between plot left edge and first column
    axis_spacing: int = 36        # horizontal step between axis columns
    label_font_scale: float = 0.4
    label_pad_x: int = 6
    label_pad_y: int = 4

    # ── Grid ──
    x_tick_count: int = 24
    y_grid_divisions: int = 18

    # ── Visual ──
    title: str = ""
    theme: str = "light"
    show_legend: bool = True
    show_hover: bool = True
    antialiased: bool = True

    # ── Output ──
    screenshot_dir: str = "."

    def plot_rect(self) -> Rect:
        return Rect.from_area(self.area, self.width, self.height, floor=MIN_PLOT_PX)
