"""
MultiAxisChart — Interactive multi-series, multi-axis chart engine
=================================================================

Up to five series share one horizontal (sample-index) axis; each owns its
own vertical range. The engine turns pointer gestures into a consistent
view transform and leaves drawing to a renderer.

Quick Start:
    from multi_axis import MultiAxisChart, ChartWindow

    chart = MultiAxisChart()
    chart.set_series(0, temperatures, name="Temp")
    chart.set_series(1, pressures, name="Pressure")
    chart.autoscale_all()
    ChartWindow(chart).run()          # OpenCV reference window

Gestures:
    left-drag   → pan              wheel        → zoom at pointer
    axis box    → edit min/max     right-click  → context menu items
"""

__version__ = "1.0.0"

# Core engine
from .core import MultiAxisChart, FrameState

# Configuration
from .config import ChartConfig, MAX_SERIES, MAX_CURSORS
from .geometry import Rect

# Errors
from .errors import ChartError, SlotIndexError, InvalidNumberError

# Components
from .axis_range import AxisRange, AxisRangeStore
from .viewport import ViewportTransform
from .index_resolver import nearest_index, x_tick_indices
from .cursors import CursorInfo, CursorReadout, CursorSet
from .hit_test import Bound, HitRegion, HitTestIndex, format_axis_value
from .controller import (
    InteractionController, Idle, Panning, RectZooming, MenuItem,
)

# Colors & themes
from .colors import Theme, DARK_THEME, LIGHT_THEME, get_theme, register_theme

# Input
from .interactions import (
    Button, EventType, PointerEvent, MouseTracker,
    process_key, save_screenshot,
)

# Reference renderer / window
from .renderer import Renderer
from .window import ChartWindow, console_prompt, parse_number

__all__ = [
    # Core
    "MultiAxisChart", "FrameState",
    # Config
    "ChartConfig", "MAX_SERIES", "MAX_CURSORS", "Rect",
    # Errors
    "ChartError", "SlotIndexError", "InvalidNumberError",
    # Components
    "AxisRange", "AxisRangeStore", "ViewportTransform",
    "nearest_index", "x_tick_indices",
    "CursorInfo", "CursorReadout", "CursorSet",
    "Bound", "HitRegion", "HitTestIndex", "format_axis_value",
    "InteractionController", "Idle", "Panning", "RectZooming", "MenuItem",
    # Colors
    "Theme", "DARK_THEME", "LIGHT_THEME", "get_theme", "register_theme",
    # Input
    "Button", "EventType", "PointerEvent", "MouseTracker",
    "process_key", "save_screenshot",
    # Rendering
    "Renderer", "ChartWindow", "console_prompt", "parse_number",
]
