"""
ChartWindow — Reference OpenCV HighGUI host for a MultiAxisChart.

Wires the pieces the engine leaves to its surroundings:
  - mouse callbacks → PointerEvent → chart.dispatch()
  - keyboard shortcuts (see interactions.py)
  - repaint on demand (only when the chart is dirty)
  - numeric axis edits via a console prompt

Usage:
    chart = MultiAxisChart(ChartConfig(title="Signals"))
    chart.set_series(0, data, name="S1")
    ChartWindow(chart).run()
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Optional

import cv2

from .colors import THEMES, get_theme
from .core import MultiAxisChart
from .errors import InvalidNumberError
from .hit_test import format_axis_value
from .interactions import MouseTracker, process_key, save_screenshot
from .platform_utils import PlatformInfo, apply_platform_fixes, normalize_key
from .renderer import Renderer

LOGGER = logging.getLogger(__name__)


def parse_number(text: str) -> float:
    """Parse user text as a finite float. Raises InvalidNumberError."""
    try:
        value = float(text.strip())
    except ValueError:
        raise InvalidNumberError(text) from None
    if not math.isfinite(value):
        raise InvalidNumberError(text)
    return value


def console_prompt(title: str, current: float,
                   reader: Callable[[str], str] = input) -> Optional[float]:
    """
    Ask for a number on the console. Empty input cancels (None);
    unparseable input raises InvalidNumberError.
    """
    try:
        text = reader(f"{title} [{format_axis_value(current, 6)}]: ")
    except EOFError:
        return None
    if not text.strip():
        return None
    return parse_number(text)


class ChartWindow:
    """Event loop that shows a chart in an OpenCV window."""

    def __init__(self, chart: MultiAxisChart, *, window_name: str = "MultiAxisChart",
                 poll_ms: int = 15):
        self._chart = chart
        self._window_name = window_name
        self._poll_ms = poll_ms
        self._renderer = Renderer(chart.config, chart.theme)
        self._mouse = MouseTracker(chart.dispatch)
        self._theme_cycle = list(THEMES.keys())
        self._theme_index = self._theme_cycle.index(chart.theme.name) \
            if chart.theme.name in self._theme_cycle else 0

        if chart.controller.prompt is None:
            chart.controller.prompt = console_prompt
        if chart.controller.on_input_error is None:
            chart.controller.on_input_error = lambda msg: LOGGER.warning("%s", msg)

    def run(self) -> None:
        """Block until the user quits (Q/ESC) or closes the window."""
        fixes = apply_platform_fixes()
        LOGGER.info("platform: %s (hidpi=%s)", PlatformInfo.summary(), fixes['hidpi_set'])

        cv2.namedWindow(self._window_name, cv2.WINDOW_AUTOSIZE)
        # Qt backend needs one event loop iteration before the window
        # handle is valid for setMouseCallback.
        cv2.waitKey(1)
        self._mouse.attach(self._window_name)

        try:
            while True:
                if self._chart.dirty:
                    self._paint()
                key = normalize_key(cv2.waitKey(self._poll_ms))
                if self._handle_key(key):
                    break
                if cv2.getWindowProperty(self._window_name, cv2.WND_PROP_VISIBLE) < 1:
                    break
        finally:
            cv2.destroyWindow(self._window_name)

    def _paint(self) -> None:
        state = self._chart.frame()
        img = self._renderer.render(state, self._chart.slots)
        cv2.imshow(self._window_name, img)

    def _handle_key(self, key: int) -> bool:
        """Process keyboard input. Returns True on quit."""
        action = process_key(key)
        chart = self._chart
        pointer = self._mouse.position

        if action.quit:
            return True
        if action.reset_view:
            chart.autoscale_all()
        if action.toggle_cursor is not None:
            chart.toggle_cursor(action.toggle_cursor, pointer)
        if action.arm_rect_zoom and pointer is not None:
            chart.controller.arm_rect_zoom(pointer)
        if action.cancel:
            chart.controller.cancel()
        if action.cycle_theme:
            self._theme_index = (self._theme_index + 1) % len(self._theme_cycle)
            theme = get_theme(self._theme_cycle[self._theme_index])
            self._renderer.theme = theme
            chart.theme = theme
        if action.screenshot:
            path = save_screenshot(self._renderer.canvas, chart.config.screenshot_dir)
            LOGGER.info("saved screenshot: %s", path)
        return False
