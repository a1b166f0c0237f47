"""
Interaction controller — Turns pointer events into chart state changes.

State machine:
==============
                 primary down (no hit region)
        ┌──────┐ ───────────────────────────► ┌─────────┐
        │ Idle │ ◄─────────────────────────── │ Panning │  move → pan X + shift Y
        └──────┘         primary up           └─────────┘
          │  ▲
   armed  │  │ secondary up (apply if > 6px × 6px)
          ▼  │
      ┌─────────────┐
      │ RectZooming │  move → update preview rectangle
      └─────────────┘

Independent of the state machine:
  - wheel          → anchored horizontal zoom, in any state
  - primary down on an axis label box (Idle) → axis bound edit via prompt
  - secondary down (Idle) → context menu items handed to the UI
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Union

from .config import MAX_CURSORS, RECT_ZOOM_MIN_PX
from .errors import InvalidNumberError
from .geometry import Rect
from .hit_test import Bound, HitRegion
from .interactions import Button, EventType, PointerEvent

if TYPE_CHECKING:
    from .core import MultiAxisChart

LOGGER = logging.getLogger(__name__)

# (title, current value) -> new value, or None when the user cancels.
# May raise InvalidNumberError for text that does not parse.
EditPrompt = Callable[[str, float], Optional[float]]


# ────────────────────────────────────────────────────────────
# States
# ────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Panning:
    last: tuple[int, int]


@dataclass(frozen=True)
class RectZooming:
    start: tuple[int, int]
    current: tuple[int, int]

    @property
    def rect(self) -> Rect:
        return Rect.from_corners(self.start, self.current)


InteractionState = Union[Idle, Panning, RectZooming]

IDLE = Idle()


@dataclass(frozen=True)
class MenuItem:
    label: str
    action: Callable[[], None]


class InteractionController:
    """Pointer/wheel event handler bound to one chart instance."""

    def __init__(self, chart: 'MultiAxisChart',
                 prompt: Optional[EditPrompt] = None,
                 on_context_menu: Optional[Callable[[tuple[int, int], list[MenuItem]], None]] = None,
                 on_input_error: Optional[Callable[[str], None]] = None):
        self._chart = chart
        self.prompt = prompt
        self.on_context_menu = on_context_menu
        self.on_input_error = on_input_error
        self._state: InteractionState = IDLE
        self._hover: Optional[tuple[int, int]] = None

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def hover(self) -> Optional[tuple[int, int]]:
        return self._hover

    @property
    def preview_rect(self) -> Optional[Rect]:
        """In-progress rectangle-zoom rectangle, if one is being dragged."""
        if isinstance(self._state, RectZooming):
            rect = self._state.rect
            return None if rect.is_empty else rect
        return None

    # ──────────────────────────────────────────────────────
    # Event dispatch
    # ──────────────────────────────────────────────────────
    def handle(self, event: PointerEvent) -> bool:
        """Process one event. Returns True if a redraw was requested."""
        if event.type is EventType.WHEEL:
            return self._on_wheel(event)
        if event.type is EventType.LEAVE:
            self._hover = None
            return self._redraw()

        state = self._state
        if isinstance(state, Idle):
            return self._handle_idle(event)
        if isinstance(state, Panning):
            return self._handle_panning(state, event)
        if isinstance(state, RectZooming):
            return self._handle_rect_zooming(state, event)
        raise TypeError(f"Unknown interaction state: {state!r}")

    def _handle_idle(self, event: PointerEvent) -> bool:
        x, y = event.position
        if event.type is EventType.DOWN:
            if event.button is Button.PRIMARY:
                region = self._chart.hit_index.hit(x, y)
                if region is not None:
                    return self._edit_bound(region)
                self._state = Panning(event.position)
                LOGGER.debug("pan start at %s", event.position)
                return False
            if event.button is Button.SECONDARY:
                items = self.context_menu(event.position)
                if self.on_context_menu is not None:
                    self.on_context_menu(event.position, items)
                return False
        elif event.type is EventType.MOVE:
            self._hover = event.position
            return self._redraw()
        return False

    def _handle_panning(self, state: Panning, event: PointerEvent) -> bool:
        if event.type is EventType.MOVE:
            self._hover = event.position
            self._pan(state.last, event.position)
            self._state = Panning(event.position)
            return self._redraw()
        if event.type is EventType.UP and event.button is Button.PRIMARY:
            self._state = IDLE
            LOGGER.debug("pan end at %s", event.position)
        return False

    def _handle_rect_zooming(self, state: RectZooming, event: PointerEvent) -> bool:
        if event.type is EventType.MOVE:
            self._hover = event.position
            self._state = RectZooming(state.start, event.position)
            return self._redraw()
        if event.type is EventType.UP and event.button is Button.SECONDARY:
            rect = RectZooming(state.start, event.position).rect
            self._state = IDLE
            if rect.width > RECT_ZOOM_MIN_PX and rect.height > RECT_ZOOM_MIN_PX:
                self._apply_rect_zoom(rect)
                LOGGER.debug("rectangle zoom applied: %s", rect)
            else:
                LOGGER.debug("rectangle zoom discarded: %s", rect)
            return self._redraw()
        return False

    def _on_wheel(self, event: PointerEvent) -> bool:
        chart = self._chart
        chart.viewport.zoom(event.position[0], chart.plot_rect, event.wheel_delta)
        return self._redraw()

    # ──────────────────────────────────────────────────────
    # Gesture entry points (menu / keyboard)
    # ──────────────────────────────────────────────────────
    def arm_rect_zoom(self, position: tuple[int, int]) -> bool:
        """Enter RectZooming with ``position`` as the fixed corner."""
        if not isinstance(self._state, Idle):
            return False
        self._state = RectZooming(position, position)
        LOGGER.debug("rectangle zoom armed at %s", position)
        self._redraw()
        return True

    def cancel(self) -> None:
        """Drop any in-progress gesture without applying it."""
        if not isinstance(self._state, Idle):
            LOGGER.debug("gesture cancelled: %r", self._state)
            self._state = IDLE
            self._redraw()

    def context_menu(self, position: tuple[int, int]) -> list[MenuItem]:
        """Menu entries for a secondary click at ``position``."""
        chart = self._chart
        items: list[MenuItem] = []
        for i in range(MAX_CURSORS):
            cursor = chart.cursors[i]
            verb = "Disable" if cursor.enabled else "Enable"
            items.append(MenuItem(
                f"{verb} {cursor.name}",
                lambda i=i: chart.toggle_cursor(i, position)))
            items.append(MenuItem(
                f"Set {cursor.name} Here",
                lambda i=i: chart.place_cursor(i, position)))
        items.append(MenuItem(
            "Start Rectangle Zoom (right-drag)",
            lambda: self.arm_rect_zoom(position)))
        items.append(MenuItem("Reset View (autoscale)", chart.autoscale_all))
        return items

    # ──────────────────────────────────────────────────────
    # Internal
    # ──────────────────────────────────────────────────────
    def _pan(self, last: tuple[int, int], pos: tuple[int, int]) -> None:
        chart = self._chart
        plot = chart.plot_rect
        if plot.is_empty:
            return
        dx = (pos[0] - last[0]) / plot.width
        dy = (pos[1] - last[1]) / plot.height   # positive when moving down
        chart.viewport.pan_by(dx)
        if dy != 0:
            for slot in chart.enabled_slots():
                chart.ranges.shift_by_span_fraction(slot, dy)

    def _apply_rect_zoom(self, rect: Rect) -> None:
        chart = self._chart
        plot = chart.plot_rect
        if plot.is_empty:
            return
        x1 = (rect.left - plot.left) / plot.width
        x2 = (rect.right - plot.left) / plot.width
        chart.viewport.rectangle_zoom_x(x1, x2)

        top_frac = 1.0 - (rect.top - plot.top) / plot.height
        bottom_frac = 1.0 - (rect.bottom - plot.top) / plot.height
        for slot in chart.enabled_slots():
            chart.ranges.zoom_to_fractions(slot, top_frac, bottom_frac)

    def _edit_bound(self, region: HitRegion) -> bool:
        chart = self._chart
        slot = region.slot
        name = chart.slots[slot].name
        current = chart.ranges[slot]
        if region.bound is Bound.MIN:
            title, value = f"Edit Min for {name}", current.min
        else:
            title, value = f"Edit Max for {name}", current.max

        if self.prompt is None:
            LOGGER.debug("no edit prompt installed; ignoring %s", title)
            return False
        try:
            result = self.prompt(title, value)
        except InvalidNumberError as e:
            self._report_input_error(e)
            return False
        if result is None:
            return False
        result = float(result)
        if not math.isfinite(result):
            self._report_input_error(InvalidNumberError(str(result)))
            return False

        if region.bound is Bound.MIN:
            chart.ranges.edit_min(slot, result)
        else:
            chart.ranges.edit_max(slot, result)
        LOGGER.debug("%s: %r -> %r", title, value, result)
        return self._redraw()

    def _report_input_error(self, error: InvalidNumberError) -> None:
        LOGGER.warning("axis edit abandoned: %s", error)
        if self.on_input_error is not None:
            self.on_input_error(str(error))

    def _redraw(self) -> bool:
        self._chart.invalidate()
        return True
