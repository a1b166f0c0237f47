"""
MultiAxisChart Core — The engine object that owns all chart state.

This is the primary public interface. It coordinates:
  - Series slots (5 fixed slots, replaced wholesale)
  - AxisRangeStore (one vertical range per slot)
  - ViewportTransform (shared horizontal pan/zoom)
  - CursorSet (3 read-out cursors)
  - HitTestIndex (clickable axis labels, refreshed per frame)
  - InteractionController (pointer/wheel state machine)

The engine never draws. A renderer calls ``frame()`` once per paint to get
an immutable ``FrameState``; the UI forwards pointer events to
``dispatch()``. Every visible change calls ``on_redraw``.

Quick Start:
    from multi_axis import MultiAxisChart, PointerEvent

    chart = MultiAxisChart(on_redraw=widget.update)
    chart.set_series(0, temperatures, name="Temp")
    chart.set_series(1, pressures, name="Pressure")
    chart.autoscale_all()

    chart.dispatch(PointerEvent.wheel(400, 300, +120))   # zoom in
    state = chart.frame()                                # draw from this
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import numpy as np

from .axis_range import AxisRange, AxisRangeStore
from .colors import Theme, get_theme
from .config import ChartConfig, MAX_SERIES, MIN_PLOT_PX
from .controller import EditPrompt, InteractionController, MenuItem
from .cursors import CursorInfo, CursorReadout, CursorSet
from .errors import SlotIndexError
from .geometry import Rect
from .hit_test import HitRegion, HitTestIndex, TextMeasure, measure_label
from .index_resolver import nearest_index, x_tick_indices
from .interactions import PointerEvent
from .series import SeriesSlot, as_series_array
from .viewport import ViewportTransform

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameState:
    """Everything a renderer needs for one paint."""
    size: tuple[int, int]
    plot: Rect
    pan_x: float
    zoom_x: float
    max_points: int
    ranges: tuple[AxisRange, ...]
    enabled: tuple[bool, ...]
    names: tuple[str, ...]
    cursors: tuple[CursorInfo, ...]
    readouts: tuple[CursorReadout, ...]
    preview_rect: Optional[Rect]
    hover_index: Optional[int]
    hit_regions: tuple[HitRegion, ...]
    x_ticks: np.ndarray


class MultiAxisChart:
    """Multi-series, multi-axis chart engine with a shared X viewport."""

    def __init__(self, config: Optional[ChartConfig] = None, *,
                 prompt: Optional[EditPrompt] = None,
                 on_redraw: Optional[Callable[[], None]] = None,
                 on_context_menu: Optional[Callable[[tuple[int, int], list[MenuItem]], None]] = None,
                 on_input_error: Optional[Callable[[str], None]] = None,
                 measure: Optional[TextMeasure] = None):
        self._config = config or ChartConfig()
        cfg = self._config
        self._theme = get_theme(cfg.theme)
        self._size = (cfg.width, cfg.height)

        # State
        self._slots = tuple(SeriesSlot(f"Series {i + 1}") for i in range(MAX_SERIES))
        self.ranges = AxisRangeStore()
        self.viewport = ViewportTransform()
        self.cursors = CursorSet(self._theme)

        # Sub-systems
        if measure is None:
            scale = cfg.label_font_scale
            measure = lambda text: measure_label(text, scale)  # noqa: E731
        self.hit_index = HitTestIndex(
            axis_base_offset=cfg.axis_base_offset,
            axis_spacing=cfg.axis_spacing,
            pad_x=cfg.label_pad_x,
            pad_y=cfg.label_pad_y,
            measure=measure,
        )
        self.controller = InteractionController(
            self, prompt=prompt,
            on_context_menu=on_context_menu,
            on_input_error=on_input_error,
        )

        self.on_redraw = on_redraw
        self._dirty = True

    # ──────────────────────────────────────────────────────
    # Read access
    # ──────────────────────────────────────────────────────
    @property
    def config(self) -> ChartConfig:
        return self._config

    @property
    def theme(self) -> Theme:
        return self._theme

    @theme.setter
    def theme(self, t: Theme) -> None:
        self._theme = t
        for i, cursor in enumerate(self.cursors):
            cursor.color = t.cursor_colors[i % len(t.cursor_colors)]
        self.invalidate()

    @property
    def slots(self) -> tuple[SeriesSlot, ...]:
        return self._slots

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    @property
    def plot_rect(self) -> Rect:
        """Plot rectangle for the current control size (never below 10px)."""
        w, h = self._size
        return Rect.from_area(self._config.area, w, h, floor=MIN_PLOT_PX)

    @property
    def max_points(self) -> int:
        """Length of the longest series slot."""
        return max((s.count for s in self._slots), default=0)

    @property
    def dirty(self) -> bool:
        return self._dirty

    def enabled_slots(self) -> list[int]:
        return [i for i, s in enumerate(self._slots) if s.enabled]

    # ──────────────────────────────────────────────────────
    # Series / axis management
    # ──────────────────────────────────────────────────────
    def set_series(self, slot: int, values: Optional[Sequence[float]],
                   enabled: bool = True, name: Optional[str] = None) -> None:
        """
        Replace a slot's data. Raises SlotIndexError for a bad slot and
        ValueError for non-numeric data, in both cases before any change.

        A slot whose axis is still at its default range is autoscaled.
        """
        if not 0 <= slot < MAX_SERIES:
            raise SlotIndexError("series", slot, MAX_SERIES)
        data = as_series_array(values)

        target = self._slots[slot]
        target.values = data
        target.enabled = bool(enabled)
        if name:
            target.name = name
        if self.ranges.is_default(slot):
            self.ranges.autoscale(slot, data)
        self.cursors.clamp_all(self.max_points)
        LOGGER.debug("series %d set: %d points, enabled=%s", slot, len(data), enabled)
        self.invalidate()

    def set_series_enabled(self, slot: int, enabled: bool) -> None:
        if not 0 <= slot < MAX_SERIES:
            raise SlotIndexError("series", slot, MAX_SERIES)
        self._slots[slot].enabled = bool(enabled)
        self.invalidate()

    def set_axis_range(self, slot: int, lo: float, hi: float) -> None:
        """Set a slot's vertical range. Bad slots are silently ignored."""
        if self.ranges.set_range(slot, lo, hi):
            self.invalidate()

    def autoscale_axis(self, slot: int) -> bool:
        """Fit one slot's axis to its data. False when the slot is empty."""
        if not 0 <= slot < MAX_SERIES:
            raise SlotIndexError("series", slot, MAX_SERIES)
        changed = self.ranges.autoscale(slot, self._slots[slot].values)
        if changed:
            self.invalidate()
        return changed

    def autoscale_all(self) -> None:
        """Autoscale every enabled axis and reset the viewport to identity."""
        if self.max_points <= 1:
            self.ranges.reset_all()
        else:
            for slot in self.enabled_slots():
                self.ranges.autoscale(slot, self._slots[slot].values)
        self.viewport.reset()
        LOGGER.debug("view reset")
        self.invalidate()

    # ──────────────────────────────────────────────────────
    # Cursors
    # ──────────────────────────────────────────────────────
    def place_cursor(self, idx: int, position: tuple[int, int]) -> bool:
        placed = self.cursors.place_nearest(
            idx, position, self.plot_rect, self.viewport, self.max_points)
        if placed:
            self.invalidate()
        return placed

    def toggle_cursor(self, idx: int,
                      position: Optional[tuple[int, int]] = None) -> bool:
        enabled = self.cursors.toggle(
            idx, position, self.plot_rect, self.viewport, self.max_points)
        self.invalidate()
        return enabled

    # ──────────────────────────────────────────────────────
    # Events / layout
    # ──────────────────────────────────────────────────────
    def dispatch(self, event: PointerEvent) -> bool:
        """Feed one pointer event to the interaction controller."""
        return self.controller.handle(event)

    def resize(self, width: int, height: int) -> None:
        self._size = (max(0, int(width)), max(0, int(height)))
        self.invalidate()

    def invalidate(self) -> None:
        """Mark the chart dirty and ask the UI for a repaint."""
        self._dirty = True
        if self.on_redraw is not None:
            self.on_redraw()

    def frame(self) -> FrameState:
        """
        Lay out the current frame: refresh the hit regions and snapshot
        all render-relevant state. Clears the dirty flag.
        """
        plot = self.plot_rect
        ranges = self.ranges.ranges()
        enabled = tuple(s.enabled for s in self._slots)
        self.hit_index.rebuild(plot, ranges, enabled)

        n = self.max_points
        hover_index = None
        hover = self.controller.hover
        if self._config.show_hover and hover is not None and n > 1 \
                and plot.contains(*hover):
            hover_index = nearest_index(hover[0], plot, self.viewport, n)

        cursors = tuple(dataclasses.replace(c) for c in self.cursors.enabled())
        readouts = tuple(
            self.cursors.readout(i, self._slots, n)
            for i, c in enumerate(self.cursors) if c.enabled
        )

        self._dirty = False
        return FrameState(
            size=self._size,
            plot=plot,
            pan_x=self.viewport.pan_x,
            zoom_x=self.viewport.zoom_x,
            max_points=n,
            ranges=ranges,
            enabled=enabled,
            names=tuple(s.name for s in self._slots),
            cursors=cursors,
            readouts=readouts,
            preview_rect=self.controller.preview_rect,
            hover_index=hover_index,
            hit_regions=self.hit_index.regions(),
            x_ticks=x_tick_indices(self.viewport, n, self._config.x_tick_count),
        )
