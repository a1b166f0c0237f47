"""
Renderer — Reference OpenCV drawing of a chart frame.

Architecture:
=============
    FrameState (engine snapshot) ──► render() ──► _canvas (H×W×3 BGR)

    draw order:
      [background + border]
      [x ticks + vertical grid]     behind the data
      [horizontal grid per axis]
      [series polylines]            clipped to the plot rectangle
      [axis min/max label boxes]    at the hit regions of this frame
      [legend]
      [rectangle-zoom preview]
      [cursors + read-out boxes]
      [hover line]

The renderer only reads engine state; it never mutates the chart.
"""

from __future__ import annotations

from typing import Optional, Sequence

import cv2
import numpy as np

from .colors import Theme, get_theme
from .config import ChartConfig, MIN_PLOT_PX
from .core import FrameState
from .geometry import Rect
from .hit_test import LABEL_FONT, format_axis_value
from .series import SeriesSlot

# Samples this far outside the plot (in plot widths) are still drawn so
# lines enter and leave the clipped area cleanly.
_X_MARGIN = 0.05


class Renderer:
    """Stateless-per-frame renderer with a reusable canvas."""

    def __init__(self, config: ChartConfig, theme: Optional[Theme] = None):
        self._config = config
        self._theme = theme or get_theme(config.theme)
        self._line_type = cv2.LINE_AA if config.antialiased else cv2.LINE_8
        self._font_scale = config.label_font_scale
        self._canvas = np.zeros((config.height, config.width, 3), dtype=np.uint8)

    @property
    def canvas(self) -> np.ndarray:
        return self._canvas

    @property
    def theme(self) -> Theme:
        return self._theme

    @theme.setter
    def theme(self, t: Theme) -> None:
        self._theme = t

    # ──────────────────────────────────────────────────────
    # Main render pipeline
    # ──────────────────────────────────────────────────────
    def render(self, state: FrameState,
               slots: Sequence[SeriesSlot]) -> np.ndarray:
        """Full render pipeline. Returns canvas (H×W×3 uint8 BGR)."""
        w, h = state.size
        if self._canvas.shape[:2] != (h, w):
            self._canvas = np.zeros((max(1, h), max(1, w), 3), dtype=np.uint8)
        self._canvas[:] = self._theme.bg

        plot = state.plot
        if plot.width < MIN_PLOT_PX or plot.height < MIN_PLOT_PX:
            return self._canvas

        cv2.rectangle(self._canvas, (plot.left, plot.top),
                      (plot.right, plot.bottom), self._theme.border, 1)

        self._draw_x_axis(state)
        self._draw_y_grids(state)
        if state.max_points > 1:
            for i, slot in enumerate(slots):
                if slot.enabled and slot.count >= 2:
                    self._draw_series(state, i, slot)
        self._draw_axis_labels(state)
        if self._config.show_legend:
            self._draw_legend(state)
        if state.preview_rect is not None:
            self._draw_zoom_preview(state.preview_rect)
        self._draw_cursors(state)
        if state.hover_index is not None:
            px = self._index_to_px(state, state.hover_index)
            _dashed_line(self._canvas, (px, plot.top), (px, plot.bottom),
                         self._theme.hover)
        self._draw_title(plot)
        return self._canvas

    # ──────────────────────────────────────────────────────
    # Axes & grid
    # ──────────────────────────────────────────────────────
    def _draw_x_axis(self, state: FrameState) -> None:
        t = self._theme
        plot = state.plot
        cv2.line(self._canvas, (plot.left, plot.bottom), (plot.right, plot.bottom),
                 t.border, 1)
        if state.max_points <= 1:
            return

        for idx in state.x_ticks:
            px = self._index_to_px(state, idx)
            cv2.line(self._canvas, (px, plot.top), (px, plot.bottom), t.grid, 1)
            cv2.line(self._canvas, (px, plot.bottom), (px, plot.bottom + 6), t.border, 1)
            label = str(int(round(idx)))
            (tw, th), _ = cv2.getTextSize(label, LABEL_FONT, self._font_scale, 1)
            self._put_text(label, (px - tw // 2, plot.bottom + 8 + th), t.text)

    def _draw_y_grids(self, state: FrameState) -> None:
        t = self._theme
        plot = state.plot
        div = max(1, self._config.y_grid_divisions)
        for slot, enabled in enumerate(state.enabled):
            if not enabled:
                continue
            for i in range(div + 1):
                y = plot.bottom - int(i / div * plot.height)
                cv2.line(self._canvas, (plot.left, y), (plot.right, y), t.grid, 1)
                cv2.line(self._canvas, (plot.left - 6, y), (plot.left, y), t.tick, 1)

    def _draw_axis_labels(self, state: FrameState) -> None:
        t = self._theme
        for region in state.hit_regions:
            r = region.rect
            cv2.rectangle(self._canvas, (r.left, r.top), (r.right, r.bottom),
                          t.label_box_bg, -1)
            cv2.rectangle(self._canvas, (r.left, r.top), (r.right, r.bottom),
                          t.label_box_border, 1)
            (_, th), _ = cv2.getTextSize(region.label, LABEL_FONT, self._font_scale, 1)
            self._put_text(region.label,
                           (r.left + self._config.label_pad_x // 2,
                            r.top + self._config.label_pad_y // 2 + th),
                           t.series_colors[region.slot % len(t.series_colors)])

    # ──────────────────────────────────────────────────────
    # Series drawing
    # ──────────────────────────────────────────────────────
    def _draw_series(self, state: FrameState, slot_index: int,
                     slot: SeriesSlot) -> None:
        plot = state.plot
        data = slot.values
        rng = state.ranges[slot_index]

        # Vectorized coordinate mapping in plot-local pixels
        world = np.arange(len(data), dtype=np.float64) / (state.max_points - 1)
        x_frac = (world - state.pan_x) * state.zoom_x
        y_frac = rng.fraction_of(data)
        visible = ((x_frac >= -_X_MARGIN) & (x_frac <= 1.0 + _X_MARGIN)
                   & np.isfinite(data))

        xs = x_frac * plot.width
        ys = plot.height - np.clip(y_frac, -100.0, 101.0) * plot.height
        points = np.column_stack((xs, np.where(visible, ys, 0))).astype(np.int32)

        # Draw into a view of the plot area so OpenCV clips at its edges
        roi = self._canvas[plot.top:plot.bottom, plot.left:plot.right]
        color = self._theme.series_colors[slot_index % len(self._theme.series_colors)]
        segments = [points[a:b] for a, b in _true_runs(visible) if b - a >= 2]
        if segments:
            cv2.polylines(roi, segments, False, color, 2, self._line_type)

    # ──────────────────────────────────────────────────────
    # Legend
    # ──────────────────────────────────────────────────────
    def _draw_legend(self, state: FrameState) -> None:
        t = self._theme
        entries = [
            (name or f"Series {i + 1}", t.series_colors[i % len(t.series_colors)])
            for i, (name, enabled) in enumerate(zip(state.names, state.enabled))
            if enabled
        ]
        if not entries:
            return

        scale, line_h, pad = self._font_scale, 18, 6
        max_w = max(cv2.getTextSize(e[0], LABEL_FONT, scale, 1)[0][0] for e in entries)
        box_w = max_w + 34
        box_h = pad * 2 + len(entries) * line_h
        x, y = state.plot.left + 8, state.plot.top + 8

        self._blend_rect(Rect(x, y, box_w, box_h), t.legend_bg, t.legend_alpha)
        cv2.rectangle(self._canvas, (x, y), (x + box_w, y + box_h), t.tick, 1)

        for i, (label, color) in enumerate(entries):
            iy = y + pad + i * line_h
            cv2.rectangle(self._canvas, (x + 6, iy + 3), (x + 20, iy + 13), color, -1)
            cv2.rectangle(self._canvas, (x + 6, iy + 3), (x + 20, iy + 13), t.border, 1)
            self._put_text(label, (x + 26, iy + 13), t.text)

    # ──────────────────────────────────────────────────────
    # Overlays
    # ──────────────────────────────────────────────────────
    def _draw_zoom_preview(self, rect: Rect) -> None:
        t = self._theme
        self._blend_rect(rect, t.zoom_fill, t.zoom_alpha)
        corners = [(rect.left, rect.top), (rect.right, rect.top),
                   (rect.right, rect.bottom), (rect.left, rect.bottom)]
        for a, b in zip(corners, corners[1:] + corners[:1]):
            _dashed_line(self._canvas, a, b, t.zoom_border)

    def _draw_cursors(self, state: FrameState) -> None:
        if state.max_points <= 1:
            return
        t = self._theme
        plot = state.plot
        canvas_w = self._canvas.shape[1]
        for readout in state.readouts:
            frac = (readout.index / (state.max_points - 1) - state.pan_x) * state.zoom_x
            if frac < 0.0 or frac > 1.0:
                continue
            px = plot.left + int(frac * plot.width)
            cv2.line(self._canvas, (px, plot.top), (px, plot.bottom),
                     readout.color, 2, self._line_type)

            lines = [f"{readout.name}: idx={readout.index}"]
            lines += [f"{name} = {format_axis_value(v, 5)}" for name, v in readout.values]
            sizes = [cv2.getTextSize(s, LABEL_FONT, self._font_scale, 1)[0] for s in lines]
            line_h = max(h for _, h in sizes) + 6
            box_w = max(w for w, _ in sizes) + 12
            box_h = line_h * len(lines) + 8
            box_x = min(canvas_w - box_w - 8, max(plot.left + 4, px + 6))
            box_y = plot.top + 6

            self._blend_rect(Rect(box_x, box_y, box_w, box_h), t.info_bg, 0.9)
            cv2.rectangle(self._canvas, (box_x, box_y),
                          (box_x + box_w, box_y + box_h), t.border, 1)
            for i, text in enumerate(lines):
                self._put_text(text, (box_x + 6, box_y + 4 + (i + 1) * line_h - 6),
                               readout.color)

            label = str(readout.index)
            (tw, th), _ = cv2.getTextSize(label, LABEL_FONT, self._font_scale, 1)
            self._put_text(label, (px - tw // 2, plot.bottom + 8 + 2 * th + 4),
                           readout.color)

    def _draw_title(self, plot: Rect) -> None:
        title = self._config.title
        if not title:
            return
        ts = cv2.getTextSize(title, LABEL_FONT, 0.6, 1)[0]
        tx = plot.left + (plot.width - ts[0]) // 2
        ty = max(ts[1] + 2, plot.top - 6)
        cv2.putText(self._canvas, title, (tx, ty), LABEL_FONT, 0.6,
                    self._theme.title, 1, self._line_type)

    # ──────────────────────────────────────────────────────
    # Helpers
    # ──────────────────────────────────────────────────────
    def _index_to_px(self, state: FrameState, index: float) -> int:
        frac = (index / (state.max_points - 1) - state.pan_x) * state.zoom_x
        return state.plot.left + int(frac * state.plot.width)

    def _put_text(self, text: str, origin: tuple[int, int],
                  color: tuple[int, int, int]) -> None:
        cv2.putText(self._canvas, text, origin, LABEL_FONT, self._font_scale,
                    color, 1, self._line_type)

    def _blend_rect(self, rect: Rect, color: tuple[int, int, int],
                    alpha: float) -> None:
        """Semi-transparent fill, clipped to the canvas."""
        h, w = self._canvas.shape[:2]
        x0, y0 = max(0, rect.left), max(0, rect.top)
        x1, y1 = min(w, rect.right), min(h, rect.bottom)
        if x1 <= x0 or y1 <= y0:
            return
        overlay = self._canvas[y0:y1, x0:x1]
        fill = np.full_like(overlay, color, dtype=np.uint8)
        self._canvas[y0:y1, x0:x1] = cv2.addWeighted(fill, alpha, overlay, 1.0 - alpha, 0)


# ──────────────────────────────────────────────────────
# Utility
# ──────────────────────────────────────────────────────
def _true_runs(mask: np.ndarray) -> list[tuple[int, int]]:
    """Half-open (start, stop) index pairs of consecutive True values."""
    padded = np.concatenate(([False], mask, [False])).astype(np.int8)
    edges = np.flatnonzero(np.diff(padded))
    return [(int(a), int(b)) for a, b in zip(edges[::2], edges[1::2])]


def _dashed_line(img: np.ndarray, p0: tuple[int, int], p1: tuple[int, int],
                 color: tuple[int, int, int], dash: int = 5) -> None:
    x0, y0 = p0
    x1, y1 = p1
    length = max(abs(x1 - x0), abs(y1 - y0))
    if length == 0:
        return
    for start in range(0, length, dash * 2):
        stop = min(length, start + dash)
        a = (x0 + (x1 - x0) * start // length, y0 + (y1 - y0) * start // length)
        b = (x0 + (x1 - x0) * stop // length, y0 + (y1 - y0) * stop // length)
        cv2.line(img, a, b, color, 1)
