from __future__ import annotations

import dataclasses
import unittest

import numpy as np

from multi_axis.colors import DARK_THEME, LIGHT_THEME, get_theme, register_theme
from multi_axis.config import ChartConfig
from multi_axis.core import MultiAxisChart
from multi_axis.demo import make_test_signals
from multi_axis.interactions import Button, PointerEvent
from multi_axis.renderer import Renderer, _true_runs


def _chart(**overrides) -> MultiAxisChart:
    config = ChartConfig(width=640, height=360, antialiased=False, title="Test", **overrides)
    chart = MultiAxisChart(config)
    for slot, data in enumerate(make_test_signals(200)):
        chart.set_series(slot, data, True, f"S{slot + 1}")
    chart.autoscale_all()
    return chart


class RendererTests(unittest.TestCase):
    def test_render_full_frame(self) -> None:
        chart = _chart()
        chart.place_cursor(0, (320, 180))
        chart.controller.arm_rect_zoom((200, 100))
        chart.dispatch(PointerEvent.move(300, 200, Button.SECONDARY))
        renderer = Renderer(chart.config)
        canvas = renderer.render(chart.frame(), chart.slots)

        self.assertEqual(canvas.shape, (360, 640, 3))
        self.assertEqual(canvas.dtype, np.uint8)
        self.assertFalse(np.all(canvas == LIGHT_THEME.bg))

    def test_series_pixels_inside_plot(self) -> None:
        chart = _chart(show_legend=False)
        state = chart.frame()
        canvas = Renderer(chart.config).render(state, chart.slots)
        plot = state.plot
        roi = canvas[plot.top:plot.bottom, plot.left:plot.right]
        for color in LIGHT_THEME.series_colors:
            self.assertTrue(np.any(np.all(roi == color, axis=-1)), color)

    def test_canvas_follows_resize(self) -> None:
        chart = _chart()
        renderer = Renderer(chart.config, DARK_THEME)
        chart.resize(300, 200)
        canvas = renderer.render(chart.frame(), chart.slots)
        self.assertEqual(canvas.shape, (200, 300, 3))
        self.assertTrue(np.all(canvas[-1, -1] == DARK_THEME.bg))

    def test_canvas_smaller_than_plot_floor(self) -> None:
        chart = _chart()
        chart.resize(1, 1)
        canvas = Renderer(chart.config).render(chart.frame(), chart.slots)
        self.assertEqual(canvas.shape, (1, 1, 3))

    def test_registered_theme_is_used_by_name(self) -> None:
        register_theme(dataclasses.replace(DARK_THEME, name="night", bg=(5, 5, 5)))
        chart = _chart(theme="night")
        self.assertIs(chart.theme, get_theme("night"))
        canvas = Renderer(chart.config).render(chart.frame(), chart.slots)
        self.assertTrue(np.all(canvas[-1, -1] == (5, 5, 5)))
        with self.assertRaises(KeyError):
            get_theme("no-such-theme")

    def test_true_runs(self) -> None:
        mask = np.array([False, True, True, False, True])
        self.assertEqual(_true_runs(mask), [(1, 3), (4, 5)])
        self.assertEqual(_true_runs(np.zeros(3, dtype=bool)), [])


if __name__ == "__main__":
    unittest.main()
