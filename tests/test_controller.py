from __future__ import annotations

import math
import unittest
from unittest import mock

import numpy as np

from multi_axis.config import ChartConfig
from multi_axis.controller import Idle, Panning, RectZooming
from multi_axis.core import MultiAxisChart
from multi_axis.errors import InvalidNumberError
from multi_axis.geometry import Rect
from multi_axis.interactions import Button, PointerEvent
from multi_axis.viewport import ViewportTransform


def _measure(text: str) -> tuple[int, int]:
    return (7 * len(text), 10)


def _chart(**kwargs) -> MultiAxisChart:
    """800x400 control with the plot at Rect(200, 100, 400, 200)."""
    config = ChartConfig(width=800, height=400, area=(0.25, 0.25, 0.5, 0.5))
    chart = MultiAxisChart(config, measure=_measure, **kwargs)
    chart.set_series(0, np.linspace(0.0, 10.0, 101), name="S1")
    chart.set_series(1, np.linspace(0.0, 1.0, 101), enabled=False, name="S2")
    chart.set_series(2, np.linspace(100.0, 200.0, 101), name="S3")
    chart.set_axis_range(0, 0.0, 10.0)
    chart.set_axis_range(1, 0.0, 10.0)
    chart.set_axis_range(2, 100.0, 200.0)
    chart.frame()
    return chart


class PanTests(unittest.TestCase):
    def test_primary_drag_enters_and_leaves_panning(self) -> None:
        chart = _chart()
        self.assertEqual(chart.plot_rect, Rect(200, 100, 400, 200))
        chart.dispatch(PointerEvent.down(400, 200))
        self.assertIsInstance(chart.controller.state, Panning)
        chart.dispatch(PointerEvent.up(400, 200))
        self.assertIsInstance(chart.controller.state, Idle)

    def test_vertical_drag_shifts_enabled_axes(self) -> None:
        chart = _chart()
        chart.dispatch(PointerEvent.down(400, 200))
        chart.dispatch(PointerEvent.move(400, 220, Button.PRIMARY))
        self.assertAlmostEqual(chart.ranges[0].min, 1.0)
        self.assertAlmostEqual(chart.ranges[0].max, 11.0)
        self.assertAlmostEqual(chart.ranges[2].min, 110.0)
        self.assertAlmostEqual(chart.ranges[2].max, 210.0)
        self.assertEqual(chart.ranges[1].as_tuple(), (0.0, 10.0))

    def test_horizontal_drag_adds_pixel_fraction_to_pan(self) -> None:
        chart = _chart()
        chart.viewport = ViewportTransform(pan_x=0.2, zoom_x=2.0)
        chart.dispatch(PointerEvent.down(400, 200))
        chart.dispatch(PointerEvent.move(440, 200, Button.PRIMARY))
        self.assertAlmostEqual(chart.viewport.pan_x, 0.3)
        chart.dispatch(PointerEvent.move(380, 200, Button.PRIMARY))
        self.assertAlmostEqual(chart.viewport.pan_x, 0.15)
        self.assertEqual(chart.viewport.zoom_x, 2.0)

    def test_horizontal_drag_at_full_view_keeps_identity(self) -> None:
        chart = _chart()
        chart.dispatch(PointerEvent.down(400, 200))
        chart.dispatch(PointerEvent.move(300, 200, Button.PRIMARY))
        self.assertEqual((chart.viewport.pan_x, chart.viewport.zoom_x), (0.0, 1.0))

    def test_wheel_zooms_while_panning(self) -> None:
        chart = _chart()
        chart.dispatch(PointerEvent.down(400, 200))
        chart.dispatch(PointerEvent.wheel(400, 200, 120))
        self.assertAlmostEqual(chart.viewport.zoom_x, 1.12)
        self.assertIsInstance(chart.controller.state, Panning)


class AxisEditTests(unittest.TestCase):
    def test_click_on_max_label_edits_max(self) -> None:
        prompt = mock.Mock(return_value=25.0)
        chart = _chart(prompt=prompt)
        chart.dispatch(PointerEvent.down(180, 100))
        prompt.assert_called_once_with("Edit Max for S1", 10.0)
        self.assertEqual(chart.ranges[0].as_tuple(), (0.0, 25.0))
        self.assertIsInstance(chart.controller.state, Idle)

    def test_min_above_max_pushes_max_up(self) -> None:
        prompt = mock.Mock(return_value=50.0)
        chart = _chart(prompt=prompt)
        chart.dispatch(PointerEvent.down(185, 300))
        prompt.assert_called_once_with("Edit Min for S1", 0.0)
        r = chart.ranges[0]
        self.assertEqual(r.min, 50.0)
        self.assertAlmostEqual(r.max, 50.0 + 1e-6, places=12)

    def test_cancelled_prompt_changes_nothing(self) -> None:
        chart = _chart(prompt=lambda title, current: None)
        chart.dispatch(PointerEvent.down(180, 100))
        self.assertEqual(chart.ranges[0].as_tuple(), (0.0, 10.0))
        self.assertIsInstance(chart.controller.state, Idle)

    def test_invalid_text_is_reported(self) -> None:
        errors = []

        def prompt(title: str, current: float) -> float:
            raise InvalidNumberError("abc")

        chart = _chart(prompt=prompt, on_input_error=errors.append)
        with self.assertLogs("multi_axis.controller", level="WARNING"):
            chart.dispatch(PointerEvent.down(180, 100))
        self.assertEqual(errors, ["Invalid number: 'abc'"])
        self.assertEqual(chart.ranges[0].as_tuple(), (0.0, 10.0))

    def test_non_finite_result_is_reported(self) -> None:
        errors = []
        chart = _chart(prompt=lambda title, current: math.nan, on_input_error=errors.append)
        with self.assertLogs("multi_axis.controller", level="WARNING"):
            chart.dispatch(PointerEvent.down(185, 300))
        self.assertEqual(len(errors), 1)
        self.assertEqual(chart.ranges[0].as_tuple(), (0.0, 10.0))

    def test_label_click_without_prompt_does_not_pan(self) -> None:
        chart = _chart()
        chart.dispatch(PointerEvent.down(180, 100))
        self.assertIsInstance(chart.controller.state, Idle)


class RectangleZoomTests(unittest.TestCase):
    def test_rectangle_zoom_applies_to_x_and_each_axis(self) -> None:
        chart = _chart()
        self.assertTrue(chart.controller.arm_rect_zoom((300, 150)))
        chart.dispatch(PointerEvent.move(500, 250, Button.SECONDARY))
        self.assertEqual(chart.controller.preview_rect, Rect(300, 150, 200, 100))
        chart.dispatch(PointerEvent.up(500, 250, Button.SECONDARY))

        self.assertIsInstance(chart.controller.state, Idle)
        self.assertIsNone(chart.controller.preview_rect)
        self.assertAlmostEqual(chart.viewport.zoom_x, 2.0)
        self.assertAlmostEqual(chart.viewport.pan_x, 0.25)
        self.assertAlmostEqual(chart.ranges[0].min, 2.5)
        self.assertAlmostEqual(chart.ranges[0].max, 7.5)
        self.assertAlmostEqual(chart.ranges[2].min, 125.0)
        self.assertAlmostEqual(chart.ranges[2].max, 175.0)
        self.assertEqual(chart.ranges[1].as_tuple(), (0.0, 10.0))

    def test_small_rectangle_is_discarded(self) -> None:
        chart = _chart()
        chart.controller.arm_rect_zoom((300, 150))
        chart.dispatch(PointerEvent.up(305, 250, Button.SECONDARY))
        self.assertIsInstance(chart.controller.state, Idle)
        self.assertEqual((chart.viewport.pan_x, chart.viewport.zoom_x), (0.0, 1.0))
        self.assertEqual(chart.ranges[0].as_tuple(), (0.0, 10.0))

    def test_primary_up_does_not_finish_rectangle(self) -> None:
        chart = _chart()
        chart.controller.arm_rect_zoom((300, 150))
        chart.dispatch(PointerEvent.up(500, 250, Button.PRIMARY))
        self.assertIsInstance(chart.controller.state, RectZooming)

    def test_cancel_drops_rectangle(self) -> None:
        chart = _chart()
        chart.controller.arm_rect_zoom((300, 150))
        chart.dispatch(PointerEvent.move(500, 250))
        chart.controller.cancel()
        self.assertIsInstance(chart.controller.state, Idle)
        self.assertEqual(chart.ranges[0].as_tuple(), (0.0, 10.0))

    def test_cannot_arm_while_panning(self) -> None:
        chart = _chart()
        chart.dispatch(PointerEvent.down(400, 200))
        self.assertFalse(chart.controller.arm_rect_zoom((300, 150)))
        self.assertIsInstance(chart.controller.state, Panning)


class ContextMenuTests(unittest.TestCase):
    def test_secondary_click_offers_menu(self) -> None:
        on_menu = mock.Mock()
        chart = _chart(on_context_menu=on_menu)
        chart.dispatch(PointerEvent.down(400, 200, Button.SECONDARY))

        position, items = on_menu.call_args[0]
        self.assertEqual(position, (400, 200))
        self.assertEqual([item.label for item in items], [
            "Enable Cursor 1", "Set Cursor 1 Here",
            "Enable Cursor 2", "Set Cursor 2 Here",
            "Enable Cursor 3", "Set Cursor 3 Here",
            "Start Rectangle Zoom (right-drag)",
            "Reset View (autoscale)",
        ])
        self.assertIsInstance(chart.controller.state, Idle)

    def test_menu_actions(self) -> None:
        chart = _chart()
        items = {item.label: item for item in chart.controller.context_menu((400, 200))}

        items["Set Cursor 2 Here"].action()
        self.assertTrue(chart.cursors[1].enabled)
        self.assertEqual(chart.cursors[1].index, 50)
        self.assertEqual(chart.controller.context_menu((400, 200))[2].label,
                         "Disable Cursor 2")

        items["Start Rectangle Zoom (right-drag)"].action()
        self.assertIsInstance(chart.controller.state, RectZooming)
        chart.controller.cancel()

        chart.viewport.rectangle_zoom_x(0.2, 0.4)
        items["Reset View (autoscale)"].action()
        self.assertEqual((chart.viewport.pan_x, chart.viewport.zoom_x), (0.0, 1.0))
        self.assertAlmostEqual(chart.ranges[0].min, -0.5)
        self.assertAlmostEqual(chart.ranges[0].max, 10.5)


class HoverTests(unittest.TestCase):
    def test_move_and_leave(self) -> None:
        redraw = mock.Mock()
        chart = _chart(on_redraw=redraw)
        redraw.reset_mock()
        chart.dispatch(PointerEvent.move(400, 200))
        self.assertEqual(chart.controller.hover, (400, 200))
        self.assertEqual(chart.frame().hover_index, 50)
        chart.dispatch(PointerEvent.leave())
        self.assertIsNone(chart.controller.hover)
        self.assertIsNone(chart.frame().hover_index)
        self.assertEqual(redraw.call_count, 2)


if __name__ == "__main__":
    unittest.main()
