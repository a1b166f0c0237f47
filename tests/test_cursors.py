from __future__ import annotations

import math
import unittest

import numpy as np

from multi_axis.colors import DARK_THEME, LIGHT_THEME
from multi_axis.cursors import CursorSet
from multi_axis.errors import SlotIndexError
from multi_axis.geometry import Rect
from multi_axis.series import SeriesSlot, as_series_array
from multi_axis.viewport import ViewportTransform

PLOT = Rect(100, 50, 1000, 400)


def _slot(name: str, values, enabled: bool = True) -> SeriesSlot:
    return SeriesSlot(name, as_series_array(values), enabled)


class CursorSetTests(unittest.TestCase):
    def test_three_disabled_cursors_with_theme_colors(self) -> None:
        cursors = CursorSet()
        self.assertEqual(len(cursors), 3)
        self.assertEqual([c.name for c in cursors], ["Cursor 1", "Cursor 2", "Cursor 3"])
        self.assertEqual([c.color for c in cursors], list(LIGHT_THEME.cursor_colors))
        self.assertFalse(any(c.enabled for c in cursors))
        self.assertEqual(CursorSet(DARK_THEME)[0].color, DARK_THEME.cursor_colors[0])

    def test_place_nearest_snaps_and_enables(self) -> None:
        cursors = CursorSet()
        self.assertTrue(cursors.place_nearest(1, (600, 200), PLOT, ViewportTransform(), 101))
        self.assertTrue(cursors[1].enabled)
        self.assertEqual(cursors[1].index, 50)

    def test_place_outside_plot_is_ignored(self) -> None:
        cursors = CursorSet()
        self.assertFalse(cursors.place_nearest(0, (50, 200), PLOT, ViewportTransform(), 101))
        self.assertFalse(cursors.place_nearest(0, (600, 450), PLOT, ViewportTransform(), 101))
        self.assertFalse(cursors[0].enabled)

    def test_place_without_enough_data_is_ignored(self) -> None:
        cursors = CursorSet()
        self.assertFalse(cursors.place_nearest(0, (600, 200), PLOT, ViewportTransform(), 1))
        self.assertFalse(cursors[0].enabled)

    def test_toggle_keeps_previous_index(self) -> None:
        cursors = CursorSet()
        cursors[2].index = 42
        self.assertTrue(cursors.toggle(2))
        self.assertEqual(cursors[2].index, 42)
        self.assertFalse(cursors.toggle(2))
        self.assertEqual(cursors[2].index, 42)

    def test_toggle_with_position_places_cursor(self) -> None:
        cursors = CursorSet()
        cursors.toggle(0, (1100 - 1, 200), PLOT, ViewportTransform(), 11)
        self.assertTrue(cursors[0].enabled)
        self.assertEqual(cursors[0].index, 10)

    def test_clamp_all(self) -> None:
        cursors = CursorSet()
        cursors[0].index = 90
        cursors[1].index = 5
        cursors.clamp_all(10)
        self.assertEqual((cursors[0].index, cursors[1].index), (9, 5))
        cursors.clamp_all(0)
        self.assertEqual(cursors[0].index, 0)

    def test_readout_lists_enabled_series_long_enough(self) -> None:
        slots = [
            _slot("A", np.arange(10.0)),
            _slot("B", [1.0, 2.0]),
            _slot("C", np.arange(10.0) * 2, enabled=False),
            _slot("D", [math.nan] * 10),
        ]
        cursors = CursorSet()
        cursors[0].index = 4
        readout = cursors.readout(0, slots, 10)
        self.assertEqual(readout.index, 4)
        self.assertEqual([name for name, _ in readout.values], ["A", "D"])
        self.assertEqual(readout.values[0][1], 4.0)
        self.assertTrue(math.isnan(readout.values[1][1]))

    def test_bad_cursor_index(self) -> None:
        cursors = CursorSet()
        with self.assertRaises(SlotIndexError):
            cursors[3]
        with self.assertRaises(SlotIndexError):
            cursors.toggle(-1)


if __name__ == "__main__":
    unittest.main()
