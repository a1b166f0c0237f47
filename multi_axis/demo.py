"""
MultiAxisChart — Demo

Usage:
    python -m multi_axis.demo             # five signals, light theme
    python -m multi_axis.demo dark        # same, dark theme

Mouse:
    left-drag    pan (X shared, Y per axis)     wheel   zoom at pointer
    left-click   axis min/max box → edit bound (console prompt)
Keys:
    Q/ESC=quit  R=reset view  1/2/3=cursor  Z=arm rect zoom (then right-drag)
    C=cancel  T=theme  S=screenshot
"""

from __future__ import annotations

import logging
import sys

import numpy as np

from .config import ChartConfig
from .core import MultiAxisChart
from .window import ChartWindow


def make_test_signals(n: int = 1000, seed: int = 123) -> list[np.ndarray]:
    """Five signals with very different units and shapes."""
    i = np.arange(n, dtype=np.float64)
    rng = np.random.default_rng(seed)
    return [
        np.sin(i * 0.02),
        np.cos(i * 0.015) * 10.0,
        i * 0.01 + (rng.random(n) - 0.5) * 0.5,
        np.exp(-i * 0.001) * np.sin(i * 0.05) * 5.0,
        np.cumsum((rng.random(n) - 0.5) * 0.2),
    ]


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    theme = sys.argv[1] if len(sys.argv) > 1 else "light"

    chart = MultiAxisChart(ChartConfig(width=1280, height=760, theme=theme,
                                       title="Multi-Axis Chart"))
    for slot, data in enumerate(make_test_signals()):
        chart.set_series(slot, data, True, f"S{slot + 1}")
    chart.autoscale_all()

    print(__doc__)
    ChartWindow(chart, window_name="MultiAxisChart Demo").run()


if __name__ == "__main__":
    main()
