"""
Axis ranges — One vertical (min, max) range per series slot.

Every mutation keeps ``min < max`` strictly. Degenerate input is never an
error; it is nudged apart instead:

    set_range(s, 3, 3)        → (3, 3 + 1e-9)
    edit_max(s, -5) on (0,10) → (-5 - 1e-6, -5)
    autoscale(s, [2, 2, 2])   → (1.9, 3.1)

Vertical panning moves a range by a fraction of its own span, so pan
speed does not depend on the units of the axis.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .config import (
    AUTOSCALE_PADDING, DEFAULT_RANGE, EDIT_EPSILON, MAX_SERIES,
    SET_RANGE_EPSILON,
)
from .errors import SlotIndexError


def _above(value: float, eps: float) -> float:
    """value + eps, or the next representable double if eps vanishes."""
    out = value + eps
    return out if out > value else math.nextafter(value, math.inf)


def _below(value: float, eps: float) -> float:
    out = value - eps
    return out if out < value else math.nextafter(value, -math.inf)


@dataclass(frozen=True)
class AxisRange:
    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min

    def value_at(self, frac: float) -> float:
        """Value at a fraction measured from the bottom (0) to the top (1)."""
        return self.min + frac * (self.max - self.min)

    def fraction_of(self, value):
        """Inverse of value_at. Accepts scalars or numpy arrays."""
        return (value - self.min) / (self.max - self.min)

    def as_tuple(self) -> tuple[float, float]:
        return (self.min, self.max)


class AxisRangeStore:
    """Fixed array of MAX_SERIES axis ranges."""

    def __init__(self, capacity: int = MAX_SERIES):
        self._capacity = capacity
        self._ranges = [AxisRange(*DEFAULT_RANGE) for _ in range(capacity)]
        self._default = [True] * capacity

    def __len__(self) -> int:
        return self._capacity

    def __getitem__(self, slot: int) -> AxisRange:
        self._check(slot)
        return self._ranges[slot]

    def __iter__(self):
        return iter(self._ranges)

    def ranges(self) -> tuple[AxisRange, ...]:
        return tuple(self._ranges)

    def is_default(self, slot: int) -> bool:
        """True until the slot's range has been set, scaled, edited or zoomed."""
        self._check(slot)
        return self._default[slot]

    # ──────────────────────────────────────────────────────
    # Mutators
    # ──────────────────────────────────────────────────────
    def set_range(self, slot: int, lo: float, hi: float) -> bool:
        """
        Replace a slot's range. Out-of-range slots and non-finite bounds
        are ignored (returns False). Equal bounds get ``max = min + 1e-9``;
        inverted bounds are swapped.
        """
        if not 0 <= slot < self._capacity:
            return False
        lo, hi = float(lo), float(hi)
        if not (math.isfinite(lo) and math.isfinite(hi)):
            return False
        if lo > hi:
            lo, hi = hi, lo
        if lo == hi:
            hi = _above(lo, SET_RANGE_EPSILON)
        self._store(slot, lo, hi)
        return True

    def autoscale(self, slot: int, data: Sequence[float]) -> bool:
        """
        Fit the range to ``data`` with 5% padding on each side.

        Empty (or all-NaN) data leaves the range untouched and returns False.
        """
        self._check(slot)
        arr = np.asarray(data, dtype=np.float64)
        finite = arr[np.isfinite(arr)] if arr.size else arr
        if finite.size == 0:
            return False
        lo, hi = float(finite.min()), float(finite.max())
        pad = (hi - lo) * AUTOSCALE_PADDING
        if abs(hi - lo) < 1e-9:
            hi = lo + 1.0
            pad = 0.1
        lo, hi = lo - pad, hi + pad
        if not hi > lo:
            hi = _above(lo, SET_RANGE_EPSILON)
        self._store(slot, lo, hi)
        return True

    def shift_by_span_fraction(self, slot: int, frac: float) -> None:
        """
        Move both bounds by ``frac`` of the current span. A shift that would
        overflow to infinity leaves the range unchanged.
        """
        r = self[slot]
        delta = frac * (r.max - r.min)
        lo, hi = r.min + delta, r.max + delta
        if not (math.isfinite(lo) and math.isfinite(hi)):
            return
        if not hi > lo:
            hi = _above(lo, SET_RANGE_EPSILON)
        self._store(slot, lo, hi)

    def edit_min(self, slot: int, new_min: float) -> None:
        """Set the lower bound; push the upper bound up if it would invert."""
        r = self[slot]
        new_min = self._finite(new_min)
        hi = r.max
        if new_min >= hi:
            hi = _above(new_min, EDIT_EPSILON)
        self._store(slot, new_min, hi)

    def edit_max(self, slot: int, new_max: float) -> None:
        """Set the upper bound; push the lower bound down if it would invert."""
        r = self[slot]
        new_max = self._finite(new_max)
        lo = r.min
        if new_max <= lo:
            lo = _below(new_max, EDIT_EPSILON)
        self._store(slot, lo, new_max)

    def zoom_to_fractions(self, slot: int, top_frac: float,
                          bottom_frac: float) -> None:
        """
        Zoom to the band between two fractions-from-bottom of the current range.

        Fractions are clamped to [0, 1]; their order does not matter.
        """
        r = self[slot]
        top_frac = min(1.0, max(0.0, top_frac))
        bottom_frac = min(1.0, max(0.0, bottom_frac))
        v_top = r.value_at(top_frac)
        v_bottom = r.value_at(bottom_frac)
        lo, hi = min(v_top, v_bottom), max(v_top, v_bottom)
        if abs(hi - lo) < 1e-12:
            hi = _above(lo, EDIT_EPSILON)
        self._store(slot, lo, hi)

    def reset(self, slot: int) -> None:
        self._check(slot)
        self._ranges[slot] = AxisRange(*DEFAULT_RANGE)
        self._default[slot] = True

    def reset_all(self) -> None:
        for slot in range(self._capacity):
            self.reset(slot)

    # ──────────────────────────────────────────────────────
    # Internal
    # ──────────────────────────────────────────────────────
    def _store(self, slot: int, lo: float, hi: float) -> None:
        self._ranges[slot] = AxisRange(lo, hi)
        self._default[slot] = False

    def _check(self, slot: int) -> None:
        if not 0 <= slot < self._capacity:
            raise SlotIndexError("axis", slot, self._capacity)

    @staticmethod
    def _finite(value: float) -> float:
        value = float(value)
        if not math.isfinite(value):
            raise ValueError(f"axis bound must be finite, got {value}")
        return value
