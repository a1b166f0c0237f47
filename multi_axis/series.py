"""
Series — One of the chart's fixed series slots.

A slot holds an immutable float64 array, a display name and an enabled
flag. Data is replaced wholesale by the owning chart; the engine never
writes into the array (it is marked read-only on assignment).

    slot.values      → np.ndarray (read-only, 1-D, float64)
    slot.count       → len(values)
    slot.value_at(i) → sample i, NaN past the end
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np


_EMPTY = np.zeros(0, dtype=np.float64)
_EMPTY.setflags(write=False)


def as_series_array(values: Optional[Sequence[float]]) -> np.ndarray:
    """
    Convert caller data into a private read-only 1-D float64 array.

    Raises ValueError for data that is not one-dimensional or not numeric.
    """
    if values is None:
        return _EMPTY
    try:
        arr = np.array(values, dtype=np.float64, copy=True)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Series values must be numeric: {e}") from e
    if arr.ndim == 0:
        raise ValueError("Series values must be a sequence, got a scalar")
    if arr.ndim != 1:
        raise ValueError(f"Series values must be 1-D, got shape {arr.shape}")
    arr.setflags(write=False)
    return arr


class SeriesSlot:
    """A single series slot."""

    __slots__ = ('values', 'name', 'enabled')

    def __init__(self, name: str, values: Optional[np.ndarray] = None,
                 enabled: bool = False):
        self.values = _EMPTY if values is None else values
        self.name = name
        self.enabled = enabled

    @property
    def count(self) -> int:
        return len(self.values)

    def value_at(self, index: int) -> float:
        """Sample at ``index`` or NaN when the slot is shorter than that."""
        if 0 <= index < self.count:
            return float(self.values[index])
        return math.nan

    def __repr__(self) -> str:
        state = "on" if self.enabled else "off"
        return f"SeriesSlot({self.name!r}, n={self.count}, {state})"
