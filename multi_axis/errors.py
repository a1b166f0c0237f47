"""
Errors — Exception hierarchy of the chart engine.

Slot errors derive from IndexError and input errors from ValueError, so
callers can catch either the builtin or ChartError.
"""

from __future__ import annotations


class ChartError(Exception):
    """Base class for chart engine errors."""


class SlotIndexError(ChartError, IndexError):
    """A series or cursor slot index outside the fixed capacity."""

    def __init__(self, kind: str, index: int, capacity: int):
        super().__init__(f"{kind} index {index} out of range [0, {capacity - 1}]")
        self.kind = kind
        self.index = index
        self.capacity = capacity


class InvalidNumberError(ChartError, ValueError):
    """Numeric text entered for an axis bound could not be used."""

    def __init__(self, text: str):
        super().__init__(f"Invalid number: {text!r}")
        self.text = text
