"""
Interactions — Pointer events, OpenCV mouse adapter, keyboard shortcuts,
screenshots.

The chart engine consumes toolkit-neutral ``PointerEvent`` values. The
OpenCV adapter below translates HighGUI mouse callbacks into them; any
other toolkit only needs an equivalent translation.

Keyboard Shortcuts (reference window):
=====================================
  Q / ESC  — Quit
  R        — Reset view (autoscale all axes, identity viewport)
  1 / 2 / 3 — Toggle cursor at the pointer
  Z        — Arm rectangle zoom at the pointer (then right-drag)
  C        — Cancel the current gesture
  T        — Cycle theme
  S        — Save screenshot (PNG)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

import cv2
import numpy as np


# ────────────────────────────────────────────────────────────
# Pointer events
# ────────────────────────────────────────────────────────────
class EventType(Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    WHEEL = "wheel"
    LEAVE = "leave"


class Button(Enum):
    NONE = "none"
    PRIMARY = "primary"
    SECONDARY = "secondary"


@dataclass(frozen=True)
class PointerEvent:
    """A pointer event in control-local pixel coordinates."""
    type: EventType
    position: tuple[int, int] = (0, 0)
    button: Button = Button.NONE
    wheel_delta: int = 0

    @classmethod
    def down(cls, x: int, y: int, button: Button = Button.PRIMARY) -> 'PointerEvent':
        return cls(EventType.DOWN, (x, y), button)

    @classmethod
    def move(cls, x: int, y: int, button: Button = Button.NONE) -> 'PointerEvent':
        return cls(EventType.MOVE, (x, y), button)

    @classmethod
    def up(cls, x: int, y: int, button: Button = Button.PRIMARY) -> 'PointerEvent':
        return cls(EventType.UP, (x, y), button)

    @classmethod
    def wheel(cls, x: int, y: int, delta: int) -> 'PointerEvent':
        return cls(EventType.WHEEL, (x, y), Button.NONE, delta)

    @classmethod
    def leave(cls) -> 'PointerEvent':
        return cls(EventType.LEAVE)


_CV2_BUTTON_EVENTS = {
    cv2.EVENT_LBUTTONDOWN: (EventType.DOWN, Button.PRIMARY),
    cv2.EVENT_RBUTTONDOWN: (EventType.DOWN, Button.SECONDARY),
    cv2.EVENT_LBUTTONUP: (EventType.UP, Button.PRIMARY),
    cv2.EVENT_RBUTTONUP: (EventType.UP, Button.SECONDARY),
}


def translate_cv2_event(event: int, x: int, y: int,
                        flags: int) -> Optional[PointerEvent]:
    """Map one HighGUI mouse callback to a PointerEvent (None if unsupported)."""
    if event in _CV2_BUTTON_EVENTS:
        kind, button = _CV2_BUTTON_EVENTS[event]
        return PointerEvent(kind, (x, y), button)
    if event == cv2.EVENT_MOUSEMOVE:
        if flags & cv2.EVENT_FLAG_LBUTTON:
            button = Button.PRIMARY
        elif flags & cv2.EVENT_FLAG_RBUTTON:
            button = Button.SECONDARY
        else:
            button = Button.NONE
        return PointerEvent(EventType.MOVE, (x, y), button)
    if event == cv2.EVENT_MOUSEWHEEL:
        return PointerEvent.wheel(x, y, cv2.getMouseWheelDelta(flags))
    return None


# ────────────────────────────────────────────────────────────
# Mouse adapter
# ────────────────────────────────────────────────────────────
class MouseTracker:
    """
    Forwards mouse input from an OpenCV window to an event sink.

    OpenCV mouse callbacks run on the HighGUI thread, same as the
    thread that called cv2.waitKey(). The sink is therefore called on
    the event thread and may mutate chart state directly.
    """

    def __init__(self, sink: Callable[[PointerEvent], object]):
        self._sink = sink
        self._pos: Optional[tuple[int, int]] = None
        self._attached_window: Optional[str] = None

    def attach(self, window_name: str) -> None:
        """Register mouse callback for a named window."""
        self._attached_window = window_name
        cv2.setMouseCallback(window_name, self._callback)

    def _callback(self, event: int, x: int, y: int,
                  flags: int, param) -> None:
        pointer = translate_cv2_event(event, x, y, flags)
        if pointer is None:
            return
        self._pos = pointer.position
        self._sink(pointer)

    @property
    def position(self) -> Optional[tuple[int, int]]:
        """Last known mouse (x, y) or None before any event."""
        return self._pos


# ────────────────────────────────────────────────────────────
# Screenshot
# ────────────────────────────────────────────────────────────
def save_screenshot(canvas: np.ndarray, directory: str = ".") -> str:
    """
    Save current canvas as PNG with timestamp filename.

    Returns the full path of the saved file.
    """
    path = Path(directory)
    path.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:-3]
    filename = path / f"chart_{timestamp}.png"
    cv2.imwrite(str(filename), canvas)
    return str(filename)


# ────────────────────────────────────────────────────────────
# Keyboard Action Dispatcher
# ────────────────────────────────────────────────────────────
@dataclass
class KeyAction:
    """Result of processing a key press."""
    quit: bool = False
    reset_view: bool = False
    toggle_cursor: Optional[int] = None
    arm_rect_zoom: bool = False
    cancel: bool = False
    cycle_theme: bool = False
    screenshot: bool = False


def process_key(key: int) -> KeyAction:
    """
    Map a normalized key code to an action.

    Uses normalized 8-bit key codes (already masked by normalize_key).
    """
    if key < 0:
        return KeyAction()

    action = KeyAction()

    if key == ord('q') or key == 27:       # Q or ESC
        action.quit = True
    elif key == ord('r'):
        action.reset_view = True
    elif key in (ord('1'), ord('2'), ord('3')):
        action.toggle_cursor = key - ord('1')
    elif key == ord('z'):
        action.arm_rect_zoom = True
    elif key == ord('c'):
        action.cancel = True
    elif key == ord('t'):
        action.cycle_theme = True
    elif key == ord('s'):
        action.screenshot = True

    return action
