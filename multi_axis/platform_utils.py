"""
Platform Utilities — OS-specific fixes that affect pointer input.

┌─────────────────────┬──────────────────────────┬─────────────────────────┐
│ Issue               │ Windows                  │ Linux                   │
├─────────────────────┼──────────────────────────┼─────────────────────────┤
│ Key codes           │ 8-bit clean              │ modifier flag bits      │
│ HiDPI               │ auto-scale → mouse       │ usually no scaling      │
│                     │ coords ≠ canvas pixels   │                         │
└─────────────────────┴──────────────────────────┴─────────────────────────┘

Hit-testing and index snapping assume mouse coordinates are canvas
pixels, so HiDPI awareness must be declared before the first window opens.
"""

from __future__ import annotations

import ctypes
import platform
import warnings


class PlatformInfo:
    """Immutable platform detection — computed once at import time."""

    OS: str = platform.system()                  # 'Windows' | 'Linux' | 'Darwin'
    IS_WINDOWS: bool = (OS == 'Windows')
    IS_LINUX: bool = (OS == 'Linux')
    IS_MAC: bool = (OS == 'Darwin')

    ARCH: str = platform.machine()               # 'x86_64', 'aarch64', 'AMD64'
    PY_VERSION: tuple = tuple(map(int, platform.python_version_tuple()[:2]))

    @classmethod
    def summary(cls) -> str:
        return f"{cls.OS} {cls.ARCH} | Python {'.'.join(map(str, cls.PY_VERSION))}"


# ────────────────────────────────────────────────────────────
# HiDPI Awareness (Windows)
# ────────────────────────────────────────────────────────────
def enable_hidpi_awareness() -> bool:
    """
    [Windows Only] Declare DPI awareness so mouse coordinates match pixels.

    Without this, Windows 10/11 may auto-scale the OpenCV window and
    report mouse positions in scaled units, which shifts every click
    relative to the axis label boxes and sample positions.

    Must be called BEFORE any cv2.imshow() or cv2.namedWindow().

    Returns True if successfully set.
    """
    if not PlatformInfo.IS_WINDOWS:
        return False

    try:
        # Windows 10 1703+ Per-Monitor V2 (best)
        ctypes.windll.shcore.SetProcessDpiAwareness(2)
        return True
    except (AttributeError, OSError):
        pass

    try:
        # Fallback: System DPI awareness
        ctypes.windll.user32.SetProcessDPIAware()
        return True
    except (AttributeError, OSError) as e:
        warnings.warn(
            f"Cannot declare DPI awareness: {e}. "
            f"Mouse positions may not match chart pixels.",
            RuntimeWarning, stacklevel=2
        )
        return False


# ────────────────────────────────────────────────────────────
# Cross-Platform Key Code Normalization
# ────────────────────────────────────────────────────────────
def normalize_key(raw_key: int) -> int:
    """
    Normalize cv2.waitKey() return value across platforms.

    Linux (GTK/Qt backend) may include modifier bits, e.g. NumLock sets
    bit 20 (0x100000), so 'q' becomes 0x100071. Mask to the lowest 8 bits.
    """
    if raw_key < 0:
        return -1
    return raw_key & 0xFF


def apply_platform_fixes() -> dict:
    """
    Apply all platform-specific fixes. Call once at startup.

    Returns dict with results: {'os': 'Windows', 'hidpi_set': True}
    """
    return {
        'os': PlatformInfo.OS,
        'hidpi_set': enable_hidpi_awareness() if PlatformInfo.IS_WINDOWS else False,
    }
