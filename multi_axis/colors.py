"""
Color Palette & Theme System — All colors in BGR format (OpenCV convention).

Series and cursor palettes are fixed-size to match the chart capacity:
five series colors, three cursor colors.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Theme:
    """Complete color theme for the chart."""

    name: str

    # Background & structural elements
    bg: tuple[int, int, int]
    grid: tuple[int, int, int]
    border: tuple[int, int, int]
    tick: tuple[int, int, int]

    # Text
    text: tuple[int, int, int]
    title: tuple[int, int, int]

    # Clickable axis label boxes
    label_box_bg: tuple[int, int, int]
    label_box_border: tuple[int, int, int]

    # Overlays
    legend_bg: tuple[int, int, int]
    legend_alpha: float
    info_bg: tuple[int, int, int]
    zoom_fill: tuple[int, int, int]
    zoom_alpha: float
    zoom_border: tuple[int, int, int]
    hover: tuple[int, int, int]

    # One color per series slot, one per cursor
    series_colors: tuple[tuple[int, int, int], ...] = ()
    cursor_colors: tuple[tuple[int, int, int], ...] = ()


# ────────────────────────────────────────────────────────────
# Built-in Themes
# ────────────────────────────────────────────────────────────

LIGHT_THEME = Theme(
    name="light",
    bg=(255, 255, 255),
    grid=(220, 220, 220),
    border=(0, 0, 0),
    tick=(128, 128, 128),
    text=(0, 0, 0),
    title=(30, 30, 50),
    label_box_bg=(255, 240, 220),
    label_box_border=(128, 128, 128),
    legend_bg=(255, 255, 255),
    legend_alpha=0.7,
    info_bg=(255, 255, 255),
    zoom_fill=(211, 211, 211),
    zoom_alpha=0.16,
    zoom_border=(0, 0, 0),
    hover=(128, 128, 128),
    series_colors=(
        (255, 144, 30),    # Dodger blue
        (0, 0, 255),       # Red
        (0, 128, 0),       # Green
        (0, 165, 255),     # Orange
        (128, 0, 128),     # Purple
    ),
    cursor_colors=(
        (255, 0, 255),     # Magenta
        (128, 128, 0),     # Teal
        (32, 165, 218),    # Goldenrod
    ),
)

DARK_THEME = Theme(
    name="dark",
    bg=(18, 18, 24),
    grid=(45, 45, 55),
    border=(90, 90, 110),
    tick=(110, 110, 130),
    text=(190, 190, 210),
    title=(200, 200, 220),
    label_box_bg=(60, 45, 30),
    label_box_border=(110, 110, 130),
    legend_bg=(30, 30, 40),
    legend_alpha=0.7,
    info_bg=(30, 30, 40),
    zoom_fill=(120, 120, 140),
    zoom_alpha=0.2,
    zoom_border=(200, 200, 220),
    hover=(110, 110, 130),
    series_colors=(
        (255, 170, 80),    # Sky blue
        (100, 100, 255),   # Red
        (100, 255, 100),   # Green
        (80, 180, 255),    # Orange
        (255, 100, 255),   # Magenta
    ),
    cursor_colors=(
        (255, 120, 255),   # Pink
        (200, 200, 60),    # Teal
        (60, 200, 240),    # Gold
    ),
)

# Registry of all themes
THEMES: dict[str, Theme] = {
    "light": LIGHT_THEME,
    "dark": DARK_THEME,
}


def get_theme(name: str) -> Theme:
    """Get a theme by name. Raises KeyError if not found."""
    if name not in THEMES:
        available = ', '.join(THEMES.keys())
        raise KeyError(f"Theme '{name}' not found. Available: {available}")
    return THEMES[name]


def register_theme(theme: Theme) -> None:
    """Register a custom theme."""
    THEMES[theme.name] = theme
