"""
Palette tables for color rendering.

Provides the default named-color lookup used for "+name" directives and the
xterm 16/256 color tables used to reduce literal RGB colors to terminal codes.
"""

from typing import List, Optional, Tuple

RGB = Tuple[int, int, int]

# Map of color names to hex codes
COLOR_HEX_MAP = {
    "black": "#000000",
    "white": "#ffffff",
    "gray": "#808080",
    "grey": "#808080",
    "lightgray": "#d3d3d3",
    "lightgrey": "#d3d3d3",
    "darkgray": "#a9a9a9",
    "darkgrey": "#a9a9a9",
    "red": "#ff0000",
    "darkred": "#8b0000",
    "lightred": "#ff6b6b",
    "pink": "#ffc0cb",
    "darkpink": "#c71585",
    "green": "#00ff00",
    "darkgreen": "#006400",
    "lightgreen": "#90ee90",
    "lime": "#00ff00",
    "blue": "#0000ff",
    "darkblue": "#00008b",
    "lightblue": "#add8e6",
    "cyan": "#00ffff",
    "yellow": "#ffff00",
    "darkyellow": "#b8860b",
    "lightyellow": "#ffffe0",
    "gold": "#ffd700",
    "orange": "#ffa500",
    "darkorange": "#ff8c00",
    "lightorange": "#ffd4a3",
    "purple": "#800080",
    "darkpurple": "#4b0082",
    "lightpurple": "#d8bfd8",
    "magenta": "#ff00ff",
    "brown": "#a52a2a",
    "tan": "#d2b48c",
    "beige": "#f5f5dc",
}

# The eight base ANSI colors, by palette index
BASE_COLORS = ["black", "red", "green", "yellow", "blue", "magenta", "cyan", "white"]

# xterm default RGB values for palette indices 0-15
XTERM_16: List[RGB] = [
    (0, 0, 0), (205, 0, 0), (0, 205, 0), (205, 205, 0),
    (0, 0, 238), (205, 0, 205), (0, 205, 205), (229, 229, 229),
    (127, 127, 127), (255, 0, 0), (0, 255, 0), (255, 255, 0),
    (92, 92, 255), (255, 0, 255), (0, 255, 255), (255, 255, 255),
]

CUBE_LEVELS = [0, 95, 135, 175, 215, 255]


def hex_to_rgb(value: str) -> RGB:
    """Convert "#rrggbb" to an (r, g, b) tuple."""
    value = value.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def lookup_named_color(name: str) -> Optional[RGB]:
    """
    Look up a color name in the default palette.

    Args:
        name: Color name (e.g., "orange", "lightblue")

    Returns:
        tuple: (r, g, b), or None if the name is unknown
    """
    hex_code = COLOR_HEX_MAP.get(name.lower())
    if hex_code is None:
        return None
    return hex_to_rgb(hex_code)


def index_to_rgb(index: int) -> RGB:
    """RGB value of an xterm 256-color palette index."""
    if index < 16:
        return XTERM_16[index]
    if index < 232:
        index -= 16
        return (CUBE_LEVELS[index // 36], CUBE_LEVELS[(index // 6) % 6], CUBE_LEVELS[index % 6])
    level = 8 + (index - 232) * 10
    return (level, level, level)


def _distance(a: RGB, b: RGB) -> int:
    return sum((x - y) ** 2 for x, y in zip(a, b))


def _nearest_level(component: int) -> int:
    return min(range(len(CUBE_LEVELS)), key=lambda i: abs(CUBE_LEVELS[i] - component))


def nearest_256(rgb: RGB) -> int:
    """Nearest palette index in the 6x6x6 color cube or the gray ramp (16-255)."""
    r, g, b = (_nearest_level(c) for c in rgb)
    cube_index = 16 + 36 * r + 6 * g + b

    average = sum(rgb) // 3
    gray_step = min(23, max(0, round((average - 8) / 10)))
    gray_index = 232 + gray_step

    if _distance(index_to_rgb(gray_index), rgb) < _distance(index_to_rgb(cube_index), rgb):
        return gray_index
    return cube_index


def nearest_16(rgb: RGB) -> int:
    """Nearest of the 16 basic terminal colors (0-15)."""
    return min(range(16), key=lambda i: _distance(XTERM_16[i], rgb))


def nearest_ansi(rgb: RGB) -> int:
    """
    Nearest 16-color index for an RGB value.

    Bright hues (9-14) fold onto their standard codes (1-6), so a pure
    primary like (255, 0, 0) renders as plain red rather than bright red.
    Gray (8) and bright white (15) are kept.
    """
    index = nearest_16(rgb)
    if 9 <= index <= 14:
        return index - 8
    return index
