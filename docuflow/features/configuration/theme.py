"""
Theme palette derived from the configured base color.

Shade 600 is the base color; lighter shades mix it with white and darker ones
with black.
"""
import re
from typing import Dict, Optional, Tuple


_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)

BASE_SHADE = 600

FALLBACK_PALETTE: Dict[int, str] = {
    50: "#eef2ff", 100: "#e0e7ff", 200: "#c7d2fe", 300: "#a5b4fc", 400: "#818cf8",
    500: "#6366f1", 600: "#4f46e5", 700: "#4338ca", 800: "#3730a3", 900: "#312e81",
}

# shade -> (mix target, weight of the base color)
_MIXES: Dict[int, Tuple[int, float]] = {
    50: (255, 0.07),
    100: (255, 0.15),
    200: (255, 0.3),
    300: (255, 0.5),
    400: (255, 0.7),
    500: (255, 0.85),
    700: (0, 0.87),
    800: (0, 0.74),
    900: (0, 0.61),
}


def hex_to_rgb(value: str) -> Optional[Tuple[int, int, int]]:
    match = _HEX_RE.match(value or "")
    if match is None:
        return None
    return tuple(int(part, 16) for part in match.groups())


def rgb_to_hex(r: float, g: float, b: float) -> str:
    # Round half up
    return "#" + "".join(f"{int(c + 0.5):02x}" for c in (r, g, b))


def _mix(channel: int, target: int, weight: float) -> float:
    return min(255.0, max(0.0, weight * channel + (1 - weight) * target))


def generate_palette(base_hex: str) -> Dict[int, str]:
    """Shades 50-900 for ``base_hex``; the stock indigo palette if it is not a hex color."""
    rgb = hex_to_rgb(base_hex)
    if rgb is None:
        return dict(FALLBACK_PALETTE)
    shades = {BASE_SHADE: base_hex}
    for shade, (target, weight) in _MIXES.items():
        shades[shade] = rgb_to_hex(*(_mix(channel, target, weight) for channel in rgb))
    return dict(sorted(shades.items()))


def rgb_string(hex_value: str) -> Optional[str]:
    """Space separated channels, e.g. ``79 70 229``."""
    rgb = hex_to_rgb(hex_value)
    return " ".join(str(c) for c in rgb) if rgb else None
