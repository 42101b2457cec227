#!/usr/bin/env python3
"""
Colour Utilities for the Component Model

WCAG 2.x relative luminance and contrast ratio computed from hex RGB strings.

"""

import re
from typing import Tuple

# WCAG maximum contrast (white on black)
MAX_CONTRAST = 21.0

_HEX_PATTERN = re.compile(r'^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$', re.IGNORECASE)


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """
    Parse a #RRGGBB colour string.

    Args:
        color: Hex colour, leading '#' optional

    Returns:
        (r, g, b) tuple in 0-255; unparseable input falls back to black
    """
    match = _HEX_PATTERN.match(color) if isinstance(color, str) else None
    if not match:
        return (0, 0, 0)

    return tuple(int(group, 16) for group in match.groups())


def _linearize(channel: int) -> float:
    """Convert an sRGB channel to linear light."""
    value = channel / 255
    return value / 12.92 if value <= 0.03928 else ((value + 0.055) / 1.055) ** 2.4


def relative_luminance(color: str) -> float:
    """Relative luminance of a hex colour."""
    r, g, b = (_linearize(channel) for channel in hex_to_rgb(color))
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(foreground: str, background: str) -> float:
    """
    WCAG contrast ratio between two colours.

    Args:
        foreground: Text colour
        background: Background colour

    Returns:
        Ratio in [1, 21]
    """
    fg_lum = relative_luminance(foreground)
    bg_lum = relative_luminance(background)

    lighter = max(fg_lum, bg_lum)
    darker = min(fg_lum, bg_lum)

    return (lighter + 0.05) / (darker + 0.05)
