"""
Color transforms for tenant branding.

Hex colors are "#RRGGBB" strings (the leading "#" is optional on input).
Malformed input never raises: conversions return None and callers fall
back to the default theme. The contrast helpers fall back to white.
"""

import math
import re

HEX_PATTERN = re.compile(r"^[0-9a-fA-F]{6}$")

BLACK = "black"
WHITE = "white"

# Foreground tokens in the "h s% l%" form used by the theme variables
CONTRAST_CSS = {
    BLACK: "0 0% 0%",
    WHITE: "0 0% 100%",
}


def _round(value: float) -> int:
    # Half up, so 0.5 boundaries don't depend on banker's rounding
    return int(math.floor(value + 0.5))


def _parse_rgb(hex_color: str) -> tuple[int, int, int] | None:
    if not isinstance(hex_color, str):
        return None
    digits = hex_color.strip()
    if digits.startswith("#"):
        digits = digits[1:]
    if not HEX_PATTERN.match(digits):
        return None
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def normalize_hex(hex_color: str | None) -> str | None:
    """Return "#RRGGBB" (upper case) or None if the input is not a 6-digit hex color."""
    rgb = _parse_rgb(hex_color) if hex_color is not None else None
    if rgb is None:
        return None
    return "#{:02X}{:02X}{:02X}".format(*rgb)


def hex_to_hsl(hex_color: str) -> tuple[int, int, int] | None:
    """
    Convert a hex color to HSL.

    Args:
        hex_color: "#RRGGBB" or "RRGGBB"

    Returns:
        (hue 0..359, saturation 0..100, lightness 0..100), rounded to
        integers, or None if the input is malformed
    """
    rgb = _parse_rgb(hex_color)
    if rgb is None:
        return None

    r, g, b = (channel / 255 for channel in rgb)
    high = max(r, g, b)
    low = min(r, g, b)
    lightness = (high + low) / 2

    if high == low:
        # Achromatic
        return 0, 0, _round(lightness * 100)

    delta = high - low
    if lightness > 0.5:
        saturation = delta / (2 - high - low)
    else:
        saturation = delta / (high + low)

    if high == r:
        hue = (g - b) / delta + (6 if g < b else 0)
    elif high == g:
        hue = (b - r) / delta + 2
    else:
        hue = (r - g) / delta + 4
    hue /= 6

    return _round(hue * 360) % 360, _round(saturation * 100), _round(lightness * 100)


def luminance(hex_color: str) -> float | None:
    """Perceptual luminance in [0, 1] (0.299R + 0.587G + 0.114B)."""
    rgb = _parse_rgb(hex_color)
    if rgb is None:
        return None
    r, g, b = rgb
    return (0.299 * r + 0.587 * g + 0.114 * b) / 255


def contrast_color(hex_color: str) -> str:
    """
    Pick a readable text color for a background.

    Returns:
        "black" for light backgrounds (luminance > 0.5), "white" otherwise,
        including malformed input
    """
    value = luminance(hex_color)
    if value is None:
        return WHITE
    return BLACK if value > 0.5 else WHITE


def hsl_css(hsl: tuple[int, int, int]) -> str:
    """Render HSL as a CSS variable value: "h s% l%"."""
    h, s, l = hsl
    return f"{h} {s}% {l}%"


def contrast_css(hex_color: str) -> str:
    """Contrast color rendered as an HSL variable value."""
    return CONTRAST_CSS[contrast_color(hex_color)]
