"""
Color Model

Pure sRGB color math used by the contrast checks.

Features:
- Hex (#rgb, #rrggbb, #rrggbbaa) and rgb()/rgba() parsing
- sRGB to linear-light conversion and relative luminance (WCAG 2.x)
- Contrast ratio between two opaque colors
- Alpha compositing of a translucent color over an opaque background

Usage:
    from a11y_scanner.color import parse_color, contrast_ratio, WHITE

    fg = parse_color("rgb(118, 118, 118)")
    ratio = contrast_ratio(fg, WHITE)
"""

import math
import re
from dataclasses import dataclass
from typing import Optional


_HEX_RE = re.compile(r'^#([0-9a-f]{3}|[0-9a-f]{6}|[0-9a-f]{8})$', re.IGNORECASE)
_RGB_RE = re.compile(
    r'^rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*([\d.]+)\s*)?\)$',
    re.IGNORECASE
)

# BT.709 channel weights
_LUMINANCE_WEIGHTS = (0.2126, 0.7152, 0.0722)


@dataclass(frozen=True)
class Color:
    """An sRGB color with 0-255 channels and an alpha in [0, 1]."""
    r: int
    g: int
    b: int
    alpha: float = 1.0

    @property
    def is_opaque(self) -> bool:
        return self.alpha >= 1.0

    def opaque(self) -> "Color":
        """Return the same channels with alpha dropped."""
        return Color(self.r, self.g, self.b)

    def to_rgb_string(self) -> str:
        return f"rgb({self.r},{self.g},{self.b})"

    def __str__(self) -> str:
        if self.is_opaque:
            return self.to_rgb_string()
        return f"rgba({self.r},{self.g},{self.b},{self.alpha:g})"


WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)


def parse_color(text: Optional[str]) -> Optional[Color]:
    """
    Parse a CSS color string.

    Only hex and functional rgb()/rgba() notation are understood. Named
    colors, keywords such as ``transparent`` or ``inherit``, gradients and
    anything malformed return None so callers can skip the node instead of
    guessing a color.

    Args:
        text: Raw color string, typically a computed style value

    Returns:
        Color, or None when the string is not a supported color
    """
    if not text:
        return None
    raw = text.strip()

    match = _RGB_RE.match(raw)
    if match:
        channels = [int(match.group(i)) for i in (1, 2, 3)]
        if any(c > 255 for c in channels):
            return None
        alpha = 1.0
        if match.group(4) is not None:
            try:
                alpha = float(match.group(4))
            except ValueError:
                return None
            alpha = min(max(alpha, 0.0), 1.0)
        return Color(channels[0], channels[1], channels[2], alpha)

    match = _HEX_RE.match(raw)
    if match:
        digits = match.group(1)
        if len(digits) == 3:
            digits = ''.join(ch * 2 for ch in digits)
        if len(digits) == 6:
            digits += 'ff'
        return Color(
            int(digits[0:2], 16),
            int(digits[2:4], 16),
            int(digits[4:6], 16),
            int(digits[6:8], 16) / 255,
        )

    return None


def _srgb_to_linear(channel: int) -> float:
    s = channel / 255
    if s <= 0.04045:
        return s / 12.92
    return ((s + 0.055) / 1.055) ** 2.4


def relative_luminance(color: Color) -> float:
    """Relative luminance of an sRGB color, 0.0 (black) to 1.0 (white)."""
    wr, wg, wb = _LUMINANCE_WEIGHTS
    return (
        wr * _srgb_to_linear(color.r)
        + wg * _srgb_to_linear(color.g)
        + wb * _srgb_to_linear(color.b)
    )


def contrast_ratio(fg: Color, bg: Color) -> float:
    """
    WCAG contrast ratio between two opaque colors.

    The result lies in [1, 21] and does not depend on argument order.
    """
    l1 = relative_luminance(fg)
    l2 = relative_luminance(bg)
    lighter = max(l1, l2)
    darker = min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def blend_over(fg: Color, bg: Color) -> Color:
    """
    Composite ``fg`` (which may be translucent) over an opaque ``bg``.

    Args:
        fg: Foreground color carrying the alpha to apply
        bg: Opaque background color

    Returns:
        Opaque Color
    """
    a = fg.alpha
    if a >= 1.0:
        return fg.opaque()
    if a <= 0.0:
        return bg.opaque()
    return Color(
        _round_half_up(fg.r * a + bg.r * (1 - a)),
        _round_half_up(fg.g * a + bg.g * (1 - a)),
        _round_half_up(fg.b * a + bg.b * (1 - a)),
    )
