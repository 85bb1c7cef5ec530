"""
CSS Color Values

Converts specified CSS color values to the rgb()/rgba() form a browser
reports as the computed value, so the contrast check only ever sees
colors it can parse.

Supported input:
- All CSS named colors and "transparent"
- Hex notation: #rgb, #rgba, #rrggbb, #rrggbbaa
- rgb()/rgba() and hsl()/hsla(), comma separated or space separated with
  an optional "/ alpha", numbers or percentages

Anything else (var(), color-mix(), lab(), system colors, ...) has no
computed value here and yields None.
"""

import math
import re
from typing import Dict, List, Optional, Tuple


# W3C CSS named colors
NAMED_COLORS: Dict[str, Tuple[int, int, int]] = {
    "aliceblue": (240, 248, 255), "antiquewhite": (250, 235, 215),
    "aqua": (0, 255, 255), "aquamarine": (127, 255, 212),
    "azure": (240, 255, 255), "beige": (245, 245, 220),
    "bisque": (255, 228, 196), "black": (0, 0, 0),
    "blanchedalmond": (255, 235, 205), "blue": (0, 0, 255),
    "blueviolet": (138, 43, 226), "brown": (165, 42, 42),
    "burlywood": (222, 184, 135), "cadetblue": (95, 158, 160),
    "chartreuse": (127, 255, 0), "chocolate": (210, 105, 30),
    "coral": (255, 127, 80), "cornflowerblue": (100, 149, 237),
    "cornsilk": (255, 248, 220), "crimson": (220, 20, 60),
    "cyan": (0, 255, 255), "darkblue": (0, 0, 139),
    "darkcyan": (0, 139, 139), "darkgoldenrod": (184, 134, 11),
    "darkgray": (169, 169, 169), "darkgreen": (0, 100, 0),
    "darkgrey": (169, 169, 169), "darkkhaki": (189, 183, 107),
    "darkmagenta": (139, 0, 139), "darkolivegreen": (85, 107, 47),
    "darkorange": (255, 140, 0), "darkorchid": (153, 50, 204),
    "darkred": (139, 0, 0), "darksalmon": (233, 150, 122),
    "darkseagreen": (143, 188, 143), "darkslateblue": (72, 61, 139),
    "darkslategray": (47, 79, 79), "darkslategrey": (47, 79, 79),
    "darkturquoise": (0, 206, 209), "darkviolet": (148, 0, 211),
    "deeppink": (255, 20, 147), "deepskyblue": (0, 191, 255),
    "dimgray": (105, 105, 105), "dimgrey": (105, 105, 105),
    "dodgerblue": (30, 144, 255), "firebrick": (178, 34, 34),
    "floralwhite": (255, 250, 240), "forestgreen": (34, 139, 34),
    "fuchsia": (255, 0, 255), "gainsboro": (220, 220, 220),
    "ghostwhite": (248, 248, 255), "gold": (255, 215, 0),
    "goldenrod": (218, 165, 32), "gray": (128, 128, 128),
    "green": (0, 128, 0), "greenyellow": (173, 255, 47),
    "grey": (128, 128, 128), "honeydew": (240, 255, 240),
    "hotpink": (255, 105, 180), "indianred": (205, 92, 92),
    "indigo": (75, 0, 130), "ivory": (255, 255, 240),
    "khaki": (240, 230, 140), "lavender": (230, 230, 250),
    "lavenderblush": (255, 240, 245), "lawngreen": (124, 252, 0),
    "lemonchiffon": (255, 250, 205), "lightblue": (173, 216, 230),
    "lightcoral": (240, 128, 128), "lightcyan": (224, 255, 255),
    "lightgoldenrodyellow": (250, 250, 210), "lightgray": (211, 211, 211),
    "lightgreen": (144, 238, 144), "lightgrey": (211, 211, 211),
    "lightpink": (255, 182, 193), "lightsalmon": (255, 160, 122),
    "lightseagreen": (32, 178, 170), "lightskyblue": (135, 206, 250),
    "lightslategray": (119, 136, 153), "lightslategrey": (119, 136, 153),
    "lightsteelblue": (176, 196, 222), "lightyellow": (255, 255, 224),
    "lime": (0, 255, 0), "limegreen": (50, 205, 50),
    "linen": (250, 240, 230), "magenta": (255, 0, 255),
    "maroon": (128, 0, 0), "mediumaquamarine": (102, 205, 170),
    "mediumblue": (0, 0, 205), "mediumorchid": (186, 85, 211),
    "mediumpurple": (147, 111, 219), "mediumseagreen": (60, 179, 113),
    "mediumslateblue": (123, 104, 238), "mediumspringgreen": (0, 250, 154),
    "mediumturquoise": (72, 209, 204), "mediumvioletred": (199, 21, 133),
    "midnightblue": (25, 25, 112), "mintcream": (245, 255, 250),
    "mistyrose": (255, 228, 225), "moccasin": (255, 228, 181),
    "navajowhite": (255, 222, 173), "navy": (0, 0, 128),
    "oldlace": (253, 245, 230), "olive": (128, 128, 0),
    "olivedrab": (107, 142, 35), "orange": (255, 165, 0),
    "orangered": (255, 69, 0), "orchid": (218, 112, 214),
    "palegoldenrod": (238, 232, 170), "palegreen": (152, 251, 152),
    "paleturquoise": (175, 238, 238), "palevioletred": (219, 112, 147),
    "papayawhip": (255, 239, 213), "peachpuff": (255, 218, 185),
    "peru": (205, 133, 63), "pink": (255, 192, 203),
    "plum": (221, 160, 221), "powderblue": (176, 224, 230),
    "purple": (128, 0, 128), "rebeccapurple": (102, 51, 153),
    "red": (255, 0, 0), "rosybrown": (188, 143, 143),
    "royalblue": (65, 105, 225), "saddlebrown": (139, 69, 19),
    "salmon": (250, 128, 114), "sandybrown": (244, 164, 96),
    "seagreen": (46, 139, 87), "seashell": (255, 245, 238),
    "sienna": (160, 82, 45), "silver": (192, 192, 192),
    "skyblue": (135, 206, 235), "slateblue": (106, 90, 205),
    "slategray": (112, 128, 144), "slategrey": (112, 128, 144),
    "snow": (255, 250, 250), "springgreen": (0, 255, 127),
    "steelblue": (70, 130, 180), "tan": (210, 180, 140),
    "teal": (0, 128, 128), "thistle": (216, 191, 216),
    "tomato": (255, 99, 71), "turquoise": (64, 224, 208),
    "violet": (238, 130, 238), "wheat": (245, 222, 179),
    "white": (255, 255, 255), "whitesmoke": (245, 245, 245),
    "yellow": (255, 255, 0), "yellowgreen": (154, 205, 50),
}

TRANSPARENT = 'rgba(0, 0, 0, 0)'

_HEX_RE = re.compile(r'^#([0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})$', re.IGNORECASE)
_FUNCTION_RE = re.compile(r'^(rgba?|hsla?)\(\s*(.*?)\s*\)$', re.IGNORECASE | re.DOTALL)
_NUMBER_RE = re.compile(
    r'^([+-]?(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?)(%|deg|grad|rad|turn)?$',
    re.IGNORECASE
)

# degrees per hue unit
HUE_UNITS = {
    '': 1.0,
    'deg': 1.0,
    'grad': 0.9,
    'rad': 180 / math.pi,
    'turn': 360.0,
}


def _channel(value: float) -> int:
    """Round half up and clamp to 0-255."""
    return max(0, min(255, int(math.floor(value + 0.5))))


def format_rgb(r: float, g: float, b: float, alpha: float = 1.0) -> str:
    """Serialize a color the way computed styles report it."""
    r, g, b = _channel(r), _channel(g), _channel(b)
    alpha = round(max(0.0, min(1.0, alpha)), 3)
    if alpha >= 1.0:
        return f"rgb({r}, {g}, {b})"
    return f"rgba({r}, {g}, {b}, {alpha:g})"


def hsl_to_rgb(h: float, s: float, l: float) -> Tuple[float, float, float]:
    """Convert HSL (h in degrees, s and l in 0-1) to unrounded 0-255 RGB."""
    h = h % 360
    c = (1 - abs(2 * l - 1)) * s
    x = c * (1 - abs((h / 60) % 2 - 1))
    m = l - c / 2

    if h < 60:
        r1, g1, b1 = c, x, 0.0
    elif h < 120:
        r1, g1, b1 = x, c, 0.0
    elif h < 180:
        r1, g1, b1 = 0.0, c, x
    elif h < 240:
        r1, g1, b1 = 0.0, x, c
    elif h < 300:
        r1, g1, b1 = x, 0.0, c
    else:
        r1, g1, b1 = c, 0.0, x

    return (r1 + m) * 255, (g1 + m) * 255, (b1 + m) * 255


def _number(token: str, units) -> Optional[Tuple[float, str]]:
    match = _NUMBER_RE.match(token.strip())
    if not match:
        return None
    unit = (match.group(2) or '').lower()
    if unit not in units:
        return None
    return float(match.group(1)), unit


def _split_arguments(args: str) -> Optional[Tuple[List[str], Optional[str]]]:
    """Split function arguments into three channels and an optional alpha."""
    if ',' in args:
        if '/' in args:
            return None
        parts = [part.strip() for part in args.split(',')]
        if len(parts) not in (3, 4):
            return None
        return parts[:3], (parts[3] if len(parts) == 4 else None)

    channels, slash, alpha = args.partition('/')
    channels = channels.split()
    alpha = alpha.strip()
    if len(channels) != 3 or (slash and not alpha):
        return None
    return channels, (alpha if slash else None)


def _alpha(token: Optional[str]) -> Optional[float]:
    if token is None:
        return 1.0
    parsed = _number(token, ('', '%'))
    if parsed is None:
        return None
    value, unit = parsed
    return value / 100 if unit == '%' else value


def _functional_color(name: str, args: str) -> Optional[str]:
    split = _split_arguments(args)
    if split is None:
        return None
    channels, alpha_token = split
    alpha = _alpha(alpha_token)
    if alpha is None:
        return None

    if name.startswith('rgb'):
        rgb = []
        for token in channels:
            parsed = _number(token, ('', '%'))
            if parsed is None:
                return None
            value, unit = parsed
            rgb.append(value * 255 / 100 if unit == '%' else value)
        return format_rgb(*rgb, alpha)

    hue = _number(channels[0], HUE_UNITS)
    saturation = _number(channels[1], ('', '%'))
    lightness = _number(channels[2], ('', '%'))
    if hue is None or saturation is None or lightness is None:
        return None
    s = max(0.0, min(1.0, saturation[0] / 100))
    l = max(0.0, min(1.0, lightness[0] / 100))
    return format_rgb(*hsl_to_rgb(hue[0] * HUE_UNITS[hue[1]], s, l), alpha)


def computed_color(value: Optional[str]) -> Optional[str]:
    """
    Computed rgb()/rgba() form of a specified color value.

    Args:
        value: Specified value such as "navy", "#fff8", "hsl(0 0% 0% / .5)"

    Returns:
        "rgb(r, g, b)" or "rgba(r, g, b, a)", or None if not a color this
        module understands. Keywords (inherit, currentcolor, ...) are the
        caller's concern and also yield None.
    """
    if not value:
        return None
    text = value.strip()
    lowered = text.lower()

    if lowered == 'transparent':
        return TRANSPARENT
    if lowered in NAMED_COLORS:
        return format_rgb(*NAMED_COLORS[lowered])

    match = _HEX_RE.match(text)
    if match:
        digits = match.group(1)
        if len(digits) <= 4:
            digits = ''.join(ch * 2 for ch in digits)
        r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
        alpha = int(digits[6:8], 16) / 255 if len(digits) == 8 else 1.0
        return format_rgb(r, g, b, alpha)

    match = _FUNCTION_RE.match(text)
    if match:
        return _functional_color(match.group(1).lower(), match.group(2))
    return None
