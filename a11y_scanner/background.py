"""Effective background resolution through translucent ancestor layers."""

from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from .color import WHITE, Color, blend_over, parse_color
from .styles import StyleLookup


def effective_background(element: Tag, styles: StyleLookup,
                         canvas: Optional[Color] = None) -> Optional[Color]:
    """
    Resolve the opaque color visible behind ``element``.

    Walks from the element itself up through its ancestors collecting every
    parseable background-color, stopping at the first fully opaque one. The
    collected layers are then composited bottom-to-top over the canvas.

    Args:
        element: Element whose background is wanted
        styles: Computed style lookup for the element's tree
        canvas: Opaque page default behind everything (white if omitted)

    Returns:
        Opaque Color, or None if the lookup could not determine a
        background-color on the way up
    """
    layers: List[Color] = []
    current = element
    while isinstance(current, Tag) and not isinstance(current, BeautifulSoup):
        value = styles.get(current, 'background-color')
        if value is None:
            return None
        layer = parse_color(value)
        if layer is not None:
            layers.append(layer)
            if layer.is_opaque:
                break
        current = current.parent

    result = canvas if canvas is not None else WHITE
    for layer in reversed(layers):
        result = blend_over(layer, result)
    return result
