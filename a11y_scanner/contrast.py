"""
Color Contrast Check (WCAG 1.4.3)

Scans every text-bearing element of a tree, resolves the text and
background colors actually painted, and reports pairs below the WCAG 2.1
AA minimum (4.5:1 normal text, 3:1 large text).

All failing elements are reported inside a single finding. Elements with
more than a few child elements are treated as containers and skipped so a
run of text is not counted at both its leaf and its wrapper.

Text content comes from BeautifulSoup's get_text(), which leaves the
contents of <script> and <style> out of a parent's text (a DOM's
textContent includes them). A wrapper whose only text is a script is
therefore skipped as empty rather than checked.
"""

import logging
from typing import List, Optional

from bs4 import Tag

from .background import effective_background
from .color import blend_over, contrast_ratio, parse_color
from .models import CheckSource, Finding, ImpactLevel, NodeResult, css_selector
from .options import AuditOptions
from .styles import CascadeStyleLookup, StyleLookup, parse_px


logger = logging.getLogger(__name__)

CONTRAST_RULE_ID = "custom-color-contrast"
CONTRAST_HELP = "Elements must have sufficient color contrast"
CONTRAST_DESCRIPTION = (
    "Text elements were found with foreground/background color combinations "
    "that do not meet WCAG 2.1 Level AA minimum contrast ratios (4.5:1 for "
    "normal text, 3:1 for large text)."
)
CONTRAST_HELP_URL = "https://www.w3.org/WAI/WCAG21/Understanding/contrast-minimum"
CONTRAST_TAGS = ("wcag143", "wcag2aa")


def _parse_weight(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    try:
        return int(float(value))
    except ValueError:
        return None


def is_large_text(font_px: float, font_weight: int,
                  options: Optional[AuditOptions] = None) -> bool:
    """WCAG large text: 24px and up, or 18.66px and up when bold."""
    options = options or AuditOptions()
    if font_px >= options.large_text_px:
        return True
    return font_px >= options.bold_large_text_px and font_weight >= options.bold_weight


def run_contrast_check(root: Tag, styles: Optional[StyleLookup] = None,
                       options: Optional[AuditOptions] = None) -> List[Finding]:
    """
    Check text contrast for every element under ``root``.

    Args:
        root: Tree (or subtree) to scan; the root itself is not checked
        styles: Computed style lookup (built from ``root`` if omitted)
        options: Thresholds and canvas color

    Returns:
        Empty list when nothing fails, otherwise a single Finding
    """
    options = options or AuditOptions()
    styles = styles if styles is not None else CascadeStyleLookup(root)
    canvas = options.canvas

    failing_nodes: List[NodeResult] = []
    failing_ratios: List[float] = []
    checked = set()

    for element in root.find_all(True):
        text = element.get_text().strip()
        if not text:
            continue
        if len(element.find_all(True, recursive=False)) > options.max_child_elements:
            continue

        fg_parsed = parse_color(styles.get(element, 'color'))
        if fg_parsed is None:
            logger.debug(f"Skipping <{element.name}>: unparseable text color")
            continue

        font_px = parse_px(styles.get(element, 'font-size'))
        font_weight = _parse_weight(styles.get(element, 'font-weight'))
        if font_px is None or font_weight is None:
            logger.debug(f"Skipping <{element.name}>: font size or weight unavailable")
            continue

        bg = effective_background(element, styles, canvas)
        if bg is None:
            logger.debug(f"Skipping <{element.name}>: background color unavailable")
            continue
        fg = blend_over(fg_parsed, bg)
        ratio = contrast_ratio(fg, bg)

        if is_large_text(font_px, font_weight, options):
            min_ratio = options.large_text_ratio
        else:
            min_ratio = options.normal_text_ratio

        selector = css_selector(element)
        if ratio < min_ratio and selector not in checked:
            checked.add(selector)
            failing_ratios.append(ratio)
            failing_nodes.append(NodeResult(
                target=(selector,),
                failure_summary=(
                    f"Contrast ratio {ratio:.2f}:1 (requires {min_ratio:g}:1). "
                    f"FG: {fg.to_rgb_string()}, BG: {bg.to_rgb_string()}"
                ),
            ))

    if not failing_nodes:
        return []

    logger.debug(f"Contrast check found {len(failing_nodes)} failing elements")

    if any(r < options.critical_ratio for r in failing_ratios):
        impact = ImpactLevel.CRITICAL
    else:
        impact = ImpactLevel.SERIOUS

    return [Finding(
        id=CONTRAST_RULE_ID,
        source=CheckSource.CUSTOM_CONTRAST,
        impact=impact,
        help=CONTRAST_HELP,
        description=CONTRAST_DESCRIPTION,
        help_url=CONTRAST_HELP_URL,
        tags=CONTRAST_TAGS,
        nodes=tuple(failing_nodes),
    )]
