"""
Focus Indicator Check (WCAG 2.4.7)

Looks for focus outlines that are switched off without a visible
replacement, in two places:
- inline style attributes of focusable elements
- :focus rules inside <style> blocks

Both passes are best-effort text searches. They do not parse CSS, so
compensation anywhere in the same declaration text counts (including
border-radius) and outline values other than "none"/"0" are not seen.
"""

import logging
import re
from typing import List, Optional

from bs4 import Tag

from .models import CheckSource, Finding, ImpactLevel, NodeResult, css_selector
from .options import AuditOptions
from .styles import StyleLookup


logger = logging.getLogger(__name__)

FOCUS_RULE_ID = "custom-focus-indicator"
FOCUS_HELP = "Interactive elements must have visible focus indicators"
FOCUS_DESCRIPTION = (
    "Focusable elements were found with suppressed outline styles "
    "(:focus { outline: none }) and no visible alternative focus indicator. "
    "This violates WCAG 2.4.7 Focus Visible."
)
FOCUS_HELP_URL = "https://www.w3.org/WAI/WCAG21/Understanding/focus-visible"
FOCUS_TAGS = ("wcag247", "wcag2aa")

FOCUSABLE_SELECTOR = (
    'a[href], button, input, select, textarea, [tabindex], '
    '[role="button"], [role="link"], [role="checkbox"], [role="radio"], [role="tab"]'
)

UNKNOWN_SELECTOR = "unknown selector"

INLINE_FAILURE = (
    'Element has "outline: none/0" in inline styles without a visible '
    'alternative focus indicator (border or box-shadow).'
)
GLOBAL_FAILURE = (
    'CSS rule suppresses focus outline via "outline: none/0" without visible '
    'alternative. Keyboard users may not see focus location.'
)

# Inline style patterns
OUTLINE_SUPPRESSED_RE = re.compile(r'outline\s*:\s*(none|0)\b', re.IGNORECASE)
BORDER_COMPENSATION_RE = re.compile(r'border.*:.*\d', re.IGNORECASE)
BOX_SHADOW_RE = re.compile(r'box-shadow\s*:(?!.*none)', re.IGNORECASE)

# Stylesheet patterns
FOCUS_SUPPRESSION_RULE_RE = re.compile(
    r'[^{}]*:focus[^{]*\{[^}]*outline\s*:\s*(none|0)[^}]*\}',
    re.IGNORECASE
)
RULE_BORDER_RE = re.compile(r'border.*:\s*\d', re.IGNORECASE)
RULE_SELECTOR_RE = re.compile(r'^([^{]+)')


def _inline_suppresses_focus(style: str) -> bool:
    if not OUTLINE_SUPPRESSED_RE.search(style):
        return False
    has_border = BORDER_COMPENSATION_RE.search(style)
    has_shadow = BOX_SHADOW_RE.search(style)
    return not has_border and not has_shadow


def find_global_focus_suppressions(css: str) -> List[str]:
    """
    Selectors of :focus rules that drop the outline without compensation.

    Args:
        css: Stylesheet text

    Returns:
        Selector text of each offending rule, in source order
    """
    selectors = []
    for match in FOCUS_SUPPRESSION_RULE_RE.finditer(css or ''):
        rule = match.group(0)
        if BOX_SHADOW_RE.search(rule) or RULE_BORDER_RE.search(rule):
            continue
        selector_match = RULE_SELECTOR_RE.match(rule)
        selector = selector_match.group(1).strip() if selector_match else ''
        selectors.append(selector or UNKNOWN_SELECTOR)
    return selectors


def run_focus_indicator_check(root: Tag, styles: Optional[StyleLookup] = None,
                              options: Optional[AuditOptions] = None) -> List[Finding]:
    """
    Check focusable elements and stylesheet rules for hidden focus outlines.

    Computed styles are not consulted; only the raw style text is searched.

    Args:
        root: Tree (or subtree) to scan
        styles: Ignored; all local checks share one signature
        options: Ignored; all local checks share one signature

    Returns:
        Empty list when nothing fails, otherwise a single Finding
    """
    failing_nodes: List[NodeResult] = []
    checked = set()

    for element in root.select(FOCUSABLE_SELECTOR):
        selector = css_selector(element)
        if selector in checked:
            continue
        checked.add(selector)

        if _inline_suppresses_focus(element.get('style') or ''):
            failing_nodes.append(NodeResult(target=(selector,), failure_summary=INLINE_FAILURE))

    for style_el in root.find_all('style'):
        for selector in find_global_focus_suppressions(style_el.get_text()):
            failing_nodes.append(NodeResult(target=(selector,), failure_summary=GLOBAL_FAILURE))

    if not failing_nodes:
        return []

    logger.debug(f"Focus indicator check found {len(failing_nodes)} failing nodes")

    return [Finding(
        id=FOCUS_RULE_ID,
        source=CheckSource.CUSTOM_FOCUS,
        impact=ImpactLevel.SERIOUS,
        help=FOCUS_HELP,
        description=FOCUS_DESCRIPTION,
        help_url=FOCUS_HELP_URL,
        tags=FOCUS_TAGS,
        nodes=tuple(failing_nodes),
    )]
