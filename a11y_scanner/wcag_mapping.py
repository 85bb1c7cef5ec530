"""
WCAG Criterion Lookup

Static mapping from axe-core rule tags (e.g. "wcag143") to WCAG 2.1
success criteria, plus helpers used when presenting violations.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional


@dataclass(frozen=True)
class WCAGCriterion:
    """A WCAG success criterion"""
    id: str       # e.g. "1.4.3"
    name: str
    level: str    # "A", "AA" or "AAA"
    url: str


_UNDERSTANDING = "https://www.w3.org/WAI/WCAG21/Understanding/"


def _sc(sc_id: str, name: str, level: str, slug: str) -> WCAGCriterion:
    return WCAGCriterion(sc_id, name, level, _UNDERSTANDING + slug)


WCAG_CRITERIA: Dict[str, WCAGCriterion] = {
    "wcag111": _sc("1.1.1", "Non-text Content", "A", "non-text-content"),
    "wcag121": _sc("1.2.1", "Audio-only and Video-only", "A", "audio-only-and-video-only-prerecorded"),
    "wcag122": _sc("1.2.2", "Captions (Prerecorded)", "A", "captions-prerecorded"),
    "wcag123": _sc("1.2.3", "Audio Description or Media Alternative", "A", "audio-description-or-media-alternative-prerecorded"),
    "wcag124": _sc("1.2.4", "Captions (Live)", "AA", "captions-live"),
    "wcag125": _sc("1.2.5", "Audio Description", "AA", "audio-description-prerecorded"),
    "wcag131": _sc("1.3.1", "Info and Relationships", "A", "info-and-relationships"),
    "wcag132": _sc("1.3.2", "Meaningful Sequence", "A", "meaningful-sequence"),
    "wcag133": _sc("1.3.3", "Sensory Characteristics", "A", "sensory-characteristics"),
    "wcag134": _sc("1.3.4", "Orientation", "AA", "orientation"),
    "wcag135": _sc("1.3.5", "Identify Input Purpose", "AA", "identify-input-purpose"),
    "wcag141": _sc("1.4.1", "Use of Color", "A", "use-of-color"),
    "wcag142": _sc("1.4.2", "Audio Control", "A", "audio-control"),
    "wcag143": _sc("1.4.3", "Contrast (Minimum)", "AA", "contrast-minimum"),
    "wcag144": _sc("1.4.4", "Resize Text", "AA", "resize-text"),
    "wcag145": _sc("1.4.5", "Images of Text", "AA", "images-of-text"),
    "wcag146": _sc("1.4.6", "Contrast (Enhanced)", "AAA", "contrast-enhanced"),
    "wcag1410": _sc("1.4.10", "Reflow", "AA", "reflow"),
    "wcag1411": _sc("1.4.11", "Non-text Contrast", "AA", "non-text-contrast"),
    "wcag1412": _sc("1.4.12", "Text Spacing", "AA", "text-spacing"),
    "wcag1413": _sc("1.4.13", "Content on Hover or Focus", "AA", "content-on-hover-or-focus"),
    "wcag211": _sc("2.1.1", "Keyboard", "A", "keyboard"),
    "wcag212": _sc("2.1.2", "No Keyboard Trap", "A", "no-keyboard-trap"),
    "wcag241": _sc("2.4.1", "Bypass Blocks", "A", "bypass-blocks"),
    "wcag242": _sc("2.4.2", "Page Titled", "A", "page-titled"),
    "wcag243": _sc("2.4.3", "Focus Order", "A", "focus-order"),
    "wcag244": _sc("2.4.4", "Link Purpose (In Context)", "A", "link-purpose-in-context"),
    "wcag245": _sc("2.4.5", "Multiple Ways", "AA", "multiple-ways"),
    "wcag246": _sc("2.4.6", "Headings and Labels", "AA", "headings-and-labels"),
    "wcag247": _sc("2.4.7", "Focus Visible", "AA", "focus-visible"),
    "wcag251": _sc("2.5.1", "Pointer Gestures", "A", "pointer-gestures"),
    "wcag252": _sc("2.5.2", "Pointer Cancellation", "A", "pointer-cancellation"),
    "wcag253": _sc("2.5.3", "Label in Name", "A", "label-in-name"),
    "wcag311": _sc("3.1.1", "Language of Page", "A", "language-of-page"),
    "wcag312": _sc("3.1.2", "Language of Parts", "AA", "language-of-parts"),
    "wcag321": _sc("3.2.1", "On Focus", "A", "on-focus"),
    "wcag322": _sc("3.2.2", "On Input", "A", "on-input"),
    "wcag323": _sc("3.2.3", "Consistent Navigation", "AA", "consistent-navigation"),
    "wcag324": _sc("3.2.4", "Consistent Identification", "AA", "consistent-identification"),
    "wcag331": _sc("3.3.1", "Error Identification", "A", "error-identification"),
    "wcag332": _sc("3.3.2", "Labels or Instructions", "A", "labels-or-instructions"),
    "wcag333": _sc("3.3.3", "Error Suggestion", "AA", "error-suggestion"),
    "wcag411": _sc("4.1.1", "Parsing", "A", "parsing"),
    "wcag412": _sc("4.1.2", "Name, Role, Value", "A", "name-role-value"),
    "wcag413": _sc("4.1.3", "Status Messages", "AA", "status-messages"),
}


def extract_wcag_criteria(tags: Iterable[str]) -> List[WCAGCriterion]:
    """Known criteria for a violation's tags, in tag order."""
    return [WCAG_CRITERIA[tag] for tag in tags if tag in WCAG_CRITERIA]


def extract_wcag_level(tags: Iterable[str]) -> Optional[str]:
    """
    Overall conformance level implied by a tag set.

    Level markers are checked in a fixed precedence: wcag2aaa, wcag2aa,
    then wcag2a / wcag21a, and finally wcag21aa.
    """
    tags = set(tags)
    if "wcag2aaa" in tags:
        return "AAA"
    if "wcag2aa" in tags:
        return "AA"
    if "wcag2a" in tags or "wcag21a" in tags:
        return "A"
    if "wcag21aa" in tags:
        return "AA"
    return None
