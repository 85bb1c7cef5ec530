"""
Computed Style Lookup

Resolves the handful of computed style values the accessibility checks
read (color, background-color, font-size, font-weight) for elements of a
parsed BeautifulSoup tree.

This is a best-effort cascade, not a browser engine:
- Author rules come from <style> elements, matched with soupsieve
- Stylesheet text is split with patterns, not a full CSS parser
- At-rule blocks (@media, @supports, ...) are skipped
- Dynamic pseudo-classes (:hover, :focus) never match
- Colors are reported in computed rgb()/rgba() form; values with no
  computed form here (var(), color-mix(), ...) are reported as None
- Layout, stacking and opacity are not modelled

Usage:
    from bs4 import BeautifulSoup
    from a11y_scanner.styles import CascadeStyleLookup

    soup = BeautifulSoup(html, 'html.parser')
    styles = CascadeStyleLookup(soup)
    styles.get(soup.find('p'), 'color')   # e.g. 'rgb(0, 0, 0)'
"""

import logging
import re
from typing import Dict, Iterator, List, Optional, Protocol, Tuple

import soupsieve
from bs4 import BeautifulSoup, Tag

from .css_colors import NAMED_COLORS, computed_color


logger = logging.getLogger(__name__)

# (property, value, important)
Declaration = Tuple[str, str, bool]
Specificity = Tuple[int, int, int]

INHERITED_PROPERTIES = {'color', 'font-size', 'font-weight'}

INITIAL_VALUES: Dict[str, str] = {
    'color': 'rgb(0, 0, 0)',
    'background-color': 'rgba(0, 0, 0, 0)',
    'font-size': '16px',
    'font-weight': '400',
}

FONT_SIZE_KEYWORDS: Dict[str, float] = {
    'xx-small': 9.0,
    'x-small': 10.0,
    'small': 13.0,
    'medium': 16.0,
    'large': 18.0,
    'x-large': 24.0,
    'xx-large': 32.0,
    'xxx-large': 48.0,
}

# CSS px per unit
LENGTH_UNITS: Dict[str, float] = {
    'px': 1.0,
    'pt': 96 / 72,
    'pc': 16.0,
    'in': 96.0,
    'cm': 96 / 2.54,
    'mm': 96 / 25.4,
    'q': 96 / 101.6,
}

_COMMENT_RE = re.compile(r'/\*.*?\*/', re.DOTALL)
_IMPORTANT_RE = re.compile(r'!\s*important\s*$', re.IGNORECASE)
_LENGTH_RE = re.compile(r'^(-?\d*\.?\d+)\s*([a-z%]*)$', re.IGNORECASE)
_COLOR_TOKEN_RE = re.compile(r'(?:rgb|hsl)a?\([^)]*\)|#[0-9a-f]+\b|[a-z]+', re.IGNORECASE)
_FUNCTION_RE = re.compile(r'[a-z-]+\([^()]*(?:\([^()]*\)[^()]*)*\)', re.IGNORECASE)


class StyleLookup(Protocol):
    """Anything that can report a computed style value for an element."""

    def get(self, element: Tag, prop: str) -> Optional[str]:
        ...


# =============================================================================
# Stylesheet text handling (best-effort, pattern based)
# =============================================================================

def _split_top_level(text: str, separator: str) -> List[str]:
    """Split on ``separator`` outside parentheses and brackets."""
    parts = []
    depth = 0
    current = []
    for ch in text:
        if ch in '([':
            depth += 1
        elif ch in ')]' and depth > 0:
            depth -= 1
        if ch == separator and depth == 0:
            parts.append(''.join(current))
            current = []
        else:
            current.append(ch)
    parts.append(''.join(current))
    return parts


def parse_declarations(text: Optional[str]) -> List[Declaration]:
    """
    Parse a declaration block (inline style attribute or rule body).

    Args:
        text: Declarations such as "color: red; font-size: 12px !important"

    Returns:
        List of (property, value, important) in source order
    """
    declarations = []
    for chunk in _split_top_level(text or '', ';'):
        prop, sep, value = chunk.partition(':')
        if not sep:
            continue
        prop = prop.strip().lower()
        value = value.strip()
        important = bool(_IMPORTANT_RE.search(value))
        if important:
            value = _IMPORTANT_RE.sub('', value).strip()
        if prop and value:
            declarations.append((prop, value, important))
    return declarations


def _matching_brace(text: str, start: int) -> int:
    depth = 0
    for pos in range(start, len(text)):
        if text[pos] == '{':
            depth += 1
        elif text[pos] == '}':
            depth -= 1
            if depth == 0:
                return pos
    return len(text)


def iter_style_rules(css: Optional[str]) -> Iterator[Tuple[str, List[Declaration]]]:
    """
    Yield (selector_list, declarations) for each style rule in a sheet.

    At-rules are skipped together with any block they own.
    """
    text = _COMMENT_RE.sub('', css or '')
    pos = 0
    while pos < len(text):
        brace = text.find('{', pos)
        if brace == -1:
            break
        prelude = text[pos:brace]
        # statement at-rules such as @import end in ';' before the next rule
        if ';' in prelude:
            prelude = prelude.rsplit(';', 1)[1]
        end = _matching_brace(text, brace)
        body = text[brace + 1:end]
        pos = end + 1

        prelude = prelude.strip()
        if not prelude or prelude.startswith('@'):
            continue
        yield prelude, parse_declarations(body)


def selector_specificity(selector: str) -> Specificity:
    """Approximate (ids, classes, types) specificity of a single selector."""
    attributes = re.findall(r'\[[^\]]*\]', selector)
    stripped = re.sub(r'\[[^\]]*\]', '', selector)
    ids = len(re.findall(r'#[\w-]+', stripped))
    classes = len(re.findall(r'\.[\w-]+', stripped)) + len(attributes)
    pseudo = [
        name for name in re.findall(r'(?<!:):([\w-]+)', stripped)
        if name not in ('not', 'is', 'where')
    ]
    types = len(re.findall(r'(?:^|[\s>+~(])([a-zA-Z][\w-]*)', stripped))
    return ids, classes + len(pseudo), types


# =============================================================================
# Value normalization
# =============================================================================

def background_shorthand_color(value: str) -> str:
    """
    Pull the specified color out of a ``background`` shorthand.

    Function tokens other than the color functions (url(), gradients) are
    dropped first; the shorthand resets the color to transparent when no
    color token remains.
    """
    def keep_color(match):
        token = match.group(0)
        return token if token.lower().startswith(('rgb', 'hsl')) else ' '

    remainder = _FUNCTION_RE.sub(keep_color, value)
    for token in _COLOR_TOKEN_RE.findall(remainder):
        lowered = token.lower()
        if lowered.startswith(('rgb', 'hsl', '#')):
            return token
        if lowered in NAMED_COLORS or lowered in ('transparent', 'currentcolor'):
            return token
    return 'transparent'


def parse_px(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    match = _LENGTH_RE.match(value.strip())
    if not match or match.group(2).lower() != 'px':
        return None
    return float(match.group(1))


def font_size_to_px(value: str, parent_px: float, root_px: float) -> Optional[float]:
    """Convert a specified font-size to CSS pixels, or None if unsupported."""
    lowered = value.strip().lower()
    if lowered in FONT_SIZE_KEYWORDS:
        return FONT_SIZE_KEYWORDS[lowered]
    if lowered == 'smaller':
        return parent_px / 1.2
    if lowered == 'larger':
        return parent_px * 1.2

    match = _LENGTH_RE.match(lowered)
    if not match:
        return None
    number = float(match.group(1))
    unit = match.group(2)
    if number < 0:
        return None
    if unit in LENGTH_UNITS:
        return number * LENGTH_UNITS[unit]
    if unit == 'em':
        return number * parent_px
    if unit == 'rem':
        return number * root_px
    if unit == '%':
        return parent_px * number / 100
    if unit == '' and number == 0:
        return 0.0
    return None


def font_weight_to_number(value: str, parent_weight: int) -> Optional[int]:
    """Convert a specified font-weight to its numeric computed value."""
    lowered = value.strip().lower()
    if lowered == 'normal':
        return 400
    if lowered == 'bold':
        return 700
    if lowered == 'bolder':
        if parent_weight < 350:
            return 400
        if parent_weight < 550:
            return 700
        return 900
    if lowered == 'lighter':
        if parent_weight < 550:
            return 100
        if parent_weight < 750:
            return 400
        return 700
    try:
        weight = float(lowered)
    except ValueError:
        return None
    if not 1 <= weight <= 1000:
        return None
    return int(weight)


def _format_px(px: float) -> str:
    return f"{round(px, 4):g}px"


# =============================================================================
# Cascade
# =============================================================================

class CascadeStyleLookup:
    """
    Computed style lookup over a BeautifulSoup tree.

    Rules from every <style> element under ``root`` are matched once at
    construction. Computed values are memoized per element identity, so a
    lookup must not outlive the tree it was built for. The tree itself is
    never modified.
    """

    def __init__(self, root: Tag):
        self.root = root
        self._matched: Dict[int, List[Tuple[bool, Specificity, int, str, str]]] = {}
        self._computed: Dict[Tuple[int, str], Optional[str]] = {}
        self._rule_count = 0
        self._html = root.find('html')
        self._collect_rules()

    def _collect_rules(self) -> None:
        order = 0
        for style_el in self.root.find_all('style'):
            for selector_list, declarations in iter_style_rules(style_el.get_text()):
                if not declarations:
                    continue
                for selector in _split_top_level(selector_list, ','):
                    selector = selector.strip()
                    if not selector:
                        continue
                    try:
                        matches = soupsieve.select(selector, self.root)
                    except soupsieve.SelectorSyntaxError as e:
                        logger.debug(f"Skipping unsupported selector {selector!r}: {e}")
                        continue
                    specificity = selector_specificity(selector)
                    for element in matches:
                        bucket = self._matched.setdefault(id(element), [])
                        for index, (prop, value, important) in enumerate(declarations):
                            bucket.append((important, specificity, order + index, prop, value))
                    order += len(declarations)
                    self._rule_count += 1
        logger.debug(f"Collected {self._rule_count} style rules")

    def _candidates(self, element: Tag, prop: str) -> List[Tuple[tuple, str]]:
        candidates = []
        for important, specificity, order, name, value in self._matched.get(id(element), ()):
            if name == prop:
                candidates.append(((important, 0, specificity, order), value))
            elif name == 'background' and prop == 'background-color':
                candidates.append(((important, 0, specificity, order),
                                   background_shorthand_color(value)))

        for index, (name, value, important) in enumerate(parse_declarations(element.get('style'))):
            if name == prop:
                candidates.append(((important, 1, (0, 0, 0), index), value))
            elif name == 'background' and prop == 'background-color':
                candidates.append(((important, 1, (0, 0, 0), index),
                                   background_shorthand_color(value)))
        return candidates

    def cascaded_value(self, element: Tag, prop: str) -> Optional[str]:
        """The winning declared value for ``prop``, before inheritance."""
        candidates = self._candidates(element, prop)
        if not candidates:
            return None
        return max(candidates, key=lambda item: item[0])[1]

    def _parent(self, element: Tag) -> Optional[Tag]:
        parent = element.parent
        if parent is None or isinstance(parent, BeautifulSoup):
            return None
        return parent

    def get(self, element: Tag, prop: str) -> Optional[str]:
        """
        Computed value of ``prop`` for ``element``.

        Args:
            element: Element of the tree this lookup was built for
            prop: One of color, background-color, font-size, font-weight

        Returns:
            Computed value string, or None when it cannot be determined
        """
        if prop not in INITIAL_VALUES:
            return None
        key = (id(element), prop)
        if key not in self._computed:
            if prop == 'background-color':
                # currentcolor reads the element's own color
                self.get(element, 'color')

            # outermost uncached ancestor first, so parent lookups hit the cache
            pending = [element]
            for ancestor in element.parents:
                if isinstance(ancestor, BeautifulSoup) or (id(ancestor), prop) in self._computed:
                    break
                pending.append(ancestor)
            for node in reversed(pending):
                self._computed[(id(node), prop)] = self._compute(node, prop)
        return self._computed[key]

    def _compute(self, element: Tag, prop: str) -> Optional[str]:
        parent = self._parent(element)
        inherited = prop in INHERITED_PROPERTIES

        specified = self.cascaded_value(element, prop)
        keyword = specified.strip().lower() if specified is not None else None
        if keyword is None or keyword == 'unset':
            keyword = 'inherit' if inherited else 'initial'

        if keyword == 'inherit':
            if parent is None:
                return INITIAL_VALUES[prop]
            return self.get(parent, prop)
        if keyword == 'initial':
            return INITIAL_VALUES[prop]

        if prop == 'color':
            if keyword == 'currentcolor':
                return self.get(parent, 'color') if parent is not None else INITIAL_VALUES['color']
            return computed_color(specified)

        if prop == 'background-color':
            if keyword == 'currentcolor':
                return self.get(element, 'color')
            return computed_color(specified)

        if prop == 'font-size':
            parent_px = self._parent_font_px(parent)
            if parent_px is None:
                return None
            px = font_size_to_px(specified, parent_px, self._root_font_px(element))
            return _format_px(px) if px is not None else None

        if prop == 'font-weight':
            parent_weight = 400
            if parent is not None:
                parent_value = self.get(parent, 'font-weight')
                if parent_value is None:
                    return None
                parent_weight = int(parent_value)
            weight = font_weight_to_number(specified, parent_weight)
            return str(weight) if weight is not None else None

        return None

    def _parent_font_px(self, parent: Optional[Tag]) -> Optional[float]:
        if parent is None:
            return parse_px(INITIAL_VALUES['font-size'])
        return parse_px(self.get(parent, 'font-size'))

    def _root_font_px(self, element: Tag) -> float:
        html = self._html if element.name != 'html' else None
        if html is not None:
            px = parse_px(self.get(html, 'font-size'))
            if px is not None:
                return px
        return parse_px(INITIAL_VALUES['font-size'])
