"""
Accessibility Scanner

Audits HTML documents for WCAG 2.1 AA accessibility problems and merges
axe-core results with its own checks into one de-duplicated, source
attributed violation list.

Features:
- Color contrast check over composited translucent backgrounds (1.4.3)
  - Large text exception (24px, or 18.66px bold)
  - Effective background resolved through the ancestor chain
- Focus indicator check for suppressed outlines (2.4.7)
  - Inline styles of focusable elements
  - :focus rules in <style> blocks
- Merging with axe-core results
  - axe "color-contrast" and the local contrast check reported once
  - Every violation tagged with the detectors that found it
- Reports as text or JSON, filterable by impact and WCAG level

Workflow:
1. Optionally run axe-core on the page and save its results as JSON
2. Run: python scan.py page.html --axe-results axe.json
3. Review the merged report
"""

from .color import (
    Color,
    parse_color,
    relative_luminance,
    contrast_ratio,
    blend_over,
)

from .models import (
    ImpactLevel,
    CheckSource,
    NodeResult,
    Finding,
    TaggedViolation,
    css_selector,
)

from .options import AuditOptions

from .styles import (
    StyleLookup,
    CascadeStyleLookup,
)

from .css_colors import computed_color
from .background import effective_background

from .contrast import run_contrast_check, CONTRAST_RULE_ID
from .focus import run_focus_indicator_check, FOCUS_RULE_ID
from .custom_checks import run_custom_checks

from .merge import merge_findings, AXE_CONTRAST_RULE_ID

from .rule_engine import (
    RuleEngine,
    RuleEngineError,
    AxeResultsEngine,
    NullRuleEngine,
    findings_from_axe_results,
)

from .wcag_mapping import (
    WCAGCriterion,
    extract_wcag_criteria,
    extract_wcag_level,
)

from .scanner import (
    AccessibilityScanner,
    ScanReport,
    severity_order,
    count_violations,
    scan_html,
    scan_html_file,
)

__version__ = '1.0.0'
__all__ = [
    # Color model
    'Color',
    'parse_color',
    'relative_luminance',
    'contrast_ratio',
    'blend_over',
    # Findings
    'ImpactLevel',
    'CheckSource',
    'NodeResult',
    'Finding',
    'TaggedViolation',
    'css_selector',
    # Configuration
    'AuditOptions',
    # Styles
    'StyleLookup',
    'CascadeStyleLookup',
    'computed_color',
    'effective_background',
    # Local checks
    'run_contrast_check',
    'run_focus_indicator_check',
    'run_custom_checks',
    'CONTRAST_RULE_ID',
    'FOCUS_RULE_ID',
    # Merging
    'merge_findings',
    'AXE_CONTRAST_RULE_ID',
    # External rule engine
    'RuleEngine',
    'RuleEngineError',
    'AxeResultsEngine',
    'NullRuleEngine',
    'findings_from_axe_results',
    # WCAG lookup
    'WCAGCriterion',
    'extract_wcag_criteria',
    'extract_wcag_level',
    # Scanning
    'AccessibilityScanner',
    'ScanReport',
    'severity_order',
    'count_violations',
    'scan_html',
    'scan_html_file',
]
