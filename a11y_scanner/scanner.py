"""
Accessibility Scanner

Audits an HTML document fragment with the external rule engine (axe-core)
and the local contrast and focus checks, then merges everything into one
source-attributed violation list.

Features:
- Color contrast with translucent background compositing (1.4.3)
- Focus indicator suppression in inline styles and :focus rules (2.4.7)
- axe-core results merged without double-counting color contrast
- Severity counts, filtering by impact or WCAG level, grouping by criterion
- JSON and text reports

Usage:
    from a11y_scanner.scanner import AccessibilityScanner
    from a11y_scanner.rule_engine import AxeResultsEngine

    scanner = AccessibilityScanner(engine=AxeResultsEngine.from_file("axe.json"))
    report = scanner.scan_sync(html)
    print(report.to_text())
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from bs4 import BeautifulSoup, Tag

from .custom_checks import run_custom_checks
from .merge import merge_findings
from .models import CheckSource, Finding, ImpactLevel, TaggedViolation
from .options import AuditOptions
from .rule_engine import AxeResultsEngine, NullRuleEngine, RuleEngine
from .styles import CascadeStyleLookup
from .wcag_mapping import extract_wcag_criteria, extract_wcag_level


logger = logging.getLogger(__name__)

SEVERITY_ORDER = {
    ImpactLevel.CRITICAL: 0,
    ImpactLevel.SERIOUS: 1,
    ImpactLevel.MODERATE: 2,
    ImpactLevel.MINOR: 3,
}


def severity_order(impact: Union[ImpactLevel, str, None]) -> int:
    """Sort key for impacts: critical first, unknown last."""
    if isinstance(impact, str):
        try:
            impact = ImpactLevel(impact)
        except ValueError:
            return len(SEVERITY_ORDER)
    return SEVERITY_ORDER.get(impact, len(SEVERITY_ORDER))


def count_violations(violations: List[TaggedViolation]) -> Dict[str, Any]:
    """Totals by severity and by detector for a list of violations."""
    counts: Dict[str, Any] = {
        'total_violations': len(violations),
        'critical_count': 0,
        'serious_count': 0,
        'moderate_count': 0,
        'minor_count': 0,
    }

    # Count by severity
    for violation in violations:
        if violation.impact == ImpactLevel.CRITICAL:
            counts['critical_count'] += 1
        elif violation.impact == ImpactLevel.SERIOUS:
            counts['serious_count'] += 1
        elif violation.impact == ImpactLevel.MODERATE:
            counts['moderate_count'] += 1
        else:
            counts['minor_count'] += 1

    # Count by detector
    counts['source_counts'] = {
        source.value: sum(1 for v in violations if source in v.sources)
        for source in CheckSource
    }
    return counts


@dataclass
class ScanReport:
    """Merged accessibility scan results for one document"""
    url: str
    timestamp: str
    violations: List[TaggedViolation] = field(default_factory=list)
    critical_count: int = 0
    serious_count: int = 0
    moderate_count: int = 0
    minor_count: int = 0
    source_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def total_violations(self) -> int:
        return len(self.violations)

    def filter_violations(self, impact: Optional[Union[ImpactLevel, str]] = None,
                          level: Optional[str] = None) -> List[TaggedViolation]:
        """
        Violations matching an impact and/or WCAG level, most severe first.

        Args:
            impact: Keep only this impact (None keeps all)
            level: Keep only violations whose tags imply this level

        Returns:
            Filtered violations, stably sorted by severity
        """
        if isinstance(impact, str):
            impact = ImpactLevel(impact)

        selected = [
            v for v in self.violations
            if (impact is None or v.impact == impact)
            and (level is None or extract_wcag_level(v.tags) == level)
        ]
        return sorted(selected, key=lambda v: severity_order(v.impact))

    def group_by_criterion(self, violations: Optional[List[TaggedViolation]] = None
                           ) -> Dict[str, List[TaggedViolation]]:
        """Group violations under "<id> <name>" keys; unmapped ones go to "Other"."""
        if violations is None:
            violations = self.filter_violations()

        groups: Dict[str, List[TaggedViolation]] = {}
        for violation in violations:
            criteria = extract_wcag_criteria(violation.tags)
            if not criteria:
                groups.setdefault("Other", []).append(violation)
                continue
            for criterion in criteria:
                groups.setdefault(f"{criterion.id} {criterion.name}", []).append(violation)
        return dict(sorted(groups.items()))

    def to_dict(self, violations: Optional[List[TaggedViolation]] = None) -> Dict[str, Any]:
        """Report as a dict; counts describe the violations included."""
        if violations is None:
            violations = self.violations
        data: Dict[str, Any] = {
            'url': self.url,
            'timestamp': self.timestamp,
        }
        data.update(count_violations(violations))
        data['violations'] = [v.to_dict() for v in violations]
        return data

    def to_json(self, violations: Optional[List[TaggedViolation]] = None) -> str:
        """Export report as JSON"""
        return json.dumps(self.to_dict(violations), indent=2)

    def to_text(self, violations: Optional[List[TaggedViolation]] = None) -> str:
        """Generate human-readable report"""
        if violations is None:
            violations = self.filter_violations()
        counts = count_violations(violations)

        lines = [
            "=" * 70,
            "ACCESSIBILITY SCAN REPORT",
            "=" * 70,
            f"URL: {self.url}",
            f"Timestamp: {self.timestamp}",
            "-" * 70,
            f"Violations: {counts['total_violations']}",
            f"  Critical: {counts['critical_count']}",
            f"  Serious: {counts['serious_count']}",
            f"  Moderate: {counts['moderate_count']}",
            f"  Minor: {counts['minor_count']}",
            "=" * 70,
        ]

        if violations:
            lines.append("\nVIOLATIONS:\n")
            for i, violation in enumerate(violations, 1):
                sources = ", ".join(s.value for s in violation.sources)
                lines.extend([
                    f"{i}. [{violation.impact.value.upper()}] {violation.help}",
                    f"   Rule: {violation.id} (found by: {sources})",
                ])
                criteria = extract_wcag_criteria(violation.tags)
                if criteria:
                    wcag = ", ".join(f"{c.id} {c.name} (Level {c.level})" for c in criteria)
                    lines.append(f"   WCAG: {wcag}")
                for node in violation.nodes:
                    lines.append(f"   - {' '.join(node.target)}")
                    if node.failure_summary:
                        lines.append(f"     {node.failure_summary}")
                if violation.help_url:
                    lines.append(f"   More info: {violation.help_url}")
                lines.append("")

        return "\n".join(lines)


class AccessibilityScanner:
    """
    Scans HTML with the external rule engine plus the local checks.

    Each scan parses its own tree and builds its own style lookup, so
    nothing is shared between scans.
    """

    def __init__(self, options: Optional[AuditOptions] = None,
                 engine: Optional[RuleEngine] = None):
        """
        Initialize the scanner.

        Args:
            options: Local check configuration (defaults if omitted)
            engine: External rule engine; NullRuleEngine if omitted
        """
        self.options = options or AuditOptions()
        self.engine = engine if engine is not None else NullRuleEngine()

    def run_custom_checks(self, root: Tag) -> List[Finding]:
        """Run the local checks synchronously against a parsed tree."""
        return run_custom_checks(root, CascadeStyleLookup(root), self.options)

    async def scan(self, html: str, url: str = "inline") -> ScanReport:
        """
        Scan an HTML document or fragment.

        Args:
            html: HTML content string
            url: Where the content came from, for reporting

        Returns:
            ScanReport with merged violations
        """
        soup = BeautifulSoup(html, 'html.parser')

        local = self.run_custom_checks(soup)
        external = await self.engine.run(soup)
        logger.info(f"Scanned {url}: {len(external)} engine findings, {len(local)} local findings")

        return self._generate_report(url, merge_findings(external, local))

    def scan_sync(self, html: str, url: str = "inline") -> ScanReport:
        """Blocking wrapper around ``scan``."""
        return asyncio.run(self.scan(html, url))

    def scan_file(self, file_path: Union[str, Path]) -> ScanReport:
        """
        Scan an HTML file.

        Args:
            file_path: Path to HTML file

        Returns:
            ScanReport with merged violations
        """
        file_path = Path(file_path)

        with open(file_path, 'r', encoding='utf-8') as f:
            content = f.read()

        return self.scan_sync(content, str(file_path))

    def _generate_report(self, url: str, violations: List[TaggedViolation]) -> ScanReport:
        """Generate scan report from merged violations"""
        report = ScanReport(
            url=url,
            timestamp=datetime.now().isoformat(),
            violations=violations,
        )

        counts = count_violations(violations)
        report.critical_count = counts['critical_count']
        report.serious_count = counts['serious_count']
        report.moderate_count = counts['moderate_count']
        report.minor_count = counts['minor_count']
        report.source_counts = counts['source_counts']

        return report


def scan_html(html: str, axe_results: Any = None,
              options: Optional[AuditOptions] = None) -> ScanReport:
    """
    Convenience function to scan HTML.

    Args:
        html: HTML content string
        axe_results: Optional axe-core results document for the same HTML
        options: Local check configuration

    Returns:
        ScanReport with merged violations
    """
    engine = AxeResultsEngine(axe_results) if axe_results is not None else None
    scanner = AccessibilityScanner(options=options, engine=engine)
    return scanner.scan_sync(html)


def scan_html_file(file_path: Union[str, Path], axe_results_path: Optional[str] = None,
                   options: Optional[AuditOptions] = None) -> ScanReport:
    """
    Convenience function to scan an HTML file.

    Args:
        file_path: Path to HTML file
        axe_results_path: Optional axe-core results JSON for the same file
        options: Local check configuration

    Returns:
        ScanReport with merged violations
    """
    engine = AxeResultsEngine.from_file(axe_results_path) if axe_results_path else None
    scanner = AccessibilityScanner(options=options, engine=engine)
    return scanner.scan_file(file_path)
