"""
Tests for the accessibility scanner and its report.
"""

import json

import pytest
from a11y_scanner import (
    AccessibilityScanner,
    AuditOptions,
    CheckSource,
    ImpactLevel,
    ScanReport,
    scan_html,
    scan_html_file,
)
from a11y_scanner.rule_engine import AxeResultsEngine
from a11y_scanner.scanner import severity_order


PAGE = """
<html>
<head>
<style>
    .muted { color: #999999; }
    a:focus { outline: none; }
</style>
</head>
<body>
    <h1>Welcome</h1>
    <p class="muted">Low contrast text</p>
    <a href="/next">Next</a>
</body>
</html>
"""

AXE_RESULTS = {
    "violations": [
        {
            "id": "color-contrast",
            "impact": "serious",
            "help": "Elements must meet minimum color contrast ratio thresholds",
            "description": "Ensures the contrast between foreground and background colors meets WCAG 2 AA",
            "helpUrl": "https://dequeuniversity.com/rules/axe/4.8/color-contrast",
            "tags": ["cat.color", "wcag2aa", "wcag143"],
            "nodes": [{"target": [".muted"], "failureSummary": "Fix any of the following"}],
        },
        {
            "id": "image-alt",
            "impact": "critical",
            "help": "Images must have alternate text",
            "description": "Ensures <img> elements have alternate text",
            "helpUrl": "https://dequeuniversity.com/rules/axe/4.8/image-alt",
            "tags": ["cat.text-alternatives", "wcag2a", "wcag111"],
            "nodes": [{"target": ["img"]}],
        },
        {
            "id": "region",
            "impact": "moderate",
            "help": "All page content should be contained by landmarks",
            "description": "Ensures all page content is contained by landmarks",
            "helpUrl": "https://dequeuniversity.com/rules/axe/4.8/region",
            "tags": ["cat.keyboard", "best-practice"],
            "nodes": [],
        },
    ],
}


class TestSeverityOrder:
    """Tests for severity_order."""

    def test_order(self):
        """Test critical sorts first and unknown last."""
        assert severity_order(ImpactLevel.CRITICAL) < severity_order("serious")
        assert severity_order("minor") < severity_order("bogus")
        assert severity_order(None) == 4


class TestAccessibilityScanner:
    """Tests for AccessibilityScanner."""

    def test_local_checks_only(self):
        """Test a scan without an engine reports local findings."""
        report = scan_html(PAGE)

        assert [v.id for v in report.violations] == [
            "custom-color-contrast",
            "custom-focus-indicator",
        ]
        assert report.total_violations == 2
        assert report.serious_count == 2
        assert report.source_counts == {
            'axe': 0,
            'custom-contrast': 1,
            'custom-focus': 1,
        }

    def test_merges_engine_results(self):
        """Test axe color-contrast absorbs the local contrast finding."""
        report = scan_html(PAGE, axe_results=AXE_RESULTS)

        assert [v.id for v in report.violations] == [
            "color-contrast",
            "image-alt",
            "region",
            "custom-focus-indicator",
        ]
        assert report.violations[0].sources == (CheckSource.AXE, CheckSource.CUSTOM_CONTRAST)
        assert report.critical_count == 1
        assert report.serious_count == 2
        assert report.moderate_count == 1
        assert report.minor_count == 0
        assert report.source_counts == {
            'axe': 3,
            'custom-contrast': 1,
            'custom-focus': 1,
        }

    def test_clean_page(self):
        """Test a page with no issues yields an empty report."""
        report = scan_html("<main><p>Plain text</p><button>Go</button></main>")
        assert report.violations == []
        assert report.total_violations == 0
        assert report.url == "inline"

    def test_disabled_checks(self):
        """Test options can switch local checks off."""
        options = AuditOptions(run_contrast_check=False)
        report = scan_html(PAGE, options=options)
        assert [v.id for v in report.violations] == ["custom-focus-indicator"]

        options = AuditOptions(run_contrast_check=False, run_focus_check=False)
        assert scan_html(PAGE, options=options).violations == []

    def test_scan_is_repeatable(self):
        """Test two scans of the same content produce identical violations."""
        scanner = AccessibilityScanner(engine=AxeResultsEngine(AXE_RESULTS))
        first = scanner.scan_sync(PAGE)
        second = scanner.scan_sync(PAGE)
        assert first.violations == second.violations

    def test_scan_file(self, tmp_path):
        """Test scanning from disk with an axe results file."""
        page = tmp_path / "page.html"
        page.write_text(PAGE, encoding='utf-8')
        results = tmp_path / "axe.json"
        results.write_text(json.dumps(AXE_RESULTS), encoding='utf-8')

        report = scan_html_file(page, str(results))

        assert report.url == str(page)
        assert report.total_violations == 4

    def test_scan_missing_file(self, tmp_path):
        """Test a missing HTML file raises."""
        with pytest.raises(FileNotFoundError):
            AccessibilityScanner().scan_file(tmp_path / "missing.html")


class TestScanReport:
    """Tests for ScanReport presentation helpers."""

    @pytest.fixture
    def report(self):
        return scan_html(PAGE, axe_results=AXE_RESULTS)

    def test_filter_by_impact(self, report):
        """Test filtering by impact accepts enum or string."""
        assert [v.id for v in report.filter_violations(impact="critical")] == ["image-alt"]
        serious = report.filter_violations(impact=ImpactLevel.SERIOUS)
        assert [v.id for v in serious] == ["color-contrast", "custom-focus-indicator"]

    def test_filter_sorts_by_severity(self, report):
        """Test unfiltered violations come back most severe first."""
        ids = [v.id for v in report.filter_violations()]
        assert ids == ["image-alt", "color-contrast", "custom-focus-indicator", "region"]

    def test_filter_by_level(self, report):
        """Test filtering by WCAG level."""
        assert [v.id for v in report.filter_violations(level="A")] == ["image-alt"]
        assert [v.id for v in report.filter_violations(level="AA")] == [
            "color-contrast",
            "custom-focus-indicator",
        ]
        assert report.filter_violations(level="AAA") == []

    def test_group_by_criterion(self, report):
        """Test grouping under criterion names with an Other bucket."""
        groups = report.group_by_criterion()
        assert list(groups) == [
            "1.1.1 Non-text Content",
            "1.4.3 Contrast (Minimum)",
            "2.4.7 Focus Visible",
            "Other",
        ]
        assert [v.id for v in groups["Other"]] == ["region"]

    def test_to_json(self, report):
        """Test the JSON export."""
        data = json.loads(report.to_json())
        assert data['total_violations'] == 4
        assert data['source_counts']['axe'] == 3
        assert data['violations'][0]['sources'] == ["axe", "custom-contrast"]
        assert data['violations'][3]['nodes'][0]['target'] == ["a:focus"]

    def test_to_json_with_subset(self, report):
        """Test counts in an exported subset describe that subset."""
        data = json.loads(report.to_json(report.filter_violations(impact="critical")))
        assert [v['id'] for v in data['violations']] == ["image-alt"]
        assert data['total_violations'] == 1
        assert data['critical_count'] == 1
        assert data['serious_count'] == 0
        assert data['moderate_count'] == 0
        assert data['source_counts'] == {'axe': 1, 'custom-contrast': 0, 'custom-focus': 0}

    def test_to_text_with_subset(self, report):
        """Test the text header counts only the violations listed."""
        text = report.to_text(report.filter_violations(impact="serious"))
        assert "Violations: 2" in text
        assert "  Critical: 0" in text
        assert "  Serious: 2" in text
        assert "image-alt" not in text

    def test_full_report_counts_unchanged_by_subset(self, report):
        """Test exporting a subset leaves the report's own counts alone."""
        report.to_json(report.filter_violations(impact="critical"))
        assert report.total_violations == 4
        assert report.serious_count == 2

    def test_to_text(self, report):
        """Test the human readable report."""
        text = report.to_text()
        assert "ACCESSIBILITY SCAN REPORT" in text
        assert "Violations: 4" in text
        assert "[CRITICAL] Images must have alternate text" in text
        assert "Rule: color-contrast (found by: axe, custom-contrast)" in text
        assert "WCAG: 1.4.3 Contrast (Minimum) (Level AA)" in text
        assert "   - a:focus" in text
        assert text.index("image-alt") < text.index("custom-focus-indicator")

    def test_empty_report_text(self):
        """Test an empty report still renders a header."""
        report = ScanReport(url="x.html", timestamp="2024-01-01T00:00:00")
        text = report.to_text()
        assert "Violations: 0" in text
        assert "VIOLATIONS:" not in text
