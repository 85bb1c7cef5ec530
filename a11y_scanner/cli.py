#!/usr/bin/env python3
"""
Accessibility Scanner CLI

Command-line interface for scanning an HTML file for WCAG 2.1 AA issues,
optionally merging in axe-core results produced for the same file.

Usage:
    python -m a11y_scanner page.html [options]
    a11y-scan page.html --axe-results axe.json [options]
"""

import argparse
import logging
import sys
from pathlib import Path

from . import AccessibilityScanner, AuditOptions, __version__
from .rule_engine import AxeResultsEngine, RuleEngineError


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(message)s'
    )


def parse_args(args: list = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog='a11y-scan',
        description='Scan HTML for WCAG 2.1 AA color contrast and focus indicator issues',
        epilog='Example: a11y-scan page.html --axe-results axe.json -f json'
    )

    parser.add_argument(
        'input',
        type=str,
        help='Path to input HTML file'
    )

    parser.add_argument(
        '--axe-results',
        type=str,
        default=None,
        help='axe-core results JSON for the same document, merged into the report'
    )

    parser.add_argument(
        '-o', '--output',
        type=str,
        default=None,
        help='Output file for report (default: stdout)'
    )

    parser.add_argument(
        '-f', '--format',
        choices=['json', 'text'],
        default='text',
        help='Output format (default: text)'
    )

    parser.add_argument(
        '--impact',
        choices=['critical', 'serious', 'moderate', 'minor'],
        default=None,
        help='Only report violations with this impact'
    )

    parser.add_argument(
        '--level',
        choices=['A', 'AA', 'AAA'],
        default=None,
        help='Only report violations at this WCAG level'
    )

    parser.add_argument(
        '--canvas-color',
        type=str,
        default='#ffffff',
        help='Page background assumed behind all layers (default: #ffffff)'
    )

    parser.add_argument(
        '--no-contrast',
        action='store_true',
        help='Skip the local color contrast check'
    )

    parser.add_argument(
        '--no-focus',
        action='store_true',
        help='Skip the local focus indicator check'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser.parse_args(args)


def main(args: list = None) -> int:
    """
    Main entry point for CLI.

    Args:
        args: Command-line arguments (default: sys.argv)

    Returns:
        Exit code (0 no violations, 1 violations found, 2 input error)
    """
    parsed = parse_args(args)
    setup_logging(parsed.verbose)

    logger = logging.getLogger(__name__)

    input_path = Path(parsed.input)
    if not input_path.exists():
        logger.error(f"Input file not found: {input_path}")
        return 2

    if input_path.suffix.lower() not in ('.html', '.htm'):
        logger.warning(f"Input file may not be HTML: {input_path}")

    try:
        options = AuditOptions(
            canvas_color=parsed.canvas_color,
            run_contrast_check=not parsed.no_contrast,
            run_focus_check=not parsed.no_focus,
        )
    except ValueError as e:
        logger.error(str(e))
        return 2

    engine = None
    if parsed.axe_results:
        try:
            engine = AxeResultsEngine.from_file(parsed.axe_results)
        except RuleEngineError as e:
            logger.error(str(e))
            return 2

    scanner = AccessibilityScanner(options=options, engine=engine)

    logger.info(f"Scanning: {input_path}")
    report = scanner.scan_file(input_path)
    violations = report.filter_violations(impact=parsed.impact, level=parsed.level)

    if parsed.format == 'json':
        output = report.to_json(violations)
    else:
        output = report.to_text(violations)

    if parsed.output:
        with open(parsed.output, 'w', encoding='utf-8') as f:
            f.write(output)
        print(f"Report written to: {parsed.output}")
    else:
        print(output)

    return 1 if violations else 0


if __name__ == '__main__':
    sys.exit(main())
