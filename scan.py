#!/usr/bin/env python3
"""
Accessibility Scanner - Convenience CLI Script

Scan an HTML file for WCAG 2.1 AA color contrast and focus indicator issues.

Usage:
    python scan.py input.html [options]

Options:
    --axe-results FILE  axe-core results JSON to merge into the report
    -o, --output FILE   Output file for report (default: stdout)
    -f, --format FMT    text or json (default: text)
    --impact LEVEL      Only report this impact
    --level LEVEL       Only report this WCAG level (A, AA, AAA)
    --canvas-color C    Page background behind all layers (default: #ffffff)
    -v, --verbose       Verbose output
    --version           Show version

Examples:
    python scan.py page.html
    python scan.py page.html --axe-results axe.json -f json -o report.json
    python scan.py page.html --impact critical
"""

import sys
from pathlib import Path

# Add package to path if running directly
package_dir = Path(__file__).parent
if str(package_dir) not in sys.path:
    sys.path.insert(0, str(package_dir))

from a11y_scanner.cli import main

if __name__ == '__main__':
    sys.exit(main())
