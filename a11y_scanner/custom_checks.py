"""Runs the local contrast and focus checks that supplement axe-core."""

import logging
from typing import List, Optional

from bs4 import Tag

from .contrast import run_contrast_check
from .focus import run_focus_indicator_check
from .models import Finding
from .options import AuditOptions
from .styles import CascadeStyleLookup, StyleLookup


logger = logging.getLogger(__name__)


def run_custom_checks(root: Tag, styles: Optional[StyleLookup] = None,
                      options: Optional[AuditOptions] = None) -> List[Finding]:
    """
    Run every enabled local check against ``root``.

    Findings come back in a fixed order: contrast first, then focus.
    """
    options = options or AuditOptions()
    styles = styles if styles is not None else CascadeStyleLookup(root)

    findings: List[Finding] = []
    if options.run_contrast_check:
        findings.extend(run_contrast_check(root, styles, options))
    if options.run_focus_check:
        findings.extend(run_focus_indicator_check(root, styles, options))

    logger.debug(f"Local checks produced {len(findings)} findings")
    return findings
