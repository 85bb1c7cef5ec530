"""
Finding Merger

Combines axe-core findings with the local checks' findings into one list
of TaggedViolation, so that a defect reported by both sides shows up once
with both sources attached.

The only overlap recognized is axe's "color-contrast" rule against the
local contrast check. Other rule pairs that describe related problems
(for example focus visibility) are kept as separate violations.
"""

from typing import Iterable, List, Set

from .contrast import CONTRAST_RULE_ID
from .models import Finding, TaggedViolation


AXE_CONTRAST_RULE_ID = "color-contrast"

# external rule id -> local rule id reporting the same defect
EQUIVALENT_RULES = {
    AXE_CONTRAST_RULE_ID: CONTRAST_RULE_ID,
}


def merge_findings(external: Iterable[Finding],
                   local: Iterable[Finding]) -> List[TaggedViolation]:
    """
    Merge external engine findings with local findings.

    External violations come first in their original order and keep their
    own content; a matching local finding only adds its source tag. Local
    findings that were not absorbed follow in the order given.

    Args:
        external: Findings from the external rule engine
        local: Findings from the local checks

    Returns:
        List of TaggedViolation, one per distinct defect
    """
    local = list(local)
    local_by_id = {finding.id: finding for finding in local}
    absorbed: Set[str] = set()
    violations: List[TaggedViolation] = []

    for finding in external:
        sources = [finding.source]
        local_id = EQUIVALENT_RULES.get(finding.id)
        if local_id is not None and local_id in local_by_id:
            local_source = local_by_id[local_id].source
            if local_source not in sources:
                sources.append(local_source)
            absorbed.add(local_id)
        violations.append(TaggedViolation.from_finding(finding, tuple(sources)))

    for finding in local:
        if finding.id in absorbed:
            continue
        violations.append(TaggedViolation.from_finding(finding, (finding.source,)))

    return violations
