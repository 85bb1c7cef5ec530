"""
Tests for merging external and local findings.
"""

from a11y_scanner.contrast import CONTRAST_RULE_ID
from a11y_scanner.focus import FOCUS_RULE_ID
from a11y_scanner.merge import AXE_CONTRAST_RULE_ID, merge_findings
from a11y_scanner.models import CheckSource, Finding, ImpactLevel, NodeResult


def finding(rule_id, source, impact=ImpactLevel.SERIOUS, help_text="help", target="p"):
    return Finding(
        id=rule_id,
        source=source,
        impact=impact,
        help=help_text,
        description=f"{rule_id} description",
        help_url=f"https://example.com/{rule_id}",
        tags=("wcag2aa",),
        nodes=(NodeResult(target=(target,)),),
    )


class TestMergeFindings:
    """Tests for merge_findings."""

    def test_contrast_overlap_is_merged(self):
        """Test axe color-contrast absorbs the local contrast finding."""
        external = [finding(AXE_CONTRAST_RULE_ID, CheckSource.AXE)]
        local = [
            finding(CONTRAST_RULE_ID, CheckSource.CUSTOM_CONTRAST),
            finding(FOCUS_RULE_ID, CheckSource.CUSTOM_FOCUS),
        ]

        merged = merge_findings(external, local)

        assert [v.id for v in merged] == [AXE_CONTRAST_RULE_ID, FOCUS_RULE_ID]
        assert merged[0].sources == (CheckSource.AXE, CheckSource.CUSTOM_CONTRAST)
        assert merged[1].sources == (CheckSource.CUSTOM_FOCUS,)

    def test_external_content_wins(self):
        """Test the merged violation keeps the external engine's details."""
        external = [finding(AXE_CONTRAST_RULE_ID, CheckSource.AXE,
                            impact=ImpactLevel.MODERATE, help_text="axe help", target="#a")]
        local = [finding(CONTRAST_RULE_ID, CheckSource.CUSTOM_CONTRAST,
                         impact=ImpactLevel.CRITICAL, help_text="local help", target="p")]

        merged = merge_findings(external, local)

        assert len(merged) == 1
        assert merged[0].impact == ImpactLevel.MODERATE
        assert merged[0].help == "axe help"
        assert merged[0].nodes[0].target == ("#a",)

    def test_other_rules_never_merge(self):
        """Test related but distinct rules stay separate."""
        external = [
            finding("focus-order-semantics", CheckSource.AXE),
            finding("image-alt", CheckSource.AXE),
        ]
        local = [finding(FOCUS_RULE_ID, CheckSource.CUSTOM_FOCUS)]

        merged = merge_findings(external, local)

        assert [v.id for v in merged] == ["focus-order-semantics", "image-alt", FOCUS_RULE_ID]
        assert all(len(v.sources) == 1 for v in merged)

    def test_external_contrast_without_local(self):
        """Test axe color-contrast alone keeps only its own source."""
        merged = merge_findings([finding(AXE_CONTRAST_RULE_ID, CheckSource.AXE)], [])
        assert merged[0].sources == (CheckSource.AXE,)

    def test_local_only_keeps_order(self):
        """Test local findings pass through in order."""
        local = [
            finding(CONTRAST_RULE_ID, CheckSource.CUSTOM_CONTRAST),
            finding(FOCUS_RULE_ID, CheckSource.CUSTOM_FOCUS),
        ]
        merged = merge_findings([], local)
        assert [v.id for v in merged] == [CONTRAST_RULE_ID, FOCUS_RULE_ID]
        assert [v.sources for v in merged] == [
            (CheckSource.CUSTOM_CONTRAST,),
            (CheckSource.CUSTOM_FOCUS,),
        ]

    def test_external_order_preserved(self):
        """Test external violations keep the engine's order and come first."""
        external = [
            finding("region", CheckSource.AXE),
            finding(AXE_CONTRAST_RULE_ID, CheckSource.AXE),
            finding("label", CheckSource.AXE),
        ]
        local = [finding(FOCUS_RULE_ID, CheckSource.CUSTOM_FOCUS)]
        merged = merge_findings(external, local)
        assert [v.id for v in merged] == ["region", AXE_CONTRAST_RULE_ID, "label", FOCUS_RULE_ID]

    def test_empty_inputs(self):
        """Test nothing in, nothing out."""
        assert merge_findings([], []) == []

    def test_to_dict_uses_source_values(self):
        """Test serialized sources are plain strings."""
        external = [finding(AXE_CONTRAST_RULE_ID, CheckSource.AXE)]
        local = [finding(CONTRAST_RULE_ID, CheckSource.CUSTOM_CONTRAST)]
        data = merge_findings(external, local)[0].to_dict()
        assert data['sources'] == ["axe", "custom-contrast"]
        assert data['impact'] == "serious"
        assert data['nodes'] == [{'target': ["p"], 'failure_summary': None, 'html': None}]
