"""
Finding Data Model

Value types shared by the local checks, the external rule engine adapter
and the merger. Everything here is immutable and scoped to a single scan.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from bs4 import Tag


class ImpactLevel(Enum):
    """Severity levels, most to least severe"""
    CRITICAL = "critical"
    SERIOUS = "serious"
    MODERATE = "moderate"
    MINOR = "minor"


class CheckSource(Enum):
    """Detector that produced a finding"""
    AXE = "axe"
    CUSTOM_CONTRAST = "custom-contrast"
    CUSTOM_FOCUS = "custom-focus"


@dataclass(frozen=True)
class NodeResult:
    """One affected node of a finding"""
    target: Tuple[str, ...]
    failure_summary: Optional[str] = None
    html: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'target': list(self.target),
            'failure_summary': self.failure_summary,
            'html': self.html,
        }


@dataclass(frozen=True)
class Finding:
    """A rule violation reported by a single detector"""
    id: str
    source: CheckSource
    impact: ImpactLevel
    help: str
    description: str
    help_url: str
    tags: Tuple[str, ...] = ()
    nodes: Tuple[NodeResult, ...] = ()


@dataclass(frozen=True)
class TaggedViolation:
    """A merged violation annotated with every detector that reported it"""
    id: str
    sources: Tuple[CheckSource, ...]
    impact: ImpactLevel
    help: str
    description: str
    help_url: str
    tags: Tuple[str, ...] = ()
    nodes: Tuple[NodeResult, ...] = field(default_factory=tuple)

    @classmethod
    def from_finding(cls, finding: Finding,
                     sources: Tuple[CheckSource, ...]) -> "TaggedViolation":
        return cls(
            id=finding.id,
            sources=sources,
            impact=finding.impact,
            help=finding.help,
            description=finding.description,
            help_url=finding.help_url,
            tags=finding.tags,
            nodes=finding.nodes,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'sources': [s.value for s in self.sources],
            'impact': self.impact.value,
            'help': self.help,
            'description': self.description,
            'help_url': self.help_url,
            'tags': list(self.tags),
            'nodes': [n.to_dict() for n in self.nodes],
        }


def css_selector(element: Tag) -> str:
    """
    Short selector used to identify an element in findings.

    Built from the tag name, the id and at most the first two classes. It
    is an approximate identity: distinct elements sharing tag, id and
    leading classes collapse onto the same key, and the checks deduplicate
    on it.
    """
    tag = element.name.lower()
    element_id = element.get('id')
    id_part = f"#{element_id}" if element_id else ""

    classes = element.get('class') or []
    if isinstance(classes, str):
        classes = classes.split()
    class_part = "." + ".".join(classes[:2]) if classes else ""

    return f"{tag}{id_part}{class_part}"
