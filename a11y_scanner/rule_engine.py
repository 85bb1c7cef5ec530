"""
External Rule Engine Adapter

The external WCAG rule engine (axe-core) is a black box: this module only
knows the shape of its results. Results are replayed from a JSON document
such as the one written by `axe --save` or `JSON.stringify(await axe.run())`.

Usage:
    from a11y_scanner.rule_engine import AxeResultsEngine

    engine = AxeResultsEngine.from_file("axe-results.json")
    findings = await engine.run(soup)
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Protocol, Tuple, Union

from bs4 import Tag

from .models import CheckSource, Finding, ImpactLevel, NodeResult


logger = logging.getLogger(__name__)

# axe-core renders shadow DOM / iframe paths as nested selector lists
NESTED_TARGET_SEPARATOR = " >>> "


class RuleEngineError(Exception):
    """Raised when rule engine output cannot be used."""


class RuleEngine(Protocol):
    """An external engine producing findings for a tree."""
    source: CheckSource

    async def run(self, root: Tag) -> List[Finding]:
        ...


def _impact(value: Any) -> ImpactLevel:
    try:
        return ImpactLevel(value)
    except ValueError:
        return ImpactLevel.MINOR


def _target(segments: Any) -> Tuple[str, ...]:
    if isinstance(segments, str):
        return (segments,)
    target = []
    for segment in segments or []:
        if isinstance(segment, (list, tuple)):
            target.append(NESTED_TARGET_SEPARATOR.join(str(s) for s in segment))
        else:
            target.append(str(segment))
    return tuple(target)


def _violation_records(data: Any) -> Iterable[Mapping[str, Any]]:
    if isinstance(data, Mapping):
        violations = data.get('violations')
        if not isinstance(violations, list):
            raise RuleEngineError("Results document has no 'violations' list")
        return violations
    if isinstance(data, list):
        # axe CLI saves one results document per scanned page
        if all(isinstance(item, Mapping) and 'violations' in item for item in data):
            records = []
            for item in data:
                records.extend(_violation_records(item))
            return records
        return data
    raise RuleEngineError(f"Unsupported results type: {type(data).__name__}")


def findings_from_axe_results(data: Any) -> List[Finding]:
    """
    Convert axe-core results into Findings.

    Args:
        data: A results mapping with a "violations" list, a bare list of
            violation records, or a list of results mappings

    Returns:
        One Finding per violation, in the engine's order

    Raises:
        RuleEngineError: If the document does not have the expected shape
    """
    findings = []
    for record in _violation_records(data):
        if not isinstance(record, Mapping) or not record.get('id'):
            raise RuleEngineError(f"Violation record without an id: {record!r}")

        nodes = []
        for node in record.get('nodes') or []:
            if not isinstance(node, Mapping):
                raise RuleEngineError(f"Malformed node in violation {record['id']!r}")
            nodes.append(NodeResult(
                target=_target(node.get('target')),
                failure_summary=node.get('failureSummary'),
                html=node.get('html'),
            ))

        findings.append(Finding(
            id=str(record['id']),
            source=CheckSource.AXE,
            impact=_impact(record.get('impact')),
            help=record.get('help') or '',
            description=record.get('description') or '',
            help_url=record.get('helpUrl') or '',
            tags=tuple(record.get('tags') or ()),
            nodes=tuple(nodes),
        ))
    return findings


class AxeResultsEngine:
    """
    Replays pre-computed axe-core results as the engine's output.

    The tree passed to ``run`` is not inspected; the caller is responsible
    for pairing results with the document they were produced from.
    """
    source = CheckSource.AXE

    def __init__(self, results: Any):
        self.findings = findings_from_axe_results(results)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "AxeResultsEngine":
        """
        Load axe-core results from a JSON file.

        Raises:
            RuleEngineError: If the file cannot be read or parsed
        """
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise RuleEngineError(f"Cannot load axe results from {path}: {e}") from e

        engine = cls(data)
        logger.info(f"Loaded {len(engine.findings)} axe violations from {path}")
        return engine

    async def run(self, root: Tag) -> List[Finding]:
        return list(self.findings)


class NullRuleEngine:
    """Engine stand-in that reports nothing."""
    source = CheckSource.AXE

    async def run(self, root: Tag) -> List[Finding]:
        return []
