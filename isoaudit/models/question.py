"""Question models for ISO audit questionnaires."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RiskLevel(str, Enum):
    """Risk level attached to a question or ISO section."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class IsoStandard(str, Enum):
    """Supported management system standards."""

    ISO9001 = "ISO9001"
    ISO45001 = "ISO45001"


def section_id_for_clause(clause: str) -> str:
    """Derive the section id from a dotted clause ("8.5" -> "section-8").

    A clause without a "." maps to the whole string.
    """
    return f"section-{clause.split('.')[0]}"


def section_sort_key(section_id: str) -> tuple[int, int | str]:
    """Sort key ordering "section-4" before "section-10"."""
    number = section_id.removeprefix("section-")
    if number.isdigit():
        return (0, int(number))
    return (1, number)


@dataclass
class EvidenceGuidance:
    """Where an auditor should look for evidence."""

    documents: list[str] = field(default_factory=list)
    interviews: list[str] = field(default_factory=list)
    observations: list[str] = field(default_factory=list)
    records: list[str] = field(default_factory=list)


@dataclass
class NonConformanceExample:
    """Illustration of a non-conformance at one grade."""

    description: str
    impact: str
    example: str


@dataclass
class NonConformanceExamples:
    """Examples for the three non-conformance grades."""

    minor: NonConformanceExample
    major: NonConformanceExample
    critical: NonConformanceExample


@dataclass
class Question:
    """A single auditable requirement.

    Parents group the detailed child questions of a clause. Children carry
    ``parent_id`` and are nested under their parent by
    :func:`isoaudit.engine.build_question_hierarchy`.
    """

    id: str  # e.g., "iso45001-q4-1"
    clause: str  # e.g., "4.1"
    text: str
    category: str  # e.g., "Context of Organization"
    risk_level: RiskLevel
    iso_standard: IsoStandard = IsoStandard.ISO9001
    is_parent: bool = False
    parent_id: str | None = None  # Set on children only
    children: list[Question] = field(default_factory=list)
    industry_context: str | None = None
    evidence_guidance: EvidenceGuidance | None = None
    non_conformance_examples: NonConformanceExamples | None = None
    audit_tips: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def section_id(self) -> str:
        """Section this question belongs to, derived from its clause."""
        return section_id_for_clause(self.clause)

    @property
    def has_guidance(self) -> bool:
        """Check if evidence guidance, examples and tips are all present."""
        return bool(
            self.evidence_guidance and self.non_conformance_examples and self.audit_tips
        )
