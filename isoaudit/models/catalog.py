"""Question catalog model for one ISO standard."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from isoaudit.models.question import (
    EvidenceGuidance,
    IsoStandard,
    NonConformanceExamples,
    Question,
)
from isoaudit.models.scope import AuditTemplate, IsoSection


@dataclass
class DefaultGuidance:
    """Guidance applied to questions that ship without their own."""

    evidence_guidance: EvidenceGuidance | None = None
    non_conformance_examples: NonConformanceExamples | None = None
    audit_tips: list[str] = field(default_factory=list)

    def apply(self, question: Question) -> Question:
        """Fill in whichever guidance fields the question is missing."""
        if question.has_guidance:
            return question
        return replace(
            question,
            evidence_guidance=question.evidence_guidance or self.evidence_guidance,
            non_conformance_examples=(
                question.non_conformance_examples or self.non_conformance_examples
            ),
            audit_tips=question.audit_tips or list(self.audit_tips),
        )


@dataclass
class QuestionCatalog:
    """The static questionnaire of an ISO standard.

    Examples:
    - ISO 9001:2015 Quality Management Systems
    - ISO 45001:2018 Occupational Health and Safety Management Systems
    """

    id: IsoStandard
    name: str  # e.g., "ISO 9001:2015"
    version: str  # e.g., "2015"
    questions: list[Question]  # Flat, in catalog order
    sections: list[IsoSection] = field(default_factory=list)
    templates: list[AuditTemplate] = field(default_factory=list)
    full_name: str = ""
    description: str = ""
    default_guidance: DefaultGuidance | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def build_hierarchy(self) -> list[Question]:
        """Questions nested under their parents, ready for an audit."""
        from isoaudit.engine import build_question_hierarchy

        return build_question_hierarchy(self.questions)

    def get_question(self, question_id: str) -> Question | None:
        for q in self.questions:
            if q.id == question_id:
                return q
        return None

    def get_section(self, section_id: str) -> IsoSection | None:
        """Get a section by id (e.g., "section-8")."""
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    def get_template(self, template_id: str) -> AuditTemplate | None:
        for template in self.templates:
            if template.id == template_id:
                return template
        return None

    def section_ids(self) -> list[str]:
        return [s.id for s in self.sections]
