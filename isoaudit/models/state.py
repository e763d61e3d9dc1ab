"""Working state of a single audit."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from isoaudit.models.finding import Finding
from isoaudit.models.question import Question
from isoaudit.models.scope import AuditInfo, AuditScope


def _empty_findings() -> Mapping[str, Finding]:
    return MappingProxyType({})


@dataclass(frozen=True)
class AuditState:
    """Snapshot of one audit: questionnaire, omissions, findings and scope.

    Snapshots are never modified in place. Every change produces a new
    ``AuditState`` with fresh copies of the affected collections.
    """

    questions: tuple[Question, ...] = ()  # Hierarchical, top-level only
    omitted_questions: frozenset[str] = frozenset()
    findings: Mapping[str, Finding] = field(default_factory=_empty_findings)
    audit_scope: AuditScope = field(default_factory=AuditScope)
    audit_info: AuditInfo = field(default_factory=AuditInfo)
    current_audit_id: str | None = None  # Audit record this work belongs to

    def __post_init__(self):
        """Freeze collections handed in as plain lists, sets or dicts."""
        if not isinstance(self.questions, tuple):
            object.__setattr__(self, "questions", tuple(self.questions))
        if not isinstance(self.omitted_questions, frozenset):
            object.__setattr__(self, "omitted_questions", frozenset(self.omitted_questions))
        if not isinstance(self.findings, MappingProxyType):
            object.__setattr__(self, "findings", MappingProxyType(dict(self.findings)))

    def is_omitted(self, question_id: str) -> bool:
        return question_id in self.omitted_questions

    def get_finding(self, question_id: str) -> Finding | None:
        return self.findings.get(question_id)
