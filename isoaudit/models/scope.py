"""Audit scope, section and template models."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Iterable

from isoaudit.models.question import RiskLevel


@dataclass
class IsoSection:
    """A top-level clause group of an ISO standard (e.g. "8 Operation")."""

    number: str  # e.g., "8"
    title: str  # e.g., "Operation"
    clauses: list[str] = field(default_factory=list)  # ["8.1", "8.2", ...]
    description: str = ""
    risk_level: RiskLevel = RiskLevel.MEDIUM
    industry_relevance: str = ""

    @property
    def id(self) -> str:
        return f"section-{self.number}"


@dataclass
class AuditTemplate:
    """A named, preselected set of sections."""

    id: str  # e.g., "leadership-focus"
    name: str
    sections: list[str]  # Section ids
    description: str = ""
    recommended_for: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class AuditScope:
    """Sections selected for the active audit.

    An empty selection means no filtering: every section is in scope.
    """

    selected_sections: frozenset[str] = frozenset()
    template: str | None = None
    custom_scope: bool = False

    def includes(self, section_id: str) -> bool:
        """Check if a section is in scope."""
        return not self.selected_sections or section_id in self.selected_sections

    def with_template(self, template: AuditTemplate) -> AuditScope:
        """Select exactly the template's sections."""
        return AuditScope(
            selected_sections=frozenset(template.sections),
            template=template.id,
            custom_scope=False,
        )

    def with_section_toggled(self, section_id: str) -> AuditScope:
        """Flip one section; the scope becomes custom."""
        return AuditScope(
            selected_sections=self.selected_sections ^ {section_id},
            template=None,
            custom_scope=True,
        )

    def with_sections(self, sections: Iterable[str]) -> AuditScope:
        return replace(self, selected_sections=frozenset(sections))


@dataclass(frozen=True)
class AuditInfo:
    """Header information for the audit being performed."""

    audit_title: str = ""
    audit_date: str = field(default_factory=lambda: date.today().isoformat())
    auditor: str = ""
    facility: str = ""
