"""Domain models for ISO audits."""

from isoaudit.models.catalog import DefaultGuidance, QuestionCatalog
from isoaudit.models.dashboard import (
    AuditMetadata,
    AuditStatus,
    DashboardStats,
)
from isoaudit.models.finding import (
    NON_CONFORMANCE_RESPONSES,
    SCORE_WEIGHTS,
    Finding,
    FindingScore,
    suggested_responses,
)
from isoaudit.models.progress import (
    AuditProgress,
    SectionProgress,
    empty_score_breakdown,
)
from isoaudit.models.question import (
    EvidenceGuidance,
    IsoStandard,
    NonConformanceExample,
    NonConformanceExamples,
    Question,
    RiskLevel,
    section_id_for_clause,
    section_sort_key,
)
from isoaudit.models.scope import (
    AuditInfo,
    AuditScope,
    AuditTemplate,
    IsoSection,
)
from isoaudit.models.state import AuditState

__all__ = [
    # Question
    "Question",
    "RiskLevel",
    "IsoStandard",
    "EvidenceGuidance",
    "NonConformanceExample",
    "NonConformanceExamples",
    "section_id_for_clause",
    "section_sort_key",
    # Finding
    "Finding",
    "FindingScore",
    "SCORE_WEIGHTS",
    "NON_CONFORMANCE_RESPONSES",
    "suggested_responses",
    # Scope
    "AuditScope",
    "AuditTemplate",
    "AuditInfo",
    "IsoSection",
    # Progress
    "AuditProgress",
    "SectionProgress",
    "empty_score_breakdown",
    # State
    "AuditState",
    # Catalog
    "QuestionCatalog",
    "DefaultGuidance",
    # Dashboard
    "AuditMetadata",
    "AuditStatus",
    "DashboardStats",
]
