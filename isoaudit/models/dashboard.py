"""Audit record and dashboard rollup models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from isoaudit.models.question import IsoStandard


class AuditStatus(str, Enum):
    """Lifecycle status of an audit record."""

    DRAFT = "DRAFT"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


@dataclass
class AuditMetadata:
    """Audit record as kept by the audit record service."""

    id: str
    title: str
    company_name: str
    iso_standard: IsoStandard
    status: AuditStatus = AuditStatus.DRAFT
    company_address: str = ""
    lead_auditor_id: str | None = None
    selected_sections: list[str] = field(default_factory=list)
    custom_scope: bool = False
    completion_percentage: float = 0.0
    overall_score: float | None = None
    date_started: datetime = field(default_factory=datetime.now)
    date_completed: datetime | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class DashboardStats:
    """Summary across all audit records."""

    total_audits: int = 0
    active_audits: int = 0
    completed_audits: int = 0
    average_score: float = 0.0
    recent_audits: list[AuditMetadata] = field(default_factory=list)

    @classmethod
    def from_audits(cls, audits: list[AuditMetadata], recent: int = 5) -> DashboardStats:
        """Create stats from a list of audit records.

        The average covers completed audits that carry a non-zero score.
        """
        stats = cls(total_audits=len(audits))
        if not audits:
            return stats

        scores: list[float] = []
        for audit in audits:
            if audit.status == AuditStatus.IN_PROGRESS:
                stats.active_audits += 1
            elif audit.status == AuditStatus.COMPLETED:
                stats.completed_audits += 1
                if audit.overall_score:
                    scores.append(audit.overall_score)

        stats.average_score = sum(scores) / len(scores) if scores else 0.0
        stats.recent_audits = sorted(
            audits, key=lambda a: a.date_started, reverse=True
        )[:recent]
        return stats
