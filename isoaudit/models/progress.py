"""Progress aggregates derived from audit state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from isoaudit.models.finding import FindingScore


def empty_score_breakdown() -> dict[FindingScore, int]:
    """Breakdown with every score bucket present and zeroed."""
    return {score: 0 for score in FindingScore}


@dataclass
class SectionProgress:
    """Progress of a single ISO section."""

    section_id: str
    total_questions: int = 0
    assessed_questions: int = 0
    omitted_questions: int = 0
    completion_percentage: float = 0.0
    section_score: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "sectionId": self.section_id,
            "totalQuestions": self.total_questions,
            "assessedQuestions": self.assessed_questions,
            "omittedQuestions": self.omitted_questions,
            "completionPercentage": self.completion_percentage,
            "sectionScore": self.section_score,
        }


@dataclass
class AuditProgress:
    """Overall progress of an audit within its selected scope.

    ``total_questions`` counts every question in scope, including any that
    are omitted; ``active_questions`` subtracts the omitted ones.
    Percentages are not rounded.
    """

    total_questions: int = 0
    assessed_questions: int = 0
    omitted_questions: int = 0
    active_questions: int = 0
    completion_percentage: float = 0.0
    score_breakdown: dict[FindingScore, int] = field(default_factory=empty_score_breakdown)
    overall_score: float = 0.0
    section_progress: list[SectionProgress] = field(default_factory=list)

    @property
    def pending_questions(self) -> int:
        """Active questions still waiting for an assessment."""
        return self.score_breakdown[FindingScore.NOT_ASSESSED]

    @property
    def non_conformances(self) -> int:
        return (
            self.score_breakdown[FindingScore.MINOR_NC]
            + self.score_breakdown[FindingScore.MAJOR_NC]
            + self.score_breakdown[FindingScore.CRITICAL_NC]
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert progress to the dictionary shape read by dashboards."""
        return {
            "totalQuestions": self.total_questions,
            "assessedQuestions": self.assessed_questions,
            "omittedQuestions": self.omitted_questions,
            "activeQuestions": self.active_questions,
            "completionPercentage": self.completion_percentage,
            "scoreBreakdown": {
                score.value: count for score, count in self.score_breakdown.items()
            },
            "overallScore": self.overall_score,
            "sectionProgress": [s.to_dict() for s in self.section_progress],
        }
