"""Finding models for audit results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class FindingScore(str, Enum):
    """Assessment outcome for a question."""

    COMPLIANT = "compliant"
    MINOR_NC = "minor-nc"  # Minor non-conformance
    MAJOR_NC = "major-nc"  # Major non-conformance
    CRITICAL_NC = "critical-nc"  # Critical non-conformance
    NOT_ASSESSED = "not-assessed"


SCORE_WEIGHTS: dict[FindingScore, int] = {
    FindingScore.COMPLIANT: 100,
    FindingScore.MINOR_NC: 75,
    FindingScore.MAJOR_NC: 50,
    FindingScore.CRITICAL_NC: 0,
    FindingScore.NOT_ASSESSED: 0,
}

NON_CONFORMANCE_RESPONSES: dict[FindingScore, list[str]] = {
    FindingScore.MINOR_NC: [
        "Minor documentation gap identified - procedure exists but lacks specific detail",
        "Training records incomplete for some personnel - no impact on competency demonstrated",
        "Minor procedural deviation observed - corrective action implemented immediately",
        "Documentation not fully current - content accurate but revision date overdue",
        "Minor calibration delay - equipment still within acceptable tolerance",
    ],
    FindingScore.MAJOR_NC: [
        "Systematic failure in process implementation affecting multiple areas",
        "Required procedure not implemented as documented - significant deviation observed",
        "Critical training not completed for key personnel affecting process effectiveness",
        "Management review process not conducted as required - missing key elements",
        "Internal audit program not covering all required areas systematically",
    ],
    FindingScore.CRITICAL_NC: [
        "Immediate risk to public health and safety - process control failure",
        "Complete absence of required safety procedures in critical operations",
        "Contamination risk not controlled - potential for public health impact",
        "Emergency response procedures not established for critical scenarios",
        "Regulatory compliance failure with immediate enforcement implications",
    ],
}


def suggested_responses(score: FindingScore | str) -> list[str]:
    """Get canned finding texts for a non-conformance score.

    Returns an empty list for compliant and not-assessed scores.
    """
    return list(NON_CONFORMANCE_RESPONSES.get(FindingScore(score), []))


@dataclass(frozen=True)
class Finding:
    """Assessment of one question within one audit.

    At most one finding exists per question. Updates replace the record
    and refresh ``timestamp``; no history is kept.
    """

    question_id: str
    score: FindingScore = FindingScore.NOT_ASSESSED
    notes: str = ""
    evidence_notes: str = ""
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def is_assessed(self) -> bool:
        """Check if the question has been given a real score."""
        return self.score != FindingScore.NOT_ASSESSED

    @property
    def weight(self) -> int:
        """Numeric weight of the score."""
        return SCORE_WEIGHTS[self.score]

    @property
    def is_non_conformance(self) -> bool:
        return self.score in (
            FindingScore.MINOR_NC,
            FindingScore.MAJOR_NC,
            FindingScore.CRITICAL_NC,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert finding to dictionary for serialization."""
        return {
            "questionId": self.question_id,
            "score": self.score.value,
            "notes": self.notes,
            "evidenceNotes": self.evidence_notes,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Finding:
        """Build a finding from its serialized form.

        Raises:
            ValueError: If the score or timestamp is malformed.
            KeyError: If ``questionId`` is missing.
        """
        timestamp = data.get("timestamp")
        return cls(
            question_id=data["questionId"],
            score=FindingScore(data.get("score", FindingScore.NOT_ASSESSED.value)),
            notes=data.get("notes") or "",
            evidence_notes=data.get("evidenceNotes") or "",
            timestamp=_parse_timestamp(timestamp) if timestamp else datetime.now(),
        )


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Invalid timestamp: {value!r}")
    # JSON.stringify emits a trailing "Z"
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)
