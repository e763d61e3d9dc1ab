"""Progress and score aggregation over an audit questionnaire.

All functions here are pure and recompute their result from scratch on
every call. Question sets are small (tens to low hundreds), so nothing
is cached.
"""

from __future__ import annotations

from typing import AbstractSet, Iterable, Mapping, Sequence

from isoaudit.models import (
    SCORE_WEIGHTS,
    AuditProgress,
    Finding,
    FindingScore,
    Question,
    SectionProgress,
    empty_score_breakdown,
    section_sort_key,
)

MAX_QUESTION_SCORE = SCORE_WEIGHTS[FindingScore.COMPLIANT]


def get_active_questions(
    questions: Iterable[Question],
    omitted: AbstractSet[str],
) -> list[Question]:
    """Flatten the hierarchy, skipping omitted questions.

    Traversal is pre-order: each parent is immediately followed by its
    children. A child is visited whether or not its parent is omitted.
    """
    active: list[Question] = []

    def visit(nodes: Iterable[Question]) -> None:
        for q in nodes:
            if q.id not in omitted:
                active.append(q)
            visit(q.children)

    visit(questions)
    return active


def filter_by_scope(
    questions: Sequence[Question],
    selected_sections: AbstractSet[str],
) -> list[Question]:
    """Keep questions whose section is selected.

    An empty selection means every section is in scope.
    """
    if not selected_sections:
        return list(questions)
    return [q for q in questions if q.section_id in selected_sections]


def _weighted_score(
    questions: Iterable[Question],
    findings: Mapping[str, Finding],
) -> tuple[int, int, int]:
    """Return (assessed count, weighted score, max possible score)."""
    assessed = 0
    total_score = 0
    max_score = 0
    for q in questions:
        finding = findings.get(q.id)
        if finding is not None and finding.is_assessed:
            assessed += 1
            total_score += SCORE_WEIGHTS[finding.score]
        max_score += MAX_QUESTION_SCORE
    return assessed, total_score, max_score


def _percentage(part: float, whole: float) -> float:
    return (part / whole) * 100 if whole > 0 else 0.0


def compute_section_progress(
    section_id: str,
    questions: Iterable[Question],
    omitted: AbstractSet[str],
    findings: Mapping[str, Finding],
) -> SectionProgress:
    """Aggregate one section over all active questions.

    The section is computed whether or not it is part of the audit scope.

    Args:
        section_id: Section id such as "section-8".
        questions: Hierarchical question list.
        omitted: Ids of omitted questions.
        findings: Findings keyed by question id.
    """
    section_questions = [
        q for q in get_active_questions(questions, omitted) if q.section_id == section_id
    ]
    total = len(section_questions)
    omitted_count = sum(1 for q in section_questions if q.id in omitted)
    assessed, total_score, max_score = _weighted_score(section_questions, findings)

    return SectionProgress(
        section_id=section_id,
        total_questions=total,
        assessed_questions=assessed,
        omitted_questions=omitted_count,
        completion_percentage=_percentage(assessed, total),
        section_score=_percentage(total_score, max_score),
    )


def compute_progress(
    questions: Iterable[Question],
    omitted: AbstractSet[str],
    findings: Mapping[str, Finding],
    selected_sections: AbstractSet[str],
) -> AuditProgress:
    """Aggregate progress over the questions in scope.

    ``total_questions`` is the size of the scope-filtered active set and
    ``active_questions`` subtracts any of those that are omitted. Every
    non-omitted question lands in exactly one ``score_breakdown`` bucket,
    so the buckets always sum to ``active_questions``.
    """
    questions = list(questions)
    in_scope = filter_by_scope(get_active_questions(questions, omitted), selected_sections)

    total = len(in_scope)
    omitted_count = sum(1 for q in in_scope if q.id in omitted)
    counted = [q for q in in_scope if q.id not in omitted]

    breakdown = empty_score_breakdown()
    for q in counted:
        finding = findings.get(q.id)
        if finding is not None and finding.is_assessed:
            breakdown[finding.score] += 1
        else:
            breakdown[FindingScore.NOT_ASSESSED] += 1

    assessed, total_score, max_score = _weighted_score(counted, findings)
    active = total - omitted_count

    return AuditProgress(
        total_questions=total,
        assessed_questions=assessed,
        omitted_questions=omitted_count,
        active_questions=active,
        completion_percentage=_percentage(assessed, active),
        score_breakdown=breakdown,
        overall_score=_percentage(total_score, max_score),
        section_progress=[
            compute_section_progress(section_id, questions, omitted, findings)
            for section_id in sorted(selected_sections, key=section_sort_key)
        ],
    )
