"""Progress aggregation tests."""

import pytest

from isoaudit.engine import (
    compute_progress,
    compute_section_progress,
    filter_by_scope,
    get_active_questions,
)
from isoaudit.models import Finding, FindingScore


def findings_for(scores: dict[str, FindingScore]) -> dict[str, Finding]:
    return {qid: Finding(question_id=qid, score=score) for qid, score in scores.items()}


ALL_SECTIONS = frozenset({"section-4", "section-8"})

SCENARIO_FINDINGS = findings_for(
    {
        "4.1": FindingScore.COMPLIANT,
        "4.2": FindingScore.COMPLIANT,
        "8.1": FindingScore.COMPLIANT,
        "8.2": FindingScore.COMPLIANT,
        "8.3": FindingScore.CRITICAL_NC,
    }
)


class TestGetActiveQuestions:
    """Active-question resolver tests."""

    def test_pre_order_traversal(self, nested_questions):
        active = get_active_questions(nested_questions, frozenset())

        assert [q.id for q in active] == ["p4", "c4a", "c4b", "p5", "c5a", "c5b"]

    def test_omitted_question_excluded(self, nested_questions):
        active = get_active_questions(nested_questions, frozenset({"c4a"}))

        assert "c4a" not in [q.id for q in active]
        assert len(active) == 5

    def test_children_active_when_parent_omitted(self, nested_questions):
        active = get_active_questions(nested_questions, frozenset({"p4"}))

        assert [q.id for q in active] == ["c4a", "c4b", "p5", "c5a", "c5b"]

    def test_parent_active_when_children_omitted(self, nested_questions):
        active = get_active_questions(nested_questions, frozenset({"c5a", "c5b"}))

        assert [q.id for q in active][-1] == "p5"


class TestFilterByScope:
    """Scope filter tests."""

    def test_empty_selection_is_noop(self, ten_questions):
        active = get_active_questions(ten_questions, frozenset())

        assert filter_by_scope(active, frozenset()) == active

    def test_keeps_selected_sections_in_order(self, ten_questions):
        filtered = filter_by_scope(ten_questions, frozenset({"section-8"}))

        assert [q.id for q in filtered] == ["8.1", "8.2", "8.3", "8.4", "8.5"]

    def test_unknown_section_filters_everything(self, ten_questions):
        assert filter_by_scope(ten_questions, frozenset({"section-99"})) == []

    def test_clause_without_dot_uses_whole_clause(self, question_factory):
        annex = question_factory("annex", "A")

        assert annex.section_id == "section-A"
        assert filter_by_scope([annex], frozenset({"section-A"})) == [annex]


class TestComputeProgress:
    """Overall progress aggregation tests."""

    def test_mixed_scores_scenario(self, ten_questions):
        progress = compute_progress(ten_questions, frozenset(), SCENARIO_FINDINGS, ALL_SECTIONS)

        assert progress.total_questions == 10
        assert progress.active_questions == 10
        assert progress.assessed_questions == 5
        assert progress.completion_percentage == 50
        assert progress.score_breakdown == {
            FindingScore.COMPLIANT: 4,
            FindingScore.MINOR_NC: 0,
            FindingScore.MAJOR_NC: 0,
            FindingScore.CRITICAL_NC: 1,
            FindingScore.NOT_ASSESSED: 5,
        }
        assert progress.overall_score == pytest.approx(40)

    def test_omitted_questions_leave_scope(self, ten_questions):
        omitted = frozenset({"8.4", "8.5"})

        progress = compute_progress(ten_questions, omitted, SCENARIO_FINDINGS, ALL_SECTIONS)

        assert progress.total_questions == 8
        assert progress.active_questions == 8
        assert progress.omitted_questions == 0
        assert progress.assessed_questions == 5
        assert progress.completion_percentage == 62.5

    def test_no_findings_gives_zero(self, ten_questions):
        progress = compute_progress(ten_questions, frozenset(), {}, ALL_SECTIONS)

        assert progress.completion_percentage == 0
        assert progress.overall_score == 0
        assert progress.score_breakdown[FindingScore.NOT_ASSESSED] == 10

    def test_fully_compliant_gives_hundred(self, ten_questions):
        findings = findings_for({q.id: FindingScore.COMPLIANT for q in ten_questions})

        progress = compute_progress(ten_questions, frozenset(), findings, ALL_SECTIONS)

        assert progress.completion_percentage == 100
        assert progress.overall_score == 100

    def test_nonconformance_weights(self, ten_questions):
        findings = findings_for({"4.1": FindingScore.MINOR_NC, "4.2": FindingScore.MAJOR_NC})
        only_two = frozenset(q.id for q in ten_questions) - {"4.1", "4.2"}

        progress = compute_progress(ten_questions, only_two, findings, frozenset())

        assert progress.active_questions == 2
        assert progress.overall_score == pytest.approx(62.5)

    def test_literal_not_assessed_finding_counts_as_pending(self, ten_questions):
        findings = findings_for({"4.1": FindingScore.NOT_ASSESSED})

        progress = compute_progress(ten_questions, frozenset(), findings, ALL_SECTIONS)

        assert progress.assessed_questions == 0
        assert progress.score_breakdown[FindingScore.NOT_ASSESSED] == 10

    def test_breakdown_sums_to_active(self, ten_questions):
        omitted = frozenset({"4.5", "8.1"})

        progress = compute_progress(ten_questions, omitted, SCENARIO_FINDINGS, ALL_SECTIONS)

        assert sum(progress.score_breakdown.values()) == progress.active_questions

    def test_findings_of_omitted_questions_ignored(self, ten_questions):
        progress = compute_progress(
            ten_questions, frozenset({"8.3"}), SCENARIO_FINDINGS, ALL_SECTIONS
        )

        assert progress.score_breakdown[FindingScore.CRITICAL_NC] == 0
        assert progress.overall_score == pytest.approx(400 / 900 * 100)

    def test_empty_questionnaire(self):
        progress = compute_progress([], frozenset(), {}, frozenset())

        assert progress.total_questions == 0
        assert progress.completion_percentage == 0
        assert progress.overall_score == 0
        assert progress.section_progress == []

    def test_scope_limits_totals(self, ten_questions):
        progress = compute_progress(
            ten_questions, frozenset(), SCENARIO_FINDINGS, frozenset({"section-4"})
        )

        assert progress.total_questions == 5
        assert progress.assessed_questions == 2
        assert progress.completion_percentage == pytest.approx(40)
        assert progress.overall_score == pytest.approx(40)

    def test_section_progress_follows_selection_in_numeric_order(self, ten_questions):
        progress = compute_progress(
            ten_questions, frozenset(), {}, frozenset({"section-10", "section-8", "section-4"})
        )

        assert [s.section_id for s in progress.section_progress] == [
            "section-4",
            "section-8",
            "section-10",
        ]
        assert progress.section_progress[-1].total_questions == 0

    def test_to_dict_uses_score_values(self, ten_questions):
        data = compute_progress(
            ten_questions, frozenset(), SCENARIO_FINDINGS, ALL_SECTIONS
        ).to_dict()

        assert data["scoreBreakdown"]["critical-nc"] == 1
        assert data["sectionProgress"][0]["sectionId"] == "section-4"
        assert data["overallScore"] == pytest.approx(40)


class TestComputeSectionProgress:
    """Section rollup tests."""

    def test_section_scores(self, ten_questions):
        section = compute_section_progress("section-8", ten_questions, frozenset(), SCENARIO_FINDINGS)

        assert section.total_questions == 5
        assert section.assessed_questions == 3
        assert section.completion_percentage == pytest.approx(60)
        assert section.section_score == pytest.approx(40)

    def test_independent_of_scope_selection(self, ten_questions):
        progress = compute_progress(
            ten_questions, frozenset(), SCENARIO_FINDINGS, frozenset({"section-4"})
        )
        section = compute_section_progress("section-8", ten_questions, frozenset(), SCENARIO_FINDINGS)

        assert [s.section_id for s in progress.section_progress] == ["section-4"]
        assert section.total_questions == 5

    def test_omission_reduces_section_total(self, ten_questions):
        section = compute_section_progress(
            "section-4", ten_questions, frozenset({"4.1"}), SCENARIO_FINDINGS
        )

        assert section.total_questions == 4
        assert section.assessed_questions == 1
        assert section.completion_percentage == 25

    def test_empty_section_is_zero(self, ten_questions):
        section = compute_section_progress("section-6", ten_questions, frozenset(), {})

        assert section.total_questions == 0
        assert section.completion_percentage == 0
        assert section.section_score == 0

    def test_nested_children_counted_in_their_own_section(self, nested_questions):
        findings = findings_for({"c5b": FindingScore.COMPLIANT})

        section_5 = compute_section_progress("section-5", nested_questions, frozenset(), findings)

        assert section_5.total_questions == 3
        assert section_5.assessed_questions == 1
