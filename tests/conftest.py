"""Shared fixtures for isoaudit tests."""

import pytest

from isoaudit.engine import build_question_hierarchy
from isoaudit.models import AuditScope, AuditState, Question, RiskLevel


def make_question(qid: str, clause: str, parent_id: str | None = None, is_parent: bool = True) -> Question:
    return Question(
        id=qid,
        clause=clause,
        text=f"Requirement {clause}",
        category="Test",
        risk_level=RiskLevel.MEDIUM,
        is_parent=is_parent if parent_id is None else False,
        parent_id=parent_id,
    )


@pytest.fixture
def ten_questions() -> list[Question]:
    """Clauses 4.1-4.5 and 8.1-8.5, one question each, ids equal to clauses."""
    clauses = [f"4.{i}" for i in range(1, 6)] + [f"8.{i}" for i in range(1, 6)]
    return build_question_hierarchy(make_question(c, c) for c in clauses)


@pytest.fixture
def ten_question_state(ten_questions) -> AuditState:
    return AuditState(
        questions=ten_questions,
        audit_scope=AuditScope(selected_sections=frozenset({"section-4", "section-8"})),
    )


@pytest.fixture
def nested_questions() -> list[Question]:
    """Two parents in section 4 and 5, each with two children."""
    flat = [
        make_question("p4", "4.1"),
        make_question("c4a", "4.1", parent_id="p4"),
        make_question("c4b", "4.1", parent_id="p4"),
        make_question("p5", "5.1"),
        make_question("c5a", "5.1", parent_id="p5"),
        make_question("c5b", "5.2", parent_id="p5"),
    ]
    return build_question_hierarchy(flat)


@pytest.fixture
def question_factory():
    return make_question
