"""Audit progress engine: hierarchy building and aggregation."""

from isoaudit.engine.hierarchy import build_question_hierarchy, flatten_questions
from isoaudit.engine.progress import (
    compute_progress,
    compute_section_progress,
    filter_by_scope,
    get_active_questions,
)

__all__ = [
    "build_question_hierarchy",
    "flatten_questions",
    "get_active_questions",
    "filter_by_scope",
    "compute_progress",
    "compute_section_progress",
]
