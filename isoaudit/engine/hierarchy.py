"""Question hierarchy construction."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import replace
from typing import Iterable

from isoaudit.models import Question

logger = logging.getLogger(__name__)


def build_question_hierarchy(questions: Iterable[Question]) -> list[Question]:
    """Nest child questions under their parents.

    Children are grouped by ``parent_id`` and attached to the matching
    parent in their original relative order. Only questions without a
    ``parent_id`` are returned at the top level. Children whose parent is
    not a parent question in the input are dropped.

    Args:
        questions: Flat, ordered question list as supplied by a catalog.

    Returns:
        Top-level questions; the inputs are left untouched.
    """
    questions = list(questions)
    children_by_parent: dict[str, list[Question]] = defaultdict(list)
    for q in questions:
        if q.parent_id:
            children_by_parent[q.parent_id].append(replace(q, children=[]))

    top_level: list[Question] = []
    known_ids: set[str] = set()
    for q in questions:
        if q.parent_id:
            continue
        children: list[Question] = []
        if q.is_parent:
            known_ids.add(q.id)
            children = children_by_parent.get(q.id, [])
        top_level.append(replace(q, children=list(children)))

    orphans = [
        child.id
        for parent_id, children in children_by_parent.items()
        if parent_id not in known_ids
        for child in children
    ]
    if orphans:
        logger.warning("Dropping %d orphaned question(s): %s", len(orphans), ", ".join(orphans))

    return top_level


def flatten_questions(questions: Iterable[Question]) -> list[Question]:
    """Pre-order flatten of a hierarchy (parent, then its children)."""
    flat: list[Question] = []
    for q in questions:
        flat.append(q)
        flat.extend(flatten_questions(q.children))
    return flat
