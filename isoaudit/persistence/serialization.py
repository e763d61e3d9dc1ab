"""Conversion between AuditState and its persisted blob.

The blob keeps the shape written by the browser store: camelCase keys, sets
stored as lists. ``state_to_dict`` turns the frozensets of the in-memory
state into sorted lists, and ``state_from_dict`` turns those lists back
into frozensets. Nothing else in the package converts sets for storage.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from datetime import datetime
from typing import Any

from isoaudit.models import AuditInfo, AuditScope, AuditState, Finding, section_sort_key

logger = logging.getLogger(__name__)


def _string_set(value: Any, name: str) -> frozenset[str]:
    """Read a persisted list of ids; a missing value is empty.

    Raises:
        ValueError: If the value is not a list of strings.
    """
    if value is None:
        return frozenset()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{name} must be a list of strings")
    return frozenset(value)


def scope_to_dict(scope: AuditScope) -> dict[str, Any]:
    data: dict[str, Any] = {
        "selectedSections": sorted(scope.selected_sections, key=section_sort_key),
        "customScope": scope.custom_scope,
    }
    if scope.template is not None:
        data["template"] = scope.template
    return data


def scope_from_dict(data: dict[str, Any]) -> AuditScope:
    template = data.get("template")
    if template is not None and not isinstance(template, str):
        raise ValueError("template must be a string")
    return AuditScope(
        selected_sections=_string_set(data.get("selectedSections"), "selectedSections"),
        template=template,
        custom_scope=bool(data.get("customScope", False)),
    )


def info_to_dict(info: AuditInfo) -> dict[str, Any]:
    return {
        "auditTitle": info.audit_title,
        "auditDate": info.audit_date,
        "auditor": info.auditor,
        "facility": info.facility,
    }


def info_from_dict(data: dict[str, Any], base: AuditInfo) -> AuditInfo:
    return AuditInfo(
        audit_title=data.get("auditTitle", base.audit_title),
        audit_date=data.get("auditDate", base.audit_date),
        auditor=data.get("auditor", base.auditor),
        facility=data.get("facility", base.facility),
    )


def state_to_dict(state: AuditState) -> dict[str, Any]:
    """Serialize the persistable part of a state.

    The questionnaire itself is not persisted; it comes from the catalog.
    """
    data: dict[str, Any] = {
        "auditInfo": info_to_dict(state.audit_info),
        "auditScope": scope_to_dict(state.audit_scope),
        "omittedQuestions": sorted(state.omitted_questions),
        "findings": {qid: f.to_dict() for qid, f in state.findings.items()},
    }
    if state.current_audit_id is not None:
        data["currentAuditId"] = state.current_audit_id
    return data


def state_from_dict(data: dict[str, Any], base: AuditState) -> AuditState:
    """Rebuild a state from a persisted blob on top of ``base``.

    A missing ``auditInfo`` or ``auditScope`` keeps the values of ``base``;
    missing ``omittedQuestions`` or ``findings`` start out empty. Id
    collections must be lists of strings.

    Raises:
        ValueError: If the blob is not an object, holds a malformed finding
            or an id collection that is not a list of strings.
        TypeError: If a field has the wrong shape.
    """
    if not isinstance(data, dict):
        raise ValueError("Audit data must be a JSON object")

    info = base.audit_info
    if data.get("auditInfo"):
        info = info_from_dict(data["auditInfo"], base.audit_info)

    scope = base.audit_scope
    if data.get("auditScope"):
        scope = scope_from_dict(data["auditScope"])

    audit_id = data.get("currentAuditId", base.current_audit_id)
    if audit_id is not None and not isinstance(audit_id, str):
        raise ValueError("currentAuditId must be a string")

    findings = {
        qid: Finding.from_dict({**raw, "questionId": qid})
        for qid, raw in (data.get("findings") or {}).items()
    }

    return replace(
        base,
        audit_info=info,
        audit_scope=scope,
        omitted_questions=_string_set(data.get("omittedQuestions"), "omittedQuestions"),
        findings=findings,
        current_audit_id=audit_id,
    )


def export_audit_data(state: AuditState) -> str:
    """Export a state as pretty-printed JSON with an export date."""
    payload = state_to_dict(state)
    payload["exportDate"] = datetime.now().isoformat()
    return json.dumps(payload, indent=2)


def import_audit_data(state: AuditState, data: str) -> tuple[bool, AuditState]:
    """Import exported JSON on top of ``state``.

    Never raises: on any malformed payload the original state is returned
    together with ``False``.

    Returns:
        Tuple of (success, resulting state).
    """
    try:
        parsed = json.loads(data)
        return True, state_from_dict(parsed, state)
    except (ValueError, TypeError, KeyError, AttributeError, RecursionError) as e:
        logger.warning("Rejected audit data import: %s", e)
        return False, state
