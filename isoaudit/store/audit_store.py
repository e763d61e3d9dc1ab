"""State container for one audit in progress."""

from __future__ import annotations

from dataclasses import fields, replace
from datetime import datetime
from typing import Any, Iterable

from isoaudit.engine import (
    compute_progress,
    compute_section_progress,
    filter_by_scope,
    get_active_questions,
)
from isoaudit.models import (
    AuditInfo,
    AuditProgress,
    AuditScope,
    AuditState,
    Finding,
    FindingScore,
    Question,
    QuestionCatalog,
    SectionProgress,
)
from isoaudit.persistence import export_audit_data, import_audit_data
from isoaudit.tracing import AuditEventType, log_audit_event

_FINDING_FIELDS = {f.name for f in fields(Finding)} - {"question_id", "timestamp"}
_INFO_FIELDS = {f.name for f in fields(AuditInfo)}


def create_initial_state(
    catalog: QuestionCatalog | None = None,
    selected_sections: Iterable[str] | None = None,
) -> AuditState:
    """Build a fresh audit state.

    Args:
        catalog: Catalog supplying the questionnaire. Defaults to the
            catalog of ``settings.default_standard``.
        selected_sections: Initial scope. Defaults to
            ``settings.default_sections``.
    """
    from config.settings import settings

    if catalog is None:
        from isoaudit.registry import get_catalog_registry

        catalog = get_catalog_registry().get_or_raise(settings.default_standard)
    if selected_sections is None:
        selected_sections = settings.default_sections

    return AuditState(
        questions=tuple(catalog.build_hierarchy()),
        audit_scope=AuditScope(selected_sections=frozenset(selected_sections)),
    )


class AuditStore:
    """Holds the current AuditState of one audit.

    The store is created explicitly and handed to whoever needs it; there
    is no process-wide instance. Mutations build a new AuditState, swap it
    in and return it, so a reader holding the previous snapshot keeps a
    consistent view.
    """

    def __init__(self, initial_state: AuditState | None = None, catalog: QuestionCatalog | None = None):
        self.catalog = catalog
        self.init(initial_state if initial_state is not None else create_initial_state(catalog))

    def init(self, initial_state: AuditState) -> AuditState:
        """Replace the state and remember it as the reset target."""
        self._initial_state = initial_state
        self._state = initial_state
        return self._state

    @property
    def state(self) -> AuditState:
        return self._state

    def _set(self, state: AuditState) -> AuditState:
        self._state = state
        return state

    # Mutations

    def toggle_question_omission(self, question_id: str) -> AuditState:
        """Omit the question if it is active, restore it if omitted.

        The id is not checked against the questionnaire. Findings of an
        omitted question are kept.
        """
        omitted = self._state.omitted_questions ^ {question_id}
        log_audit_event(
            AuditEventType.OMISSION_TOGGLED,
            "Omitted" if question_id in omitted else "Restored",
            question_id,
            omitted_count=len(omitted),
        )
        return self._set(replace(self._state, omitted_questions=omitted))

    def update_finding(self, question_id: str, /, **changes: Any) -> AuditState:
        """Merge ``changes`` into the finding for ``question_id``.

        A default not-assessed finding is created on first update. The
        timestamp is always refreshed and ``question_id`` cannot be
        overridden through ``changes``. Unknown fields are ignored.

        Raises:
            ValueError: If ``score`` is not a valid FindingScore.
        """
        current = self._state.findings.get(question_id) or Finding(question_id=question_id)
        updates = {k: v for k, v in changes.items() if k in _FINDING_FIELDS}
        if "score" in updates:
            updates["score"] = FindingScore(updates["score"])

        finding = replace(current, **updates, question_id=question_id, timestamp=datetime.now())
        findings = dict(self._state.findings)
        findings[question_id] = finding

        log_audit_event(AuditEventType.FINDING_UPDATED, finding.score.value, question_id)
        return self._set(replace(self._state, findings=findings))

    def update_audit_info(self, **changes: Any) -> AuditState:
        """Merge header fields such as ``audit_title`` or ``auditor``."""
        updates = {k: v for k, v in changes.items() if k in _INFO_FIELDS}
        info = replace(self._state.audit_info, **updates)
        log_audit_event(AuditEventType.INFO_UPDATED, "Audit info updated", fields=sorted(updates))
        return self._set(replace(self._state, audit_info=info))

    def update_audit_scope(
        self,
        selected_sections: Iterable[str] | None = None,
        template: str | None = None,
        custom_scope: bool | None = None,
    ) -> AuditState:
        """Merge scope fields; omitted arguments keep their current value."""
        scope = self._state.audit_scope
        if selected_sections is not None:
            scope = scope.with_sections(selected_sections)
        if template is not None:
            scope = replace(scope, template=template)
        if custom_scope is not None:
            scope = replace(scope, custom_scope=custom_scope)

        log_audit_event(
            AuditEventType.SCOPE_UPDATED,
            "Scope updated",
            sections=len(scope.selected_sections),
            template=scope.template,
        )
        return self._set(replace(self._state, audit_scope=scope))

    def apply_scope_template(self, template_id: str) -> AuditState:
        """Select exactly the sections of a catalog template.

        Raises:
            KeyError: If the store has no catalog or the template is unknown.
        """
        template = self.catalog.get_template(template_id) if self.catalog else None
        if template is None:
            raise KeyError(f"Template '{template_id}' not found")
        scope = self._state.audit_scope.with_template(template)
        log_audit_event(AuditEventType.TEMPLATE_APPLIED, f"Applied template {template_id}")
        return self._set(replace(self._state, audit_scope=scope))

    def toggle_section(self, section_id: str) -> AuditState:
        """Add or remove one section; the scope becomes custom."""
        scope = self._state.audit_scope.with_section_toggled(section_id)
        log_audit_event(AuditEventType.SECTION_TOGGLED, section_id, custom_scope=True)
        return self._set(replace(self._state, audit_scope=scope))

    def reset_audit(self) -> AuditState:
        log_audit_event(AuditEventType.AUDIT_RESET, "Audit reset to initial state")
        return self._set(self._initial_state)

    # Reads

    def get_active_questions(self) -> list[Question]:
        return get_active_questions(self._state.questions, self._state.omitted_questions)

    def get_filtered_questions(self) -> list[Question]:
        """Active questions limited to the selected sections."""
        return filter_by_scope(
            self.get_active_questions(), self._state.audit_scope.selected_sections
        )

    def get_section_progress(self, section_id: str) -> SectionProgress:
        state = self._state
        return compute_section_progress(
            section_id, state.questions, state.omitted_questions, state.findings
        )

    def get_progress(self) -> AuditProgress:
        state = self._state
        return compute_progress(
            state.questions,
            state.omitted_questions,
            state.findings,
            state.audit_scope.selected_sections,
        )

    # Import / export

    def export_audit_data(self) -> str:
        return export_audit_data(self._state)

    def import_audit_data(self, data: str) -> bool:
        """Load exported JSON; on failure the current state is kept."""
        ok, state = import_audit_data(self._state, data)
        if ok:
            self._set(state)
            log_audit_event(
                AuditEventType.AUDIT_IMPORTED,
                "Imported audit data",
                findings=len(state.findings),
                omitted=len(state.omitted_questions),
            )
        return ok
