"""Tracer tests."""

import logging

from isoaudit.store import AuditStore
from isoaudit.tracing import AuditEvent, AuditEventType, AuditTracer, get_tracer, setup_tracing


class TestAuditTracer:
    def test_record_keeps_event(self):
        tracer = AuditTracer()

        tracer.record(AuditEvent(AuditEventType.FINDING_UPDATED, "compliant", "q1", {"count": 1}))

        events = tracer.get_events()
        assert len(events) == 1
        assert events[0].event_type == AuditEventType.FINDING_UPDATED
        assert events[0].question_id == "q1"
        assert events[0].data == {"count": 1}

    def test_filter_by_type_and_question(self):
        tracer = AuditTracer()
        tracer.record(AuditEvent(AuditEventType.CATALOG_LOADED, "Loaded"))
        tracer.record(AuditEvent(AuditEventType.OMISSION_TOGGLED, "Omitted", "q1"))
        tracer.record(AuditEvent(AuditEventType.OMISSION_TOGGLED, "Omitted", "q2"))

        assert len(tracer.get_events(AuditEventType.OMISSION_TOGGLED)) == 2
        assert [e.question_id for e in tracer.get_events(question_id="q2")] == ["q2"]

    def test_event_buffer_is_bounded(self):
        tracer = AuditTracer(max_events=3)

        for i in range(10):
            tracer.record(AuditEvent(AuditEventType.FINDING_UPDATED, "compliant", f"q{i}"))

        assert [e.question_id for e in tracer.get_events()] == ["q7", "q8", "q9"]

    def test_disabled_tracer_records_nothing(self):
        tracer = setup_tracing("WARNING", enabled=False)

        tracer.record(AuditEvent(AuditEventType.AUDIT_RESET, "Reset"))

        assert tracer.get_events() == []

    def test_clear(self):
        tracer = AuditTracer()
        tracer.record(AuditEvent(AuditEventType.AUDIT_RESET, "Reset"))

        tracer.clear()

        assert tracer.get_events() == []

    def test_event_logger_does_not_propagate(self):
        """Events are printed once by the tracer's own handler, never again by root."""
        tracer = AuditTracer()

        assert tracer.logger.propagate is False
        assert len(tracer.logger.handlers) == 1
        assert logging.getLogger("isoaudit").propagate is True


def test_store_mutations_are_traced(ten_question_state):
    tracer = setup_tracing("INFO")
    store = AuditStore(ten_question_state)

    store.toggle_question_omission("4.1")
    store.update_finding("4.2", score="compliant")
    store.toggle_section("section-5")

    assert get_tracer() is tracer
    assert [e.event_type for e in tracer.get_events()] == [
        AuditEventType.OMISSION_TOGGLED,
        AuditEventType.FINDING_UPDATED,
        AuditEventType.SECTION_TOGGLED,
    ]
    assert tracer.get_events(question_id="4.2")[0].message == "compliant"
