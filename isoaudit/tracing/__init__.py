"""Tracing and logging for audit state changes."""

from .logger import (
    AuditEvent,
    AuditEventType,
    AuditTracer,
    get_tracer,
    log_audit_event,
    setup_tracing,
)

__all__ = [
    "AuditEvent",
    "AuditEventType",
    "AuditTracer",
    "setup_tracing",
    "get_tracer",
    "log_audit_event",
]
