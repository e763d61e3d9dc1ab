"""Audit state container."""

from isoaudit.store.audit_store import AuditStore, create_initial_state

__all__ = [
    "AuditStore",
    "create_initial_state",
]
