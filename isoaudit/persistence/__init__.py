"""Serialization helpers for persisting audit state."""

from isoaudit.persistence.serialization import (
    export_audit_data,
    import_audit_data,
    state_from_dict,
    state_to_dict,
)

__all__ = [
    "state_to_dict",
    "state_from_dict",
    "export_audit_data",
    "import_audit_data",
]
