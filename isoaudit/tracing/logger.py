"""Event tracing for audit state changes."""

import logging
import sys
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class AuditEventType(str, Enum):
    """Kinds of change recorded for an audit."""

    OMISSION_TOGGLED = "omission_toggled"
    FINDING_UPDATED = "finding_updated"
    INFO_UPDATED = "info_updated"
    SCOPE_UPDATED = "scope_updated"
    TEMPLATE_APPLIED = "template_applied"
    SECTION_TOGGLED = "section_toggled"
    AUDIT_RESET = "audit_reset"
    AUDIT_IMPORTED = "audit_imported"
    CATALOG_LOADED = "catalog_loaded"


@dataclass(frozen=True)
class AuditEvent:
    """One recorded change."""

    event_type: AuditEventType
    message: str
    question_id: str | None = None  # Set for omission and finding events
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        text = f"{self.event_type.value}: {self.message}"
        if self.data:
            text += f" | {self.data}"
        return text


class AuditTracer:
    """Keeps the most recent audit events and logs each one.

    Events go to the "isoaudit.events" logger, which writes to stdout and
    does not propagate, so a root handler never prints them a second time.
    Only the last ``max_events`` events are kept in memory.
    """

    def __init__(self, name: str = "isoaudit.events", max_events: int = 500):
        self.logger = logging.getLogger(name)
        self.logger.propagate = False
        self._setup_handler()
        self.events: deque[AuditEvent] = deque(maxlen=max_events)
        self.enabled = True

    def _setup_handler(self) -> None:
        """Setup console handler with formatting."""
        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("[%(asctime)s] %(levelname)s - %(message)s", datefmt="%H:%M:%S")
            )
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    def record(self, event: AuditEvent) -> None:
        if not self.enabled:
            return
        self.events.append(event)
        self.logger.info("%s", event)

    def get_events(
        self,
        event_type: AuditEventType | None = None,
        question_id: str | None = None,
    ) -> list[AuditEvent]:
        """Get recorded events, oldest first, optionally filtered.

        Args:
            event_type: Only events of this type.
            question_id: Only events about this question.
        """
        return [
            e for e in self.events
            if (event_type is None or e.event_type == event_type)
            and (question_id is None or e.question_id == question_id)
        ]

    def clear(self) -> None:
        self.events.clear()


_tracer: AuditTracer | None = None


def setup_tracing(log_level: str = "INFO", enabled: bool = True, max_events: int = 500) -> AuditTracer:
    """Setup global tracing.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        enabled: Record events at all.
        max_events: Number of recent events kept in memory.

    Returns:
        The configured AuditTracer instance.
    """
    global _tracer
    _tracer = AuditTracer(max_events=max_events)
    _tracer.logger.setLevel(getattr(logging, log_level.upper()))
    _tracer.enabled = enabled
    return _tracer


def get_tracer() -> AuditTracer:
    """Get the global tracer, configured from settings on first use."""
    global _tracer
    if _tracer is None:
        from config.settings import settings

        setup_tracing(settings.log_level, settings.tracing_enabled, settings.trace_buffer_size)
    return _tracer


def log_audit_event(
    event_type: AuditEventType,
    message: str,
    question_id: str | None = None,
    **data: Any,
) -> None:
    """Record an audit event on the global tracer."""
    get_tracer().record(AuditEvent(event_type, message, question_id, data))
