"""
Audit Logger

DESIGN DECISION: Every change to expenses and every store read is logged.
This provides:
1. Complete traceability
2. Debugging capability
3. Visibility into rejected submissions

The audit logger:
- Writes structured events through structlog
- Never raises into the calling flow
- Supports correlation IDs to trace related events
"""

import logging
import sys
from collections import deque
from typing import Optional
from uuid import UUID, uuid4

import structlog

from budgeteer.config import get_settings
from budgeteer.models.audit import AuditEvent, AuditSeverity


def configure_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure structlog on top of stdlib logging.

    Called once at import with the application settings; call again to
    switch level or renderer (e.g. console output while debugging).
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level),
        force=True,
    )
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


_settings = get_settings()
configure_logging(_settings.log_level, _settings.json_logs)


class AuditLogger:
    """
    Central audit logging service.

    Routes each AuditEvent to the structured log at a level matching
    its severity.

    Keeps only the most recent `max_events` events in memory.
    """

    def __init__(self, logger_name: str = "budgeteer.audit", max_events: int = 500):
        self._logger = structlog.get_logger(logger_name)
        self._events: deque[AuditEvent] = deque(maxlen=max_events)

    @property
    def events(self) -> list[AuditEvent]:
        """Recent events logged through this instance, oldest first."""
        return list(self._events)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event."""
        self._events.append(event)
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a user action (e.g., opening the dashboard
    for a month). Pass it through all subsequent operations.
    """
    return uuid4()
