"""
Audit Logger

DESIGN DECISION: Every side effect in the planner is logged.
Most failures here are deliberately swallowed (a failed save or a
rejected reminder never reaches the user), so the log is the only
place they show up.

The audit logger:
- Is synchronous, like every other planner service
- Keeps a bounded in-memory history for inspection and tests
"""

from collections import deque
from typing import Optional
from uuid import UUID

import structlog

from cosplay_planner.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
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
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Logs events to the structured local log and keeps the most recent
    ones in memory.
    """

    def __init__(self, history_size: int = 200):
        """
        Initialize audit logger.

        Args:
            history_size: How many recent events to keep in memory.
        """
        self._history: deque[AuditEvent] = deque(maxlen=history_size)
        self._logger = structlog.get_logger("cosplay_planner.audit")

    def log(self, event: AuditEvent) -> None:
        """Log an audit event locally and remember it."""
        self._history.append(event)
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """Most recent events, newest first."""
        events = list(self._history)[-limit:]
        events.reverse()
        return events

    # -------------------------------------------------------------------------
    # Convenience wrappers
    # -------------------------------------------------------------------------

    def log_project_added(self, project_id: UUID, project_name: str) -> None:
        self.log(AuditEventBuilder.project_added(project_id, project_name))

    def log_project_updated(self, project_id: UUID, project_name: str) -> None:
        self.log(AuditEventBuilder.project_updated(project_id, project_name))

    def log_project_update_skipped(self, project_id: UUID) -> None:
        self.log(AuditEventBuilder.project_update_skipped(project_id))

    def log_project_archived(self, project_id: UUID, project_name: str) -> None:
        self.log(AuditEventBuilder.project_archived(project_id, project_name))

    def log_status_changed(self, project_id: UUID, old_status: str, new_status: str) -> None:
        self.log(AuditEventBuilder.project_status_changed(project_id, old_status, new_status))

    def log_save_failed(self, key: str, error_message: str) -> None:
        self.log(AuditEventBuilder.collection_save_failed(key, error_message))

    def log_load_failed(self, key: str, error_message: str) -> None:
        self.log(AuditEventBuilder.collection_load_failed(key, error_message))

    def log_validation_failed(self, form: str, issues: list[dict]) -> None:
        self.log(AuditEventBuilder.validation_failed(form, issues))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(error_type, error_message, details))
