"""
Audit Models for the Cosplay Planner

Every side effect of the store and the scheduler is recorded as an
audit event. This provides:
1. Traceability of what happened to a project
2. Debugging information when a silent failure was swallowed
3. A visible trail for failures the user is never shown

DESIGN DECISION: Audit events are append-only. We never modify them.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Project store
    PROJECT_ADDED = "project_added"
    PROJECT_UPDATED = "project_updated"
    PROJECT_UPDATE_SKIPPED = "project_update_skipped"
    PROJECT_ARCHIVED = "project_archived"
    PROJECT_STATUS_CHANGED = "project_status_changed"

    # Reminders
    PERMISSION_REQUESTED = "permission_requested"
    REMINDER_REGISTERED = "reminder_registered"
    REMINDER_REGISTRATION_FAILED = "reminder_registration_failed"
    REMINDERS_CANCELLED = "reminders_cancelled"

    # Notification list
    NOTIFICATION_MATERIALIZED = "notification_materialized"
    NOTIFICATION_DELETED = "notification_deleted"
    NOTIFICATION_READ = "notification_read"

    # Persistence
    COLLECTION_LOAD_FAILED = "collection_load_failed"
    COLLECTION_SAVE_FAILED = "collection_save_failed"

    # Forms
    VALIDATION_FAILED = "validation_failed"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'project', 'notification', 'collection')"
    )
    entity_id: Optional[UUID] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.project_added(project.id, project.project_name)
        event = AuditEventBuilder.collection_save_failed("savedProjects", str(exc))
    """

    @staticmethod
    def project_added(project_id: UUID, project_name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PROJECT_ADDED,
            entity_type="project",
            entity_id=project_id,
            description=f"Project added: {project_name}",
            details={"project_name": project_name},
        )

    @staticmethod
    def project_updated(project_id: UUID, project_name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PROJECT_UPDATED,
            entity_type="project",
            entity_id=project_id,
            description=f"Project updated: {project_name}",
            details={"project_name": project_name},
        )

    @staticmethod
    def project_update_skipped(project_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PROJECT_UPDATE_SKIPPED,
            severity=AuditSeverity.DEBUG,
            entity_type="project",
            entity_id=project_id,
            description="Update ignored: no active project with this id",
        )

    @staticmethod
    def project_archived(project_id: UUID, project_name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PROJECT_ARCHIVED,
            entity_type="project",
            entity_id=project_id,
            description=f"Project archived: {project_name}",
            details={"project_name": project_name},
        )

    @staticmethod
    def project_status_changed(
        project_id: UUID,
        old_status: str,
        new_status: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PROJECT_STATUS_CHANGED,
            entity_type="project",
            entity_id=project_id,
            description=f"Status changed: {old_status} -> {new_status}",
            details={"old_status": old_status, "new_status": new_status},
        )

    @staticmethod
    def permission_requested(granted: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PERMISSION_REQUESTED,
            severity=AuditSeverity.INFO if granted else AuditSeverity.WARNING,
            description=(
                "Notification permission granted"
                if granted
                else "Notification permission not granted"
            ),
            details={"granted": granted},
        )

    @staticmethod
    def reminder_registered(
        project_id: UUID,
        identifier: str,
        fire_at: datetime,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REMINDER_REGISTERED,
            entity_type="project",
            entity_id=project_id,
            description=f"Reminder {identifier} scheduled for {fire_at.isoformat()}",
            details={"identifier": identifier, "fire_at": fire_at.isoformat()},
        )

    @staticmethod
    def reminder_registration_failed(
        project_id: UUID,
        identifier: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REMINDER_REGISTRATION_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="project",
            entity_id=project_id,
            description=f"Reminder {identifier} could not be scheduled",
            details={"identifier": identifier},
            error_message=error_message,
        )

    @staticmethod
    def reminders_cancelled(
        project_id: UUID,
        identifiers: list[str],
        error_message: Optional[str] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REMINDERS_CANCELLED,
            severity=AuditSeverity.ERROR if error_message else AuditSeverity.INFO,
            entity_type="project",
            entity_id=project_id,
            description=f"Cancelled {len(identifiers)} pending reminders",
            details={"identifiers": identifiers},
            error_message=error_message,
        )

    @staticmethod
    def notification_materialized(
        notification_id: UUID,
        project_id: UUID,
        days_left: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.NOTIFICATION_MATERIALIZED,
            entity_type="notification",
            entity_id=notification_id,
            description=f"Notification added: {days_left} days left",
            details={"project_id": str(project_id), "days_left": days_left},
        )

    @staticmethod
    def notification_deleted(notification_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.NOTIFICATION_DELETED,
            entity_type="notification",
            entity_id=notification_id,
            description="Notification deleted",
        )

    @staticmethod
    def notification_read(notification_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.NOTIFICATION_READ,
            entity_type="notification",
            entity_id=notification_id,
            description="Notification marked as read",
        )

    @staticmethod
    def collection_load_failed(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COLLECTION_LOAD_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="collection",
            description=f"Could not decode '{key}', starting with an empty collection",
            details={"key": key},
            error_message=error_message,
        )

    @staticmethod
    def collection_save_failed(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COLLECTION_SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="collection",
            description=f"Could not save '{key}'",
            details={"key": key},
            error_message=error_message,
        )

    @staticmethod
    def validation_failed(form: str, issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="form",
            description=f"{form.capitalize()} form rejected with {len(issues)} issues",
            details={"form": form, "issues": issues},
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            details=details or {},
            error_message=error_message,
        )
