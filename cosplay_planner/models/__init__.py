"""
Data Models Package

This package contains all Pydantic models used in the Cosplay Planner.
All data flowing through the system must conform to these schemas.
"""

from cosplay_planner.models.project import (
    ChecklistTask,
    Expense,
    ExpenseCategory,
    Project,
    ProjectStatus,
    parse_decimal_text,
)
from cosplay_planner.models.notification import (
    DEFAULT_REMINDER_TITLE,
    MILESTONE_DAYS,
    AppNotification,
    ReminderRequest,
    ScheduleResult,
    reminder_identifier,
    reminder_message,
)
from cosplay_planner.models.forms import (
    ExpenseDraft,
    ProjectDraft,
    TaskDraft,
    ValidationIssue,
    ValidationResult,
)
from cosplay_planner.models.statistics import (
    CategoryShare,
    CategoryTotal,
    GeneralStatistics,
    MonthlyTotal,
    ProjectStatsRow,
)
from cosplay_planner.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Project models
    "ChecklistTask",
    "Expense",
    "ExpenseCategory",
    "Project",
    "ProjectStatus",
    "parse_decimal_text",
    # Notification models
    "DEFAULT_REMINDER_TITLE",
    "MILESTONE_DAYS",
    "AppNotification",
    "ReminderRequest",
    "ScheduleResult",
    "reminder_identifier",
    "reminder_message",
    # Form models
    "ExpenseDraft",
    "ProjectDraft",
    "TaskDraft",
    "ValidationIssue",
    "ValidationResult",
    # Statistics models
    "CategoryShare",
    "CategoryTotal",
    "GeneralStatistics",
    "MonthlyTotal",
    "ProjectStatsRow",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
