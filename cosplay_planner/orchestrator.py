"""
Main Orchestrator for the Cosplay Planner

This module ties the components together and defines the flows the
screens drive:
1. Project creation (draft -> validate -> build -> store -> schedule)
2. Project editing (local copy -> edit -> sync -> status policy on close)
3. Notifications screen (catch-up scan -> list)
4. Statistics screens (general + per project)

DESIGN DECISION: Services are constructed explicitly and passed in.
There are no process-wide singletons; create_app_components is the one
place that decides which storage and reminder backends are used.

The orchestrator enforces the boundaries:
- Nothing reaches the store without passing form validation
- Status is derived from tasks when the editing context is left
- Every step is audited
"""

import logging
from typing import Optional
from uuid import UUID

from cosplay_planner.audit import AuditLogger
from cosplay_planner.config import AppSettings, Settings, get_settings
from cosplay_planner.models.forms import (
    ExpenseDraft,
    ProjectDraft,
    TaskDraft,
    ValidationResult,
)
from cosplay_planner.models.notification import AppNotification
from cosplay_planner.models.project import Project
from cosplay_planner.models.statistics import GeneralStatistics, ProjectStatsRow
from cosplay_planner.notifications import NotificationScheduler
from cosplay_planner.reports import general_statistics, project_statistics
from cosplay_planner.services.clock import Clock, SystemClock
from cosplay_planner.services.image import CoverImageCodec
from cosplay_planner.services.reminders import (
    InMemoryReminderCenter,
    ReminderCenterInterface,
    SchedulerReminderCenter,
)
from cosplay_planner.services.storage import (
    FileKeyValueStorage,
    InMemoryKeyValueStorage,
    KeyValueStorageInterface,
    PlannerPersistence,
)
from cosplay_planner.store import ProjectStore, apply_status_policy
from cosplay_planner.validation import PlannerFormValidator


class ProjectEditFlow:
    """
    Orchestrates editing one project.

    Flow:
    1. Open -> take a local copy of the project
    2. Edit -> details, expenses, tasks (each change is synced to the store)
    3. Close -> apply the status policy, sync once more

    Task toggles do not change the status until the flow is closed.
    Form edits return the ValidationResult; an invalid form changes
    nothing.
    """

    def __init__(
        self,
        project: Project,
        store: ProjectStore,
        validator: PlannerFormValidator,
    ):
        self._project = project
        self._store = store
        self._validator = validator
        self._closed = False

    @property
    def project(self) -> Project:
        return self._project

    # -------------------------------------------------------------------------
    # Details
    # -------------------------------------------------------------------------

    def update_details(self, draft: ProjectDraft) -> ValidationResult:
        result = self._validator.validate_project_draft(draft)
        if result.is_valid:
            self._sync(self._validator.apply_project_draft(self._project, draft))
        return result

    # -------------------------------------------------------------------------
    # Expenses
    # -------------------------------------------------------------------------

    def add_expense(self, draft: ExpenseDraft) -> ValidationResult:
        result = self._validator.validate_expense_draft(draft, self._project)
        if result.is_valid:
            expense = self._validator.build_expense(draft)
            self._sync(self._project.with_expense(expense))
        return result

    def edit_expense(self, expense_id: UUID, draft: ExpenseDraft) -> ValidationResult:
        result = self._validator.validate_expense_draft(draft)
        if not result.is_valid:
            return result

        for expense in self._project.expenses:
            if expense.id == expense_id:
                edited = self._validator.apply_expense_draft(expense, draft)
                self._sync(self._project.with_expense_replaced(edited))
                break
        return result

    def remove_expense(self, expense_id: UUID) -> None:
        self._sync(self._project.without_expense(expense_id))

    # -------------------------------------------------------------------------
    # Checklist
    # -------------------------------------------------------------------------

    def add_task(self, draft: TaskDraft) -> ValidationResult:
        result = self._validator.validate_task_draft(draft)
        if result.is_valid:
            self._sync(self._project.with_task(self._validator.build_task(draft)))
        return result

    def toggle_task(self, task_id: UUID) -> None:
        self._sync(self._project.with_task_toggled(task_id))

    def remove_task(self, task_id: UUID) -> None:
        self._sync(self._project.without_task(task_id))

    # -------------------------------------------------------------------------
    # Leaving the screen
    # -------------------------------------------------------------------------

    def close(self) -> Project:
        """Leave the editing context; the status policy runs here."""
        if not self._closed:
            self._closed = True
            updated = apply_status_policy(self._project)
            self._sync(updated)
        return self._project

    def delete(self) -> None:
        """Archive the project and end the flow."""
        self._closed = True
        self._store.delete_project(self._project)

    def _sync(self, project: Project) -> None:
        self._project = project
        self._store.update_project(project)


class PlannerApp:
    """
    The composition root handed to the screens.

    Owns the store, the notification scheduler and the validator, and
    exposes the operations the screens call.
    """

    def __init__(
        self,
        store: ProjectStore,
        scheduler: NotificationScheduler,
        validator: PlannerFormValidator,
        reminder_center: ReminderCenterInterface,
        clock: Optional[Clock] = None,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[AppSettings] = None,
    ):
        self.store = store
        self.scheduler = scheduler
        self.validator = validator
        self.reminder_center = reminder_center
        self.clock = clock or SystemClock()
        self.audit_logger = audit_logger
        self._settings = settings or get_settings().app
        self._started = False

    def start(self) -> bool:
        """
        Request reminder permission and re-register the reminders of
        every active project. Only the first call does anything.

        The delivery backend may not keep pending reminders across
        restarts. Registration replaces by identifier and due milestones
        are deduplicated, so re-registering is idempotent.
        """
        if self._started:
            return False
        self._started = True
        granted = self.scheduler.request_permission()
        for project in self.store.projects:
            self.scheduler.schedule_notifications(project)
        return granted

    # -------------------------------------------------------------------------
    # Projects
    # -------------------------------------------------------------------------

    def create_project(self, draft: ProjectDraft) -> tuple[Optional[Project], ValidationResult]:
        """
        Validate a new-project form and add the project.

        Returns (project, result); project is None when the form has errors.
        """
        result = self.validator.validate_project_draft(draft)
        if not result.is_valid:
            return None, result

        project = self.validator.build_project(draft)
        self.store.add_project(project)
        return project, result

    def edit_project(self, project_id: UUID) -> Optional[ProjectEditFlow]:
        project = self.store.get_project(project_id)
        if project is None:
            return None
        return ProjectEditFlow(project, self.store, self.validator)

    # -------------------------------------------------------------------------
    # Notifications
    # -------------------------------------------------------------------------

    def open_notifications(self) -> list[AppNotification]:
        """Run the catch-up scan, then return the list (most recent first)."""
        self.scheduler.check_and_add_due_notifications(self.store.projects)
        return self.scheduler.notifications

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    def general_statistics(self) -> GeneralStatistics:
        if self._settings.statistics_include_archived:
            projects = self.store.all_projects
        else:
            projects = self.store.projects
        return general_statistics(projects, self.clock.now())

    def project_statistics(self) -> list[ProjectStatsRow]:
        return project_statistics(self.store.projects, self.store.archived_projects)

    def shutdown(self) -> None:
        if isinstance(self.reminder_center, SchedulerReminderCenter):
            self.reminder_center.shutdown()


def create_app_components(
    settings: Optional[Settings] = None,
    clock: Optional[Clock] = None,
    storage: Optional[KeyValueStorageInterface] = None,
    reminder_center: Optional[ReminderCenterInterface] = None,
) -> PlannerApp:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to build from. Defaults to get_settings().
        clock: Clock for every time-dependent service.
        storage: Key-value store. Chosen by PLANNER_STORAGE_BACKEND if None.
        reminder_center: Delivery facility. Chosen by
                         PLANNER_REMINDER_BACKEND if None.

    Returns:
        A PlannerApp with its collections loaded from storage.
    """
    settings = settings or get_settings()
    clock = clock or SystemClock()

    logging.getLogger("cosplay_planner").setLevel(settings.app.log_level)
    audit_logger = AuditLogger(history_size=settings.app.audit_history_size)

    if storage is None:
        if settings.storage.backend == "memory":
            storage = InMemoryKeyValueStorage()
        else:
            storage = FileKeyValueStorage(
                directory=settings.storage.directory,
                durable=settings.storage.durable_writes,
            )

    if reminder_center is None:
        if settings.reminders.backend == "memory":
            reminder_center = InMemoryReminderCenter()
        else:
            reminder_center = SchedulerReminderCenter()

    persistence = PlannerPersistence(
        storage,
        settings=settings.storage,
        audit_logger=audit_logger,
    )
    scheduler = NotificationScheduler(
        persistence,
        reminder_center,
        clock=clock,
        settings=settings.reminders,
        audit_logger=audit_logger,
    )
    store = ProjectStore(persistence, scheduler=scheduler, audit_logger=audit_logger)
    validator = PlannerFormValidator(
        image_codec=CoverImageCodec(settings.image),
        audit_logger=audit_logger,
        clock=clock,
    )

    return PlannerApp(
        store=store,
        scheduler=scheduler,
        validator=validator,
        reminder_center=reminder_center,
        clock=clock,
        audit_logger=audit_logger,
        settings=settings.app,
    )
