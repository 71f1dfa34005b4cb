"""
Project Store

The in-memory authoritative collection of projects, with write-through
persistence.

DESIGN DECISION: The store performs no validation. Forms validate
drafts before anything reaches it; the store trusts what it is given.

Every mutator:
1. Changes the in-memory collection
2. Writes the whole affected collection back to storage
3. Tells the notification scheduler (schedule, or cancel + reschedule)

A failed write is logged by the persistence gateway and otherwise
ignored; the in-memory state stays authoritative for the session.
"""

from typing import Optional
from uuid import UUID

from cosplay_planner.audit import AuditLogger
from cosplay_planner.models.project import Project, ProjectStatus
from cosplay_planner.notifications import NotificationScheduler
from cosplay_planner.services.storage import PlannerPersistence


class ProjectStore:
    """
    Active and archived projects.

    Active projects keep insertion order. Archived projects are kept
    most-recent-first.
    """

    def __init__(
        self,
        persistence: PlannerPersistence,
        scheduler: Optional[NotificationScheduler] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._persistence = persistence
        self._scheduler = scheduler
        self._audit_logger = audit_logger

        self._projects: list[Project] = persistence.load_projects()
        self._archived: list[Project] = persistence.load_archived_projects()

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def projects(self) -> list[Project]:
        return list(self._projects)

    @property
    def archived_projects(self) -> list[Project]:
        return list(self._archived)

    @property
    def all_projects(self) -> list[Project]:
        return [*self._projects, *self._archived]

    def get_project(self, project_id: UUID) -> Optional[Project]:
        """Find an active project by id."""
        for project in self._projects:
            if project.id == project_id:
                return project
        return None

    def is_archived(self, project_id: UUID) -> bool:
        return any(p.id == project_id for p in self._archived)

    def projects_with_status(self, status: ProjectStatus) -> list[Project]:
        return [p for p in self._projects if p.status == status]

    # -------------------------------------------------------------------------
    # Mutators
    # -------------------------------------------------------------------------

    def add_project(self, project: Project) -> None:
        self._projects.append(project)
        self._persistence.save_projects(self._projects)

        if self._audit_logger:
            self._audit_logger.log_project_added(project.id, project.project_name)
        if self._scheduler:
            self._scheduler.schedule_notifications(project)

    def update_project(self, project: Project) -> bool:
        """
        Replace the active project with the same id.

        Returns False (and changes nothing) when no such project exists.
        """
        index = self._index_of(project.id)
        if index is None:
            if self._audit_logger:
                self._audit_logger.log_project_update_skipped(project.id)
            return False

        previous = self._projects[index]
        self._projects[index] = project
        self._persistence.save_projects(self._projects)

        if self._audit_logger:
            self._audit_logger.log_project_updated(project.id, project.project_name)
            if previous.status != project.status:
                self._audit_logger.log_status_changed(
                    project.id, previous.status.value, project.status.value
                )
        if self._scheduler:
            self._scheduler.cancel_notifications(project.id)
            self._scheduler.schedule_notifications(project)
        return True

    def delete_project(self, project: Project) -> None:
        """
        Move a project into the archive.

        The two collections are written one after the other; there is
        no transaction spanning them.
        """
        self._projects = [p for p in self._projects if p.id != project.id]
        self._archived.insert(0, project)

        self._persistence.save_projects(self._projects)
        self._persistence.save_archived_projects(self._archived)

        if self._audit_logger:
            self._audit_logger.log_project_archived(project.id, project.project_name)
        if self._scheduler:
            self._scheduler.cancel_notifications(project.id)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _index_of(self, project_id: UUID) -> Optional[int]:
        for index, project in enumerate(self._projects):
            if project.id == project_id:
                return index
        return None
