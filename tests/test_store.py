"""Tests for the project store."""

from datetime import timedelta

from cosplay_planner.models import AuditEventType, ProjectStatus
from cosplay_planner.models.notification import reminder_identifier
from cosplay_planner.notifications import NotificationScheduler
from cosplay_planner.services.storage import PlannerPersistence
from cosplay_planner.store import ProjectStore
from tests.conftest import TODAY, FailingStorage


class TestAddProject:
    """Tests for add_project."""

    def test_appends_in_insertion_order(self, store, make_project):
        first, second = make_project(project_name="A"), make_project(project_name="B")
        store.add_project(first)
        store.add_project(second)
        assert [p.project_name for p in store.projects] == ["A", "B"]

    def test_persists_active_collection(self, store, persistence, make_project):
        project = make_project()
        store.add_project(project)
        assert [p.id for p in persistence.load_projects()] == [project.id]

    def test_schedules_reminders(self, store, reminder_center, make_project):
        project = make_project(days_until=10)
        store.add_project(project)
        assert reminder_center.identifiers() == {
            reminder_identifier(project.id, m) for m in (7, 3, 1, 0)
        }

    def test_audited(self, store, audit_logger, make_project):
        project = make_project()
        store.add_project(project)
        types = [e.event_type for e in audit_logger.recent_events()]
        assert AuditEventType.PROJECT_ADDED in types


class TestUpdateProject:
    """Tests for update_project."""

    def test_replaces_by_id(self, store, persistence, make_project):
        project = make_project(budget="100")
        store.add_project(project)

        updated = project.model_copy(update={"budget": "250"})
        assert store.update_project(updated) is True

        assert store.get_project(project.id).budget == "250"
        assert persistence.load_projects()[0].budget == "250"

    def test_unknown_id_is_a_silent_no_op(self, store, storage, make_project, audit_logger):
        store.add_project(make_project(project_name="Known"))
        before = storage.get("savedProjects")

        assert store.update_project(make_project(project_name="Stranger")) is False

        assert [p.project_name for p in store.projects] == ["Known"]
        assert storage.get("savedProjects") == before
        assert audit_logger.recent_events(1)[0].event_type == AuditEventType.PROJECT_UPDATE_SKIPPED

    def test_reschedules_after_date_change(self, store, reminder_center, make_project):
        project = make_project(days_until=10)
        store.add_project(project)

        moved = project.model_copy(update={"event_date": TODAY + timedelta(days=2)})
        store.update_project(moved)

        assert reminder_center.identifiers() == {
            reminder_identifier(project.id, 1),
            reminder_identifier(project.id, 0),
        }
        assert {r.fire_at.date() for r in reminder_center.pending()} == {
            TODAY + timedelta(days=1),
            TODAY + timedelta(days=2),
        }

    def test_logs_status_change(self, store, audit_logger, make_project):
        project = make_project()
        store.add_project(project)
        store.update_project(project.model_copy(update={"status": ProjectStatus.ACTIVE}))

        event = next(
            e for e in audit_logger.recent_events()
            if e.event_type == AuditEventType.PROJECT_STATUS_CHANGED
        )
        assert event.details == {"old_status": "planning", "new_status": "active"}


class TestDeleteProject:
    """Deleting moves a project into the archive."""

    def test_moves_to_front_of_archive(self, store, make_project):
        old, new, kept = make_project(project_name="Old"), make_project(project_name="New"), make_project(project_name="Kept")
        for project in (old, new, kept):
            store.add_project(project)

        store.delete_project(old)
        store.delete_project(new)

        assert [p.project_name for p in store.projects] == ["Kept"]
        assert [p.project_name for p in store.archived_projects] == ["New", "Old"]
        assert store.is_archived(old.id)
        assert not store.is_archived(kept.id)

    def test_persists_both_collections(self, store, persistence, make_project):
        project = make_project()
        store.add_project(project)
        store.delete_project(project)

        assert persistence.load_projects() == []
        assert [p.id for p in persistence.load_archived_projects()] == [project.id]

    def test_cancels_reminders_but_keeps_notifications(self, store, scheduler, reminder_center, make_project):
        project = make_project(days_until=7)
        store.add_project(project)
        assert len(scheduler.notifications) == 1
        assert reminder_center.identifiers()

        store.delete_project(project)

        assert reminder_center.identifiers() == set()
        assert [n.project_id for n in scheduler.notifications] == [project.id]

    def test_archived_project_keeps_expenses_and_tasks(self, store, make_project, expense_factory, tasks_factory):
        project = make_project(expenses=[expense_factory("20")], tasks=tasks_factory(True))
        store.add_project(project)
        store.delete_project(project)

        archived = store.archived_projects[0]
        assert archived.total_spent == 20
        assert archived.completed_tasks_count == 1


class TestReadAccess:
    """Tests for the read side of the store."""

    def test_reload_from_storage(self, store, persistence, scheduler, make_project):
        active, archived = make_project(project_name="Active"), make_project(project_name="Gone")
        store.add_project(active)
        store.add_project(archived)
        store.delete_project(archived)

        reloaded = ProjectStore(persistence, scheduler=scheduler)

        assert [p.id for p in reloaded.projects] == [active.id]
        assert [p.id for p in reloaded.archived_projects] == [archived.id]
        assert [p.id for p in reloaded.all_projects] == [active.id, archived.id]

    def test_projects_with_status(self, store, make_project):
        planning = make_project(project_name="P")
        active = make_project(project_name="A", status=ProjectStatus.ACTIVE)
        store.add_project(planning)
        store.add_project(active)

        assert store.projects_with_status(ProjectStatus.ACTIVE) == [active]
        assert store.projects_with_status(ProjectStatus.PLANNING) == [planning]
        assert store.projects_with_status(ProjectStatus.COMPLETED) == []

    def test_get_project_misses_archived(self, store, make_project):
        project = make_project()
        store.add_project(project)
        store.delete_project(project)
        assert store.get_project(project.id) is None

    def test_returned_lists_are_copies(self, store, make_project):
        store.add_project(make_project())
        store.projects.clear()
        assert len(store.projects) == 1

    def test_works_without_scheduler(self, persistence, make_project):
        store = ProjectStore(persistence)
        project = make_project()
        store.add_project(project)
        store.delete_project(project)
        assert store.archived_projects == [project]


class TestStorageFailures:
    """Storage errors never reach the caller."""

    def test_mutations_succeed_in_memory(self, storage_settings, reminder_center, clock, reminder_settings, audit_logger, make_project):
        failing = FailingStorage()
        persistence = PlannerPersistence(failing, settings=storage_settings, audit_logger=audit_logger)
        scheduler = NotificationScheduler(
            persistence, reminder_center, clock=clock, settings=reminder_settings
        )
        store = ProjectStore(persistence, scheduler=scheduler, audit_logger=audit_logger)

        project = make_project()
        store.add_project(project)
        store.update_project(project.model_copy(update={"budget": "1"}))
        store.delete_project(project)

        assert store.projects == []
        assert len(store.archived_projects) == 1
        assert failing.write_attempts == 4
        failures = [
            e for e in audit_logger.recent_events()
            if e.event_type == AuditEventType.COLLECTION_SAVE_FAILED
        ]
        assert len(failures) == 4
