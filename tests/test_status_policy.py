"""Tests for status derivation from checklist progress."""

import pytest

from cosplay_planner.models import ProjectStatus
from cosplay_planner.store import apply_status_policy, derive_status


class TestDeriveStatus:
    """Tests for the status rule."""

    def test_planning_to_active_to_completed_and_back(self, make_project, tasks_factory):
        """Planning -> Active -> Completed -> Active, never back to Planning."""
        tasks = tasks_factory(False, False)
        project = make_project(tasks=tasks)
        assert project.status == ProjectStatus.PLANNING

        project = apply_status_policy(project.with_task_toggled(tasks[0].id))
        assert project.status == ProjectStatus.ACTIVE

        project = apply_status_policy(project.with_task_toggled(tasks[1].id))
        assert project.status == ProjectStatus.COMPLETED

        project = apply_status_policy(project.with_task_toggled(tasks[1].id))
        assert project.status == ProjectStatus.ACTIVE

    def test_unchecking_everything_from_completed_gives_active(self, tasks_factory):
        assert derive_status(tasks_factory(False, False), ProjectStatus.COMPLETED) == ProjectStatus.ACTIVE

    @pytest.mark.parametrize("current", [ProjectStatus.PLANNING, ProjectStatus.ACTIVE])
    def test_zero_completed_keeps_status(self, tasks_factory, current):
        assert derive_status(tasks_factory(False, False, False), current) == current

    @pytest.mark.parametrize("current", list(ProjectStatus))
    def test_empty_task_list_keeps_status(self, current):
        assert derive_status([], current) == current

    @pytest.mark.parametrize("current", list(ProjectStatus))
    def test_all_done_is_completed(self, tasks_factory, current):
        assert derive_status(tasks_factory(True), current) == ProjectStatus.COMPLETED

    def test_apply_returns_same_object_when_unchanged(self, make_project, tasks_factory):
        project = make_project(tasks=tasks_factory(False))
        assert apply_status_policy(project) is project
