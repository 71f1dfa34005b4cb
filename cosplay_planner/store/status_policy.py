"""
Project status derivation.

Status follows checklist progress once a project has tasks:

    all tasks done          -> COMPLETED
    some (not all) done     -> ACTIVE
    none done, COMPLETED    -> ACTIVE
    none done, otherwise    -> unchanged

Nothing ever moves a project back into PLANNING. A fresh project stays
in PLANNING until its first task is checked.
"""

from collections.abc import Sequence

from cosplay_planner.models.project import ChecklistTask, Project, ProjectStatus


def derive_status(tasks: Sequence[ChecklistTask], current: ProjectStatus) -> ProjectStatus:
    if not tasks:
        return current

    completed = sum(1 for task in tasks if task.is_completed)
    if completed == len(tasks):
        return ProjectStatus.COMPLETED
    if completed > 0:
        return ProjectStatus.ACTIVE
    if current == ProjectStatus.COMPLETED:
        return ProjectStatus.ACTIVE
    return current


def apply_status_policy(project: Project) -> Project:
    """The project with its derived status (the same object if unchanged)."""
    status = derive_status(project.tasks, project.status)
    if status == project.status:
        return project
    return project.model_copy(update={"status": status})
