"""Project store package."""

from cosplay_planner.store.project_store import ProjectStore
from cosplay_planner.store.status_policy import apply_status_policy, derive_status

__all__ = [
    "ProjectStore",
    "apply_status_policy",
    "derive_status",
]
