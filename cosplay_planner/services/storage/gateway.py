"""
Planner Persistence Gateway

Loads and saves the three planner collections as whole JSON arrays:

    savedProjects       active projects, insertion order
    archivedProjects    archived projects, most recent first
    savedNotifications  materialized notifications, most recent first

Records use pydantic's field-named JSON encoding; a cover image is
embedded in its project as base64.

ERROR POLICY:
- A blob that cannot be read or decoded loads as an empty collection
- A failed save is logged and reported as False, never raised

Neither case is ever shown to the user.
"""

from collections.abc import Iterable
from typing import Callable, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError

from cosplay_planner.audit import AuditLogger
from cosplay_planner.config import StorageSettings, get_settings
from cosplay_planner.models.notification import AppNotification
from cosplay_planner.models.project import Project
from cosplay_planner.services.storage.interface import (
    DecodeError,
    KeyValueStorageInterface,
    StorageError,
)


T = TypeVar("T")

_PROJECT_LIST = TypeAdapter(list[Project])
_NOTIFICATION_LIST = TypeAdapter(list[AppNotification])


def encode_projects(projects: Iterable[Project]) -> bytes:
    return _PROJECT_LIST.dump_json(list(projects))


def decode_projects(blob: bytes) -> list[Project]:
    try:
        return _PROJECT_LIST.validate_json(blob)
    except ValidationError as e:
        raise DecodeError(f"Invalid project collection: {e}") from e


def encode_notifications(notifications: Iterable[AppNotification]) -> bytes:
    return _NOTIFICATION_LIST.dump_json(list(notifications))


def decode_notifications(blob: bytes) -> list[AppNotification]:
    try:
        return _NOTIFICATION_LIST.validate_json(blob)
    except ValidationError as e:
        raise DecodeError(f"Invalid notification collection: {e}") from e


class PlannerPersistence:
    """
    Reads and writes the planner's collections through a key-value store.

    Every save rewrites the whole collection under its key.
    """

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        settings: Optional[StorageSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._settings = settings or get_settings().storage
        self._audit_logger = audit_logger

    @property
    def storage(self) -> KeyValueStorageInterface:
        return self._storage

    # -------------------------------------------------------------------------
    # Collections
    # -------------------------------------------------------------------------

    def load_projects(self) -> list[Project]:
        return self._load(self._settings.projects_key, decode_projects)

    def save_projects(self, projects: Iterable[Project]) -> bool:
        return self._save(self._settings.projects_key, encode_projects(projects))

    def load_archived_projects(self) -> list[Project]:
        return self._load(self._settings.archive_key, decode_projects)

    def save_archived_projects(self, projects: Iterable[Project]) -> bool:
        return self._save(self._settings.archive_key, encode_projects(projects))

    def load_notifications(self) -> list[AppNotification]:
        return self._load(self._settings.notifications_key, decode_notifications)

    def save_notifications(self, notifications: Iterable[AppNotification]) -> bool:
        return self._save(
            self._settings.notifications_key,
            encode_notifications(notifications),
        )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _load(self, key: str, decode: Callable[[bytes], list[T]]) -> list[T]:
        try:
            blob = self._storage.get(key)
        except StorageError as e:
            self._log_load_failed(key, str(e))
            return []

        if blob is None:
            return []

        try:
            return decode(blob)
        except DecodeError as e:
            self._log_load_failed(key, str(e))
            return []

    def _save(self, key: str, blob: bytes) -> bool:
        try:
            self._storage.set(key, blob)
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_save_failed(key, str(e))
            return False
        return True

    def _log_load_failed(self, key: str, error_message: str) -> None:
        if self._audit_logger:
            self._audit_logger.log_load_failed(key, error_message)
