"""
File-backed Key-Value Storage

DESIGN DECISION: Each collection key is stored as its own JSON file
(<directory>/<key>.json) because:
1. The three collections are written independently
2. A user can open and inspect the files directly
3. A whole-file atomic replace matches "write the whole collection
   after each mutation"

TRADEOFFS:
- No transaction spans two keys (archiving writes two files)
- Rewrites the whole collection on every save (fine for personal use)

Writes go to a temp file in the same directory and are renamed into
place, so a crash mid-write leaves the previous file intact.
"""

import os
import re
from pathlib import Path
from typing import Optional
from uuid import uuid4

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from cosplay_planner.config import get_settings
from cosplay_planner.services.storage.interface import (
    KeyValueStorageInterface,
    StorageError,
    StorageUnavailableError,
)


_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")
_SUFFIX = ".json"


class FileKeyValueStorage(KeyValueStorageInterface):
    """
    Directory of JSON files, one per key.

    Transient OS errors on write (e.g. a file briefly locked by a
    backup tool) are retried a few times before giving up.
    """

    def __init__(
        self,
        directory: Optional[Path] = None,
        durable: Optional[bool] = None,
    ):
        settings = get_settings().storage
        self._directory = Path(directory) if directory is not None else settings.directory
        self._durable = settings.durable_writes if durable is None else durable

    @property
    def directory(self) -> Path:
        return self._directory

    def _path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key) or key.startswith("."):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self._directory / f"{key}{_SUFFIX}"

    def get(self, key: str) -> Optional[bytes]:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_bytes()
        except OSError as e:
            raise StorageUnavailableError(f"Failed to read {path}: {e}") from e

    def set(self, key: str, value: bytes) -> None:
        path = self._path_for(key)
        try:
            self._write_atomic(path, value)
        except OSError as e:
            raise StorageUnavailableError(f"Failed to write {path}: {e}") from e

    def delete(self, key: str) -> bool:
        path = self._path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageUnavailableError(f"Failed to delete {path}: {e}") from e
        return True

    def keys(self) -> list[str]:
        if not self._directory.is_dir():
            return []
        return sorted(
            path.stem
            for path in self._directory.iterdir()
            if path.is_file() and path.suffix == _SUFFIX and not path.name.startswith(".")
        )

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.05, max=0.5),
        retry=retry_if_exception_type(OSError),
        reraise=True,
    )
    def _write_atomic(self, path: Path, value: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = path.parent / f".{path.name}.{uuid4().hex}.tmp"
        try:
            with temp_path.open("wb") as handle:
                handle.write(value)
                handle.flush()
                if self._durable:
                    os.fsync(handle.fileno())
            temp_path.replace(path)
        finally:
            temp_path.unlink(missing_ok=True)
