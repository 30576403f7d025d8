"""
Preference stores.

The pane reads and writes a flat key-value store shared with the rest of
the app. Every consumer takes a store as an argument, so tests can hand
in a MemoryPreferenceStore instead of the real one.
"""

import json
import logging
import os
import time
from pathlib import Path
from typing import Any, Optional, Protocol

from PySide6.QtCore import QSettings

from ..config.settings import (
    APP_NAME,
    ORGANIZATION,
    get_preferences_path,
    is_macos,
)


logger = logging.getLogger(__name__)


class PreferenceStore(Protocol):
    """Flat string-keyed store of dynamically typed values."""

    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def remove(self, key: str) -> None: ...

    def keys(self) -> list[str]: ...

    def as_dict(self) -> dict[str, Any]: ...


class MemoryPreferenceStore:
    """Preference store held in a plain dict."""

    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)

    def as_dict(self) -> dict[str, Any]:
        return dict(self._data)


class JsonFilePreferenceStore:
    """
    Preference store persisted as one JSON object on disk.

    The file is loaded on first access and rewritten after every mutation.
    Writes go through a temp file so a crash never leaves half a file.
    """

    def __init__(self, path: Optional[Path] = None):
        self._path = Path(path) if path is not None else get_preferences_path()
        self._data: Optional[dict[str, Any]] = None

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, Any]:
        if self._data is not None:
            return self._data

        self._data = {}
        if not self._path.exists():
            return self._data

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError("preference file root is not an object")
            self._data = data
        except (OSError, ValueError) as e:
            logger.warning("Failed to load preferences from %s: %s", self._path, e)
            self._backup_corrupt_file()

        return self._data

    def _backup_corrupt_file(self) -> None:
        ts = time.strftime("%Y%m%d_%H%M%S")
        bak = self._path.with_name(f"{self._path.name}.bak.{ts}")
        try:
            bak.write_bytes(self._path.read_bytes())
            logger.info("Backed up unreadable preferences to %s", bak)
        except OSError as e:
            logger.warning("Could not back up %s: %s", self._path, e)

    def _save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(self._load(), indent=2, sort_keys=True), encoding="utf-8")
        os.replace(tmp, self._path)

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._load()[key] = value
        self._save()

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save()

    def keys(self) -> list[str]:
        return list(self._load())

    def as_dict(self) -> dict[str, Any]:
        return dict(self._load())


class QSettingsPreferenceStore:
    """
    Preference store backed by QSettings.

    On macOS QSettings maps onto the native user defaults, so enumeration
    also yields keys from the global domain (NS*, Apple*, AK*, ...).
    """

    def __init__(self, settings: Optional[QSettings] = None):
        self._settings = settings if settings is not None else QSettings(ORGANIZATION, APP_NAME)

    def get(self, key: str, default: Any = None) -> Any:
        if not self._settings.contains(key):
            return default
        return self._settings.value(key)

    def set(self, key: str, value: Any) -> None:
        self._settings.setValue(key, value)

    def remove(self, key: str) -> None:
        self._settings.remove(key)

    def keys(self) -> list[str]:
        return list(self._settings.allKeys())

    def as_dict(self) -> dict[str, Any]:
        return {key: self._settings.value(key) for key in self.keys()}

    def sync(self) -> None:
        self._settings.sync()


# Global store instance
_store: Optional[PreferenceStore] = None


def default_store() -> PreferenceStore:
    """
    Get the process-wide preference store, creating it on first use.

    Returns:
        QSettings-backed store on macOS, JSON file store elsewhere
    """
    global _store

    if _store is None:
        if is_macos():
            _store = QSettingsPreferenceStore()
        else:
            _store = JsonFilePreferenceStore()
        logger.debug("Using %s", type(_store).__name__)

    return _store
