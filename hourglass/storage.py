"""JSON file storage for settings, session history and preferences.

Every load falls back to defaults when a file is missing or unreadable, and
every write is best-effort: a failure is logged and the caller carries on
with its in-memory state.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Iterable, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from hourglass.models import DurationConfig, Preferences, SessionHistory, SessionRecord

log = logging.getLogger(__name__)

_DATA_DIR = Path.home() / ".config" / "hourglass"
_ENV_HOME = "HOURGLASS_HOME"

SETTINGS_FILE = "settings.json"
HISTORY_FILE = "history.json"
PREFERENCES_FILE = "preferences.json"

M = TypeVar("M", bound=BaseModel)


def default_data_dir() -> Path:
    """Return the storage directory, honouring ``$HOURGLASS_HOME``."""
    override = os.environ.get(_ENV_HOME)
    if override:
        return Path(override).expanduser()
    return _DATA_DIR


class Storage:
    """Key-value style persistence backed by one JSON file per key."""

    def __init__(self, directory: Optional[Path] = None) -> None:
        self.directory = directory if directory is not None else default_data_dir()

    def _path(self, name: str) -> Path:
        return self.directory / name

    def _load(self, name: str, model: type[M]) -> Optional[M]:
        path = self._path(name)
        try:
            if not path.exists():
                return None
            return model.model_validate_json(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, ValidationError, OSError, UnicodeDecodeError) as exc:
            log.warning("Ignoring unreadable %s: %s", path, exc)
            return None

    def _save(self, name: str, data: BaseModel) -> bool:
        path = self._path(name)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_text(data.model_dump_json(indent=2), encoding="utf-8")
        except OSError as exc:
            log.warning("Could not write %s: %s", path, exc)
            return False
        return True

    def _clear(self, name: str) -> None:
        path = self._path(name)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            log.warning("Could not remove %s: %s", path, exc)

    # -- settings ---------------------------------------------------------

    def load_config(self) -> DurationConfig:
        """Load interval lengths, returning defaults if none are stored."""
        config = self._load(SETTINGS_FILE, DurationConfig)
        return config if config is not None else DurationConfig()

    def save_config(self, config: DurationConfig) -> bool:
        return self._save(SETTINGS_FILE, config)

    def clear_config(self) -> None:
        self._clear(SETTINGS_FILE)

    # -- session history ----------------------------------------------------

    def load_ledger(self) -> list[SessionRecord]:
        history = self._load(HISTORY_FILE, SessionHistory)
        return list(history.records) if history is not None else []

    def save_ledger(self, records: Iterable[SessionRecord]) -> bool:
        return self._save(HISTORY_FILE, SessionHistory(records=list(records)))

    def clear_ledger(self) -> None:
        self._clear(HISTORY_FILE)

    # -- preferences --------------------------------------------------------

    def load_preferences(self) -> Preferences:
        preferences = self._load(PREFERENCES_FILE, Preferences)
        return preferences if preferences is not None else Preferences()

    def save_preferences(self, preferences: Preferences) -> bool:
        return self._save(PREFERENCES_FILE, preferences)

    def clear_preferences(self) -> None:
        self._clear(PREFERENCES_FILE)
