"""Settings snapshots that follow edits to the configuration file."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from inspec_exporter.core.config import Settings
from inspec_exporter.core.logging import get_logger

logger = get_logger(__name__)


class SettingsSource:
    """Hands out frozen settings snapshots.

    The config file's mtime is checked on every ``current()`` call and the
    file is re-read when it changed. A request keeps the snapshot it got
    even if a reload happens while it runs. A file that fails to load keeps
    the previous snapshot in place.
    """

    def __init__(self, settings: Settings, path: Optional[Path] = None):
        self.path = path
        self._settings = settings
        self._mtime = self._stat()
        self._lock = threading.Lock()

    @classmethod
    def from_file_or_default(cls, path: Optional[Path] = None) -> "SettingsSource":
        found = Settings.find_config(path)
        if found is None:
            return cls(Settings())
        return cls(Settings.from_yaml(found), found)

    def _stat(self) -> Optional[float]:
        if self.path is None:
            return None
        try:
            return self.path.stat().st_mtime
        except OSError:
            return None

    def current(self) -> Settings:
        if self.path is None:
            return self._settings

        with self._lock:
            mtime = self._stat()
            if mtime is not None and mtime != self._mtime:
                self._reload(mtime)
            return self._settings

    def _reload(self, mtime: float) -> None:
        try:
            settings = Settings.from_yaml(self.path)
        except (OSError, TypeError, yaml.YAMLError, ValidationError) as e:
            logger.warning("config_reload_failed", path=str(self.path), error=str(e))
        else:
            self._settings = settings
            logger.info("config_reloaded", path=str(self.path))
        # Remember the mtime either way so a broken file is not re-read every request
        self._mtime = mtime
