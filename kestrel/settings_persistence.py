"""Settings persistence for per-document editor state.

The editor remembers where the cursor was when a file was last closed.
Settings are stored in an OS-appropriate location and survive application restarts.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

CURSOR_ROW = "cursor_row"
CURSOR_COL = "cursor_col"


class SettingsPersistence:
    """Manages persistent storage of per-document settings.

    Settings are stored in a JSON file in the user's config directory,
    indexed by the absolute path of the document being edited.
    """

    def __init__(self, config_dir: Optional[str] = None):
        self._config_dir = Path(config_dir or platformdirs.user_config_dir(EditorConstants.APP_NAME))
        self._settings_file = self._config_dir / "settings.json"
        self._settings_cache: Optional[Dict[str, Dict[str, Any]]] = None

    def _ensure_config_dir(self) -> None:
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")

    def _load_all_settings(self) -> Dict[str, Dict[str, Any]]:
        """Load all settings from disk.

        Returns:
            Dictionary mapping document paths to their settings.
            Returns empty dict if file doesn't exist or can't be read.
        """
        if self._settings_cache is not None:
            return self._settings_cache

        if not self._settings_file.exists():
            self._settings_cache = {}
            return self._settings_cache

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            data = {}

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            data = {}
        self._settings_cache = data
        return self._settings_cache

    def _save_all_settings(self, settings: Dict[str, Dict[str, Any]]) -> bool:
        """Write all settings atomically (temp file + rename).

        Returns:
            True if save was successful, False otherwise.
        """
        self._ensure_config_dir()
        temp_file = self._settings_file.with_suffix(EditorConstants.ATOMIC_SAVE_SUFFIX)
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2)
            temp_file.replace(self._settings_file)
            self._settings_cache = settings
            return True
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

    def load_settings(self, document_path: Optional[str]) -> Dict[str, Any]:
        """Settings stored for ``document_path``; empty when there are none."""
        if document_path is None:
            return {}
        abs_path = os.path.abspath(document_path)
        doc_settings = self._load_all_settings().get(abs_path, {})
        if not isinstance(doc_settings, dict):
            logger.warning(f"Settings for {abs_path} are not a dict, ignoring")
            return {}
        return doc_settings.copy()

    def save_settings(self, document_path: Optional[str], settings: Dict[str, Any]) -> bool:
        """Replace the settings stored for ``document_path``."""
        if document_path is None:
            return False
        abs_path = os.path.abspath(document_path)
        all_settings = dict(self._load_all_settings())
        all_settings[abs_path] = settings
        return self._save_all_settings(all_settings)

    def load_cursor(self, document_path: Optional[str]) -> Optional[Tuple[int, int]]:
        """Last saved ``(row, col)`` for the document, if valid."""
        settings = self.load_settings(document_path)
        row, col = settings.get(CURSOR_ROW), settings.get(CURSOR_COL)
        if not (self.validate_setting(CURSOR_ROW, row) and self.validate_setting(CURSOR_COL, col)):
            return None
        if row is None or col is None:
            return None
        return row, col

    def save_cursor(self, document_path: Optional[str], row: int, col: int) -> bool:
        settings = self.load_settings(document_path)
        settings[CURSOR_ROW] = row
        settings[CURSOR_COL] = col
        return self.save_settings(document_path, settings)

    def validate_setting(self, key: str, value: Any) -> bool:
        """Check the type of a known setting; unknown keys are accepted."""
        if value is None:
            return True  # None means "not set"
        if key in (CURSOR_ROW, CURSOR_COL):
            # bool is an int subclass but never a valid position
            return isinstance(value, int) and not isinstance(value, bool) and value >= 0
        return True

    def clear_cache(self) -> None:
        """Clear the in-memory cache of settings."""
        self._settings_cache = None


# Global instance
_persistence: Optional[SettingsPersistence] = None


def get_persistence() -> SettingsPersistence:
    """Get the global settings persistence instance."""
    global _persistence
    if _persistence is None:
        _persistence = SettingsPersistence()
    return _persistence
