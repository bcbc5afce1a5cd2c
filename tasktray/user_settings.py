# -*- coding: utf-8 -*-
"""User settings manager for tasktray preferences.

Handles persistence of preferences like theme and seed data to a config
file in the user's home directory.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

from tasktray.logger_config import logger


class UserSettings:
    """Manages user preferences for tasktray.

    Settings are stored in ~/.config/tasktray/settings.json
    """

    DEFAULT_SETTINGS = {
        "theme": "textual-dark",
        "seed_data": True,
        "default_due_days": 7,
    }

    def __init__(self, config_dir: Optional[Path] = None):
        self._settings: Dict[str, Any] = {}
        self._config_dir = Path(config_dir) if config_dir else Path.home() / ".config" / "tasktray"
        self._settings_file = self._config_dir / "settings.json"
        self._load()

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _load(self) -> None:
        """Load settings from file or create with defaults."""
        if self._settings_file.exists():
            try:
                with open(self._settings_file, "r") as f:
                    loaded = json.load(f)
                if not isinstance(loaded, dict):
                    raise ValueError("settings file does not hold an object")
                # Merge with defaults to ensure all keys exist
                self._settings = {**self.DEFAULT_SETTINGS, **loaded}
            except (ValueError, IOError) as e:
                logger.warning(f"Resetting unreadable settings file {self._settings_file}: {e}")
                self._settings = self.DEFAULT_SETTINGS.copy()
                self._save()
        else:
            # First run - create with defaults
            self._settings = self.DEFAULT_SETTINGS.copy()
            self._save()

    def _save(self) -> None:
        """Save current settings to file."""
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
            with open(self._settings_file, "w") as f:
                json.dump(self._settings, f, indent=2)
        except IOError as e:
            # If we can't write, just keep settings in memory
            logger.warning(f"Could not write settings to {self._settings_file}: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value."""
        return self._settings.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a setting value and persist to disk."""
        self._settings[key] = value
        self._save()

    @property
    def theme(self) -> str:
        """Get the current theme."""
        return self._settings.get("theme", self.DEFAULT_SETTINGS["theme"])

    @theme.setter
    def theme(self, value: str) -> None:
        """Set and save the theme."""
        self._settings["theme"] = value
        self._save()

    @property
    def seed_data(self) -> bool:
        """Whether an empty store is filled with sample todos on start."""
        return bool(self._settings.get("seed_data", True))

    @property
    def default_due_days(self) -> int:
        """Days from today used as the default due date for new todos."""
        try:
            return int(self._settings.get("default_due_days", 7))
        except (TypeError, ValueError):
            return self.DEFAULT_SETTINGS["default_due_days"]

    def to_dict(self) -> Dict[str, Any]:
        """Return all settings as a dictionary."""
        return self._settings.copy()


# Global settings instance
_user_settings: Optional[UserSettings] = None


def get_user_settings() -> UserSettings:
    """Get the global user settings instance."""
    global _user_settings
    if _user_settings is None:
        _user_settings = UserSettings()
    return _user_settings
