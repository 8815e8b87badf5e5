"""
Centralized path management for family-agenda.

Resolves the per-user working directory and the files kept inside it.
"""

import os
import sys
from pathlib import Path
from typing import Optional
import logging


class PathManager:
    """Manages family-agenda file paths."""

    APP_DIR_NAME = "family-agenda"
    HOME_ENV_VAR = "FAMILY_AGENDA_HOME"

    # File names
    CONFIG_FILE = "config.json"
    STORE_FILE = "reminders.json"

    def __init__(self, logger: Optional[logging.Logger] = None):
        """Initialize path manager."""
        self.logger = logger or logging.getLogger(__name__)
        self._working_dir: Optional[Path] = None

    def _default_user_dir(self) -> Path:
        """Platform-appropriate per-user data directory."""
        if sys.platform == "darwin":
            return Path.home() / "Library" / "Application Support" / self.APP_DIR_NAME
        if sys.platform.startswith("win"):
            appdata = os.environ.get("APPDATA")
            if appdata:
                return Path(appdata) / self.APP_DIR_NAME
            return Path.home() / "AppData" / "Roaming" / self.APP_DIR_NAME
        return Path.home() / ".config" / self.APP_DIR_NAME

    @property
    def working_dir(self) -> Path:
        """
        Get the working directory for family-agenda data.

        Priority order:
        1. FAMILY_AGENDA_HOME environment variable (explicit override)
        2. Platform user data directory (~/.config/family-agenda on Linux)
        """
        if self._working_dir is not None:
            return self._working_dir

        env_override = os.environ.get(self.HOME_ENV_VAR)
        if env_override:
            env_path = Path(env_override).expanduser().resolve()
            self.logger.debug("Using %s override: %s", self.HOME_ENV_VAR, env_path)
            self._working_dir = env_path
        else:
            self._working_dir = self._default_user_dir()

        return self._working_dir

    def ensure_directories(self) -> None:
        """Ensure the working directory exists."""
        self.working_dir.mkdir(parents=True, exist_ok=True)
        self.logger.debug("Ensured directory exists: %s", self.working_dir)

    @property
    def config_path(self) -> Path:
        """Get the configuration file path."""
        return self.working_dir / self.CONFIG_FILE

    @property
    def store_path(self) -> Path:
        """Get the default reminder snapshot file path."""
        return self.working_dir / self.STORE_FILE


# Global instance for convenience
_path_manager = None


def get_path_manager() -> PathManager:
    """Get or create the global PathManager instance."""
    global _path_manager
    if _path_manager is None:
        _path_manager = PathManager()
    return _path_manager


def reset_path_manager() -> None:
    """Drop the cached PathManager so the next call re-reads the environment."""
    global _path_manager
    _path_manager = None
