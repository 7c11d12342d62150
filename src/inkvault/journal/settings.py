"""Persisted journal settings — the location of the entry directory.

The settings file is a small YAML document:

    journal_dir: /home/me/Journals

Only the directory path is managed here; everything else about the engine is
read from ``inkvault.core.config.Config``.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from loguru import logger

from inkvault.core.exceptions import SettingsError


class JournalSettings:
    """Loads and saves the journal directory setting.

    A missing, unreadable, or dangling ``journal_dir`` falls back to
    ``default_journal_dir``; the corrected value is written back on load.
    """

    def __init__(self, settings_file: str | Path, default_journal_dir: str | Path):
        self.settings_file = Path(settings_file).expanduser()
        self.default_journal_dir = Path(default_journal_dir).expanduser()
        self._journal_dir: Path = self.default_journal_dir
        self.load()

    @property
    def journal_dir(self) -> Path:
        return self._journal_dir

    @journal_dir.setter
    def journal_dir(self, value: str | Path) -> None:
        self._journal_dir = Path(value).expanduser()

    def _read(self) -> dict:
        if not self.settings_file.exists():
            return {}
        try:
            with open(self.settings_file, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Could not load settings from {self.settings_file}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> None:
        """Read the settings file, repairing it when the stored path is unusable."""
        stored = self._read().get("journal_dir")
        if stored and Path(str(stored)).expanduser().is_dir():
            self._journal_dir = Path(str(stored)).expanduser()
            return

        if stored:
            logger.warning(f"Journal directory '{stored}' not found, using default {self.default_journal_dir}")
        self._journal_dir = self.default_journal_dir
        self.ensure_journal_dir()
        try:
            self.save()
        except SettingsError as e:
            logger.warning(f"Could not persist default settings: {e}")

    def save(self) -> None:
        """Write the settings file.

        Raises:
            SettingsError: The file could not be written.
        """
        data = {"journal_dir": str(self._journal_dir)}
        try:
            self.settings_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.settings_file, "w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise SettingsError(f"Failed to save settings to {self.settings_file}: {e}") from e
        logger.debug(f"Saved settings to {self.settings_file}")

    def ensure_journal_dir(self) -> Path:
        """Create the journal directory if it does not exist."""
        try:
            self._journal_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Could not create journal directory '{self._journal_dir}': {e}")
        return self._journal_dir
