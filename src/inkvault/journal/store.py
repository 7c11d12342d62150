"""Encrypted journal store — a directory of one encrypted file per day.

File names are ``{YYYY-MM-DD}.txt`` in the store's calendar. Files whose names
do not decode to a valid date are ignored, so foreign files can live in the
same directory without breaking listings.

Every listing rescans the directory: another process, or a migration, may
have changed it since the last call.
"""

from __future__ import annotations

import os
from datetime import date
from itertools import groupby
from pathlib import Path
from typing import Protocol, runtime_checkable

from loguru import logger

from inkvault.core.crypto import EncryptionCodec
from inkvault.core.exceptions import (
    AuthenticationFailedError,
    EntryExistsError,
    EntryNotFoundError,
    JournalIOError,
)
from inkvault.core.utils.file_io import safe_write_bytes

from .calendar import CalendarCodec, PersianCalendar
from .models import ENTRY_SUFFIX, EntryGroup, JournalEntry, Mood
from .settings import JournalSettings
from .template import render_entry_header


@runtime_checkable
class JournalStore(Protocol):
    """Protocol for password-protected journal backends."""

    def list_entries(self, current_year_only: bool = False) -> list[JournalEntry]:
        """Return entries, newest first."""
        ...

    def read_entry(self, file_name: str, password: str) -> str:
        """Decrypt and return an entry's text."""
        ...

    def write_entry(self, file_name: str, content: str, password: str) -> None:
        """Encrypt ``content`` and create or replace the entry."""
        ...

    def create_entry(self, day: date, password: str, mood: Mood | str | None = None) -> str:
        """Create a templated entry for ``day`` and return its file name."""
        ...


class EncryptedJournalStore:
    """Directory-backed store of encrypted day entries.

    Implements the JournalStore protocol. Passwords are passed per call and
    never kept on the instance.
    """

    def __init__(
        self,
        journal_dir: str | Path,
        codec: EncryptionCodec | None = None,
        calendar: CalendarCodec | None = None,
    ):
        self.journal_dir = Path(journal_dir).expanduser()
        self.codec = codec or EncryptionCodec()
        self.calendar = calendar or PersianCalendar()

    @classmethod
    def from_settings(
        cls,
        settings: JournalSettings,
        codec: EncryptionCodec | None = None,
        calendar: CalendarCodec | None = None,
    ) -> EncryptedJournalStore:
        """Build a store at the directory recorded in ``settings``."""
        return cls(settings.ensure_journal_dir(), codec=codec, calendar=calendar)

    # -- naming ----------------------------------------------------------------

    def file_name_for(self, day: date) -> str:
        """Canonical file name for a Gregorian ``day``."""
        return f"{self.calendar.date_to_string(day)}{ENTRY_SUFFIX}"

    def path_for(self, file_name: str) -> Path:
        """Resolve a bare file name inside the store directory."""
        if not file_name or file_name in (".", "..") or "/" in file_name or "\\" in file_name:
            raise JournalIOError(f"Invalid entry name: '{file_name}'")
        return self.journal_dir / file_name

    def parse_entry(self, file_name: str) -> JournalEntry | None:
        """Decode a file name into an entry, or None if it is not one."""
        if not file_name.endswith(ENTRY_SUFFIX):
            return None
        day = self.calendar.string_to_date(file_name[: -len(ENTRY_SUFFIX)])
        if day is None:
            return None
        return JournalEntry(
            file_name=file_name,
            date=day,
            year=self.calendar.year_of(day),
            month=self.calendar.month_of(day),
        )

    def ensure_dir(self) -> Path:
        try:
            self.journal_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise JournalIOError(f"Cannot create journal directory '{self.journal_dir}': {e}") from e
        return self.journal_dir

    # -- listing ---------------------------------------------------------------

    def entry_files(self) -> list[Path]:
        """All ``*.txt`` files in the directory, conforming or not, in name order."""
        try:
            with os.scandir(self.journal_dir) as it:
                names = sorted(e.name for e in it if e.name.endswith(ENTRY_SUFFIX) and e.is_file())
        except FileNotFoundError:
            return []
        except OSError as e:
            raise JournalIOError(f"Cannot list '{self.journal_dir}': {e}") from e
        return [self.journal_dir / name for name in names]

    def list_entries(self, current_year_only: bool = False) -> list[JournalEntry]:
        """Return entries sorted by date, newest first.

        Args:
            current_year_only: Keep only entries in today's calendar year.
        """
        entries = []
        for path in self.entry_files():
            entry = self.parse_entry(path.name)
            if entry is None:
                continue
            entries.append(entry)

        if current_year_only:
            this_year = self.calendar.year_of(date.today())
            entries = [e for e in entries if e.year == this_year]

        entries.sort(key=lambda e: e.date, reverse=True)
        return entries

    def group_entries(self, entries: list[JournalEntry] | None = None) -> list[EntryGroup]:
        """Bucket entries by calendar year and month, newest first."""
        if entries is None:
            entries = self.list_entries()
        ordered = sorted(entries, key=lambda e: e.date, reverse=True)

        groups = []
        for (year, month), members in groupby(ordered, key=lambda e: (e.year, e.month)):
            groups.append(
                EntryGroup(
                    year=year,
                    month=month,
                    month_name=self.calendar.month_name(month),
                    entries=list(members),
                )
            )
        return groups

    # -- reading and writing ---------------------------------------------------

    def read_blob(self, file_name: str) -> bytes:
        path = self.path_for(file_name)
        try:
            return path.read_bytes()
        except (FileNotFoundError, IsADirectoryError) as e:
            raise EntryNotFoundError(f"Entry not found: {file_name}") from e
        except OSError as e:
            raise JournalIOError(f"Cannot read '{file_name}': {e}") from e

    def write_blob(self, file_name: str, blob: bytes) -> None:
        path = self.path_for(file_name)
        try:
            safe_write_bytes(path, blob)
        except OSError as e:
            raise JournalIOError(f"Cannot write '{file_name}': {e}") from e

    def read_entry(self, file_name: str, password: str) -> str:
        """Decrypt and return an entry's text.

        Raises:
            EntryNotFoundError: No such file.
            JournalIOError: The file could not be read.
            AuthenticationFailedError: Wrong password or damaged file.
        """
        blob = self.read_blob(file_name)
        return self.codec.decrypt_text(blob, password)

    def write_entry(self, file_name: str, content: str, password: str) -> None:
        """Encrypt ``content`` and create or replace the entry file.

        Raises:
            JournalIOError: The file could not be written.
        """
        self.write_blob(file_name, self.codec.encrypt(content, password))
        logger.debug(f"Saved entry {file_name}")

    def _entry_exists(self, file_name: str) -> bool:
        try:
            self.path_for(file_name).stat()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise JournalIOError(f"Cannot check '{file_name}': {e}") from e
        return True

    def create_entry(self, day: date, password: str, mood: Mood | str | None = None) -> str:
        """Create the entry for ``day`` with a templated header.

        Never overwrites: if the day already has an entry the store is left
        untouched.

        Raises:
            EntryExistsError: An entry for ``day`` already exists.
            JournalIOError: The file could not be written.
        """
        file_name = self.file_name_for(day)
        if self._entry_exists(file_name):
            raise EntryExistsError(f"An entry for {file_name[: -len(ENTRY_SUFFIX)]} already exists")

        self.ensure_dir()
        content = render_entry_header(self.calendar.date_to_string(day), day, mood)
        self.write_entry(file_name, content, password)
        logger.info(f"Created entry {file_name}")
        return file_name

    def verify_password(self, password: str) -> bool:
        """Check ``password`` against the newest entry.

        An empty store accepts any non-empty password; it becomes the password
        of the first entry written.

        Raises:
            JournalIOError: The directory could not be listed.
        """
        if not password:
            return False
        entries = self.list_entries()
        if not entries:
            return True
        try:
            self.read_entry(entries[0].file_name, password)
        except (AuthenticationFailedError, EntryNotFoundError, JournalIOError):
            return False
        return True
