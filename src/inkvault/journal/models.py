"""Core data models for the encrypted journal.

Entries are never persisted as objects: a ``JournalEntry`` is derived from a
file name every time the store directory is listed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

ENTRY_SUFFIX = ".txt"


class Mood(Enum):
    """Five-step mood scale, stored in the entry header as marker + 1-based index."""

    STORM = "🌩️"
    RAIN = "🌧️"
    CLOUDY = "🌥️"
    SUNNY = "☀️"
    RAINBOW = "🌈"

    @property
    def index(self) -> int:
        return list(Mood).index(self) + 1

    @classmethod
    def from_index(cls, index: int) -> Mood:
        """Look up a mood by its 1-based position on the scale."""
        moods = list(cls)
        if not 1 <= index <= len(moods):
            raise ValueError(f"Mood index must be between 1 and {len(moods)}, got {index}")
        return moods[index - 1]


@dataclass(frozen=True)
class JournalEntry:
    """One day's entry, identified by its file name.

    Attributes:
        file_name: Canonical date string plus ``.txt``.
        date: Gregorian date decoded from the file name.
        year: Year in the store's calendar.
        month: Month in the store's calendar.
    """

    file_name: str
    date: date
    year: int
    month: int

    @property
    def display_name(self) -> str:
        if self.file_name.endswith(ENTRY_SUFFIX):
            return self.file_name[: -len(ENTRY_SUFFIX)]
        return self.file_name

    def __repr__(self) -> str:
        return f"JournalEntry('{self.file_name}')"


@dataclass
class EntryGroup:
    """Entries sharing a calendar year and month."""

    year: int
    month: int
    month_name: str
    entries: list[JournalEntry] = field(default_factory=list)

    @property
    def label(self) -> str:
        return f"{self.month_name} {self.year}"

    def __len__(self) -> int:
        return len(self.entries)
