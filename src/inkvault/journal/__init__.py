"""Encrypted journal storage.

Provides the entry store, calendar codecs, and the two whole-directory
procedures: password change (re-key) and directory relocation (migrate).
"""

from .calendar import CalendarCodec, GregorianCalendar, PersianCalendar, get_calendar
from .export import ExportResult, export_entries
from .migrate import MigrationResult, MigrationStatus, migrate_store
from .models import EntryGroup, JournalEntry, Mood
from .rekey import RekeyResult, RekeyState, rekey_store
from .settings import JournalSettings
from .store import EncryptedJournalStore, JournalStore

__all__ = [
    "CalendarCodec",
    "EncryptedJournalStore",
    "EntryGroup",
    "ExportResult",
    "GregorianCalendar",
    "JournalEntry",
    "JournalSettings",
    "JournalStore",
    "MigrationResult",
    "MigrationStatus",
    "Mood",
    "PersianCalendar",
    "RekeyResult",
    "RekeyState",
    "export_entries",
    "get_calendar",
    "migrate_store",
    "rekey_store",
]
