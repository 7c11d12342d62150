"""Tests for inkvault.journal.export."""

from datetime import date, datetime

import pytest

from inkvault.core.exceptions import JournalIOError
from inkvault.journal.export import export_entries


@pytest.fixture
def seeded(store):
    store.write_entry("2024-01-02.txt", "second day", "pw")
    store.write_entry("2024-01-01.txt", "first day\n", "pw")
    store.write_entry("2024-01-03.txt", "locked", "other")
    return store


class TestMultipleFiles:
    def test_one_plaintext_file_per_entry(self, seeded, tmp_path):
        dest = tmp_path / "export"
        result = export_entries(seeded, seeded.list_entries(), "pw", dest)

        assert result.exported == 2
        assert result.failed == 1
        assert result.skipped == ["2024-01-03"]
        assert (dest / "2024-01-01.txt").read_text(encoding="utf-8") == "first day\n"
        assert (dest / "2024-01-02.txt").read_text(encoding="utf-8") == "second day"
        assert not (dest / "2024-01-03.txt").exists()

    def test_selected_entries_only(self, seeded, tmp_path):
        entries = [e for e in seeded.list_entries() if e.date == date(2024, 1, 2)]
        result = export_entries(seeded, entries, "pw", tmp_path / "export")
        assert result.exported == 1
        assert [p.name for p in result.paths] == ["2024-01-02.txt"]


class TestSingleFile:
    def test_oldest_first_with_skip_marker(self, seeded, tmp_path):
        dest = tmp_path / "export"
        result = export_entries(
            seeded, seeded.list_entries(), "pw", dest, single_file=True, now=datetime(2024, 5, 6, 7, 8, 9)
        )

        (out,) = result.paths
        assert out.name == "inkvault_export_2024-05-06_07-08-09.txt"
        assert out.read_text(encoding="utf-8") == (
            "first day\n\nsecond day\n\n--- Skipped: 2024-01-03 (Failed to decrypt) ---\n"
        )
        assert result.exported == 2
        assert result.failed == 1

    def test_nothing_selected_writes_nothing(self, store, tmp_path):
        result = export_entries(store, [], "pw", tmp_path / "export", single_file=True)
        assert result.paths == []


def test_unwritable_destination(store, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("file")
    with pytest.raises(JournalIOError):
        export_entries(store, [], "pw", blocker / "export")
