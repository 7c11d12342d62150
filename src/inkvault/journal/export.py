"""Plaintext export of journal entries.

Entries are exported oldest first, either as one ``.txt`` per entry or
concatenated into a single timestamped file. Entries that fail to decrypt are
skipped and counted; they never abort the export.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from loguru import logger

from inkvault.core.exceptions import InkvaultError, JournalIOError
from inkvault.core.utils.file_io import safe_write_bytes

from .models import JournalEntry
from .store import EncryptedJournalStore


@dataclass
class ExportResult:
    exported: int = 0
    failed: int = 0
    skipped: list[str] = field(default_factory=list)
    paths: list[Path] = field(default_factory=list)


def export_entries(
    store: EncryptedJournalStore,
    entries: Iterable[JournalEntry],
    password: str,
    destination: str | Path,
    single_file: bool = False,
    now: datetime | None = None,
) -> ExportResult:
    """Decrypt ``entries`` and write them as plaintext under ``destination``.

    Raises:
        JournalIOError: The destination, or the combined file, could not be written.
    """
    dest = Path(destination).expanduser()
    try:
        dest.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise JournalIOError(f"Cannot create export folder '{dest}': {e}") from e

    ordered = sorted(entries, key=lambda e: e.date)
    result = ExportResult()
    chunks: list[str] = []

    for entry in ordered:
        try:
            content = store.read_entry(entry.file_name, password)
        except InkvaultError as e:
            result.failed += 1
            result.skipped.append(entry.display_name)
            logger.warning(f"Skipping {entry.display_name}: {e}")
            if single_file:
                chunks.append(f"--- Skipped: {entry.display_name} (Failed to decrypt) ---\n")
            continue

        if single_file:
            chunks.append(content if content.endswith("\n") else content + "\n")
        else:
            out_path = dest / f"{entry.display_name}.txt"
            _write_text(out_path, content)
            result.paths.append(out_path)
        result.exported += 1

    if single_file and ordered:
        stamp = (now or datetime.now()).strftime("%Y-%m-%d_%H-%M-%S")
        out_path = dest / f"inkvault_export_{stamp}.txt"
        _write_text(out_path, "\n".join(chunks))
        result.paths.append(out_path)

    logger.info(f"Exported {result.exported} entries to {dest}, {result.failed} failed")
    return result


def _write_text(path: Path, content: str) -> None:
    try:
        safe_write_bytes(path, content.encode("utf-8"))
    except OSError as e:
        raise JournalIOError(f"Cannot write export file '{path}': {e}") from e
