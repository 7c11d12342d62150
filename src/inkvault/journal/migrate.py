"""Relocate a journal directory, rolling back if any file cannot be moved.

Moves never overwrite: a same-named file already at the destination counts as
a failure for that entry. When anything fails, every file that made it across
is moved back before returning.

Two outcomes need an operator:
    - rollback itself fails (``rollback_failures`` is non-empty), or
    - every file moved but the new location could not be saved to settings
      (``MigrationStatus.SETTINGS_NOT_PERSISTED``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from loguru import logger

from inkvault.core.exceptions import ErrorKind, SettingsError
from inkvault.core.utils.file_io import is_strict_subpath, move_no_overwrite, same_path

from .models import ENTRY_SUFFIX
from .settings import JournalSettings


class MigrationStatus(Enum):
    NO_OP = "no_op"
    MOVED = "moved"
    INVALID_TARGET = "invalid_target"
    IO_ERROR = "io_error"
    PARTIAL_FAILURE = "partial_failure"
    SETTINGS_NOT_PERSISTED = "settings_not_persisted"


_STATUS_KINDS = {
    MigrationStatus.INVALID_TARGET: ErrorKind.INVALID_TARGET,
    MigrationStatus.IO_ERROR: ErrorKind.IO_ERROR,
    MigrationStatus.PARTIAL_FAILURE: ErrorKind.PARTIAL_FAILURE,
    MigrationStatus.SETTINGS_NOT_PERSISTED: ErrorKind.SETTINGS_NOT_PERSISTED,
}


@dataclass
class MigrationResult:
    """Outcome of a directory move.

    Attributes:
        status: What happened.
        moved: File names now at the destination.
        failed: File name -> reason, for entries that could not be moved.
        rollback_failures: File name -> reason, for entries stranded at the
            destination because moving them back failed.
        message: Human-readable summary.
    """

    status: MigrationStatus
    source: Path
    destination: Path
    moved: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    rollback_failures: dict[str, str] = field(default_factory=dict)
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status in (MigrationStatus.NO_OP, MigrationStatus.MOVED)

    @property
    def error_kind(self) -> ErrorKind | None:
        return _STATUS_KINDS.get(self.status)

    @property
    def rollback_complete(self) -> bool:
        return not self.rollback_failures


def migrate_store(
    source: str | Path,
    destination: str | Path,
    settings: JournalSettings | None = None,
) -> MigrationResult:
    """Move every entry file from ``source`` to ``destination``.

    Args:
        source: Current journal directory.
        destination: New journal directory; created if absent.
        settings: If given, ``journal_dir`` is updated and saved after a
            successful move.
    """
    src = Path(source).expanduser()
    dest = Path(destination).expanduser()

    def finish(status: MigrationStatus, message: str, **kwargs) -> MigrationResult:
        return MigrationResult(status=status, source=src, destination=dest, message=message, **kwargs)

    if same_path(src, dest):
        return finish(MigrationStatus.NO_OP, "New path is the same as the current path.")

    if is_strict_subpath(dest, src):
        return finish(MigrationStatus.INVALID_TARGET, "Cannot move journal directory into a subdirectory of itself.")
    if is_strict_subpath(src, dest):
        return finish(MigrationStatus.INVALID_TARGET, "Cannot move journal directory into one of its parents.")

    try:
        dest.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Could not create '{dest}': {e}")
        return finish(MigrationStatus.IO_ERROR, f"Failed to create new directory '{dest}': {e}")

    try:
        to_move = sorted(p.name for p in src.glob(f"*{ENTRY_SUFFIX}") if p.is_file()) if src.is_dir() else []
    except OSError as e:
        return finish(MigrationStatus.IO_ERROR, f"Failed to list '{src}': {e}")

    moved: list[str] = []
    failed: dict[str, str] = {}
    for name in to_move:
        try:
            move_no_overwrite(src / name, dest / name)
        except FileExistsError:
            failed[name] = "already exists in destination"
            logger.warning(f"Not moving {name}: already exists in {dest}")
        except OSError as e:
            failed[name] = str(e)
            logger.warning(f"Could not move {name}: {e}")
        else:
            moved.append(name)
            logger.debug(f"Moved {name} to {dest}")

    if failed:
        rollback_failures = _roll_back(src, dest, to_move, failed)
        listing = ", ".join(f"{name} ({reason})" for name, reason in failed.items())
        if rollback_failures:
            message = (
                f"Failed to move some files: {listing}. Rollback was incomplete for "
                f"{', '.join(rollback_failures)}; manual intervention is required."
            )
        else:
            message = f"Failed to move some files: {listing}. No changes were made."
        return finish(
            MigrationStatus.PARTIAL_FAILURE,
            message,
            moved=[name for name in moved if name in rollback_failures],
            failed=failed,
            rollback_failures=rollback_failures,
        )

    if settings is not None:
        settings.journal_dir = dest
        try:
            settings.save()
        except SettingsError as e:
            logger.error(f"Moved {len(moved)} entries to {dest} but could not save settings: {e}")
            return finish(
                MigrationStatus.SETTINGS_NOT_PERSISTED,
                "Files were moved, but failed to save the new path in settings. Please check the settings file.",
                moved=moved,
            )

    logger.info(f"Moved {len(moved)} entries from {src} to {dest}")
    return finish(MigrationStatus.MOVED, "Journal directory changed successfully.", moved=moved)


def _roll_back(src: Path, dest: Path, names: list[str], failed: dict[str, str]) -> dict[str, str]:
    """Move back files that left ``src``. Returns the ones that could not be restored."""
    stranded: dict[str, str] = {}
    for name in names:
        if name in failed:
            continue
        new_path, old_path = dest / name, src / name
        if not (new_path.exists() and not old_path.exists()):
            continue
        try:
            move_no_overwrite(new_path, old_path)
        except OSError as e:
            stranded[name] = str(e)
            logger.critical(f"Failed to move {name} back to {src} during rollback: {e}. Operator intervention required")
    return stranded
