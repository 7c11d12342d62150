"""Password change: re-encrypt every entry in a store under a new password.

The run walks the directory in name order and rewrites each file in place.
It stops at the first file that cannot be decrypted or written. Files already
converted are NOT reverted, so an aborted run can leave the directory with
two passwords in use; ``RekeyResult.mixed_passwords`` says when that happened
and ``rekeyed`` lists the files now under the new password.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from loguru import logger

from inkvault.core.exceptions import ErrorKind, InkvaultError, JournalIOError
from inkvault.core.utils.file_io import backup_directory

from .models import ENTRY_SUFFIX
from .store import EncryptedJournalStore


class RekeyState(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMMITTED = "committed"
    ABORTED = "aborted"


@dataclass
class RekeyResult:
    """Outcome of a re-key run."""

    state: RekeyState = RekeyState.PENDING
    total: int = 0
    rekeyed: list[str] = field(default_factory=list)
    failed_file: str | None = None
    error_kind: ErrorKind | None = None
    message: str = ""
    backup_path: Path | None = None

    @property
    def ok(self) -> bool:
        return self.state is RekeyState.COMMITTED

    @property
    def kind(self) -> ErrorKind | None:
        """``PARTIAL_FAILURE`` for an aborted run, None on success."""
        return ErrorKind.PARTIAL_FAILURE if self.state is RekeyState.ABORTED else None

    @property
    def mixed_passwords(self) -> bool:
        return self.state is RekeyState.ABORTED and bool(self.rekeyed)


def rekey_store(
    store: EncryptedJournalStore,
    old_password: str,
    new_password: str,
    backup_dir: str | Path | None = None,
) -> RekeyResult:
    """Re-encrypt every ``*.txt`` file in ``store`` from ``old_password`` to ``new_password``.

    Args:
        store: Store whose directory is converted.
        old_password: Password every entry is currently encrypted under.
        new_password: Replacement password; must be non-empty and different.
        backup_dir: If set, copy the entry files into a timestamped folder
            under this directory before touching anything.

    Returns:
        A RekeyResult. ``ok`` is True only if every file was converted.

    Raises:
        ValueError: ``new_password`` is empty or equals ``old_password``.
    """
    if not new_password:
        raise ValueError("New password must not be empty")
    if new_password == old_password:
        raise ValueError("New password must differ from the old password")

    result = RekeyResult()

    try:
        files = store.entry_files()
    except JournalIOError as e:
        return _abort(result, None, e)
    result.total = len(files)

    if backup_dir is not None and files:
        try:
            result.backup_path = backup_directory(store.journal_dir, backup_dir, f"*{ENTRY_SUFFIX}")
        except OSError as e:
            result.state = RekeyState.ABORTED
            result.error_kind = ErrorKind.IO_ERROR
            result.message = f"Backup failed, no files were changed: {e}"
            logger.error(result.message)
            return result

    result.state = RekeyState.PROCESSING
    for path in files:
        file_name = path.name
        try:
            blob = store.read_blob(file_name)
            plaintext = store.codec.decrypt(blob, old_password)
            store.write_blob(file_name, store.codec.encrypt(plaintext, new_password))
        except InkvaultError as e:
            return _abort(result, file_name, e)
        result.rekeyed.append(file_name)
        logger.debug(f"Re-encrypted {file_name}")

    result.state = RekeyState.COMMITTED
    result.message = f"Re-encrypted {len(result.rekeyed)} entries"
    logger.info(result.message)
    return result


def _abort(result: RekeyResult, file_name: str | None, error: InkvaultError) -> RekeyResult:
    result.state = RekeyState.ABORTED
    result.failed_file = file_name
    result.error_kind = error.kind
    target = file_name or "journal directory"
    result.message = f"Password change stopped at {target}: {error}"
    if result.rekeyed:
        logger.error(
            f"{result.message}. {len(result.rekeyed)} of {result.total} entries already use the new password; "
            "the directory now needs manual recovery"
        )
    else:
        logger.warning(f"{result.message}. No entries were changed")
    return result
