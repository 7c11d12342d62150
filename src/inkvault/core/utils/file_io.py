"""
File I/O utilities: byte writes, non-overwriting moves, directory backups.

All functions operate on explicit paths — no implicit directory lookups.
They raise plain ``OSError`` subclasses; callers at the store and procedure
boundary translate those into inkvault errors.
"""

from __future__ import annotations

import os
import shutil
from datetime import datetime
from pathlib import Path

from loguru import logger


def safe_write_bytes(filepath: str | Path, data: bytes) -> None:
    """Write bytes to a file, creating parent directories as needed.

    The data goes to a sibling temp file first and is then swapped into place,
    so a failed write never truncates the previous content.
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        with open(tmp_path, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise


def move_no_overwrite(src_path: str | Path, dest_path: str | Path) -> None:
    """Move a file, refusing to replace an existing destination.

    Raises:
        FileNotFoundError: Source does not exist.
        FileExistsError: Destination already exists.
    """
    src = Path(src_path)
    dest = Path(dest_path)

    if not src.exists():
        raise FileNotFoundError(f"Source file not found: {src}")
    if dest.exists():
        raise FileExistsError(f"Destination already exists: {dest}")

    try:
        # link() fails atomically if dest appeared in the meantime
        os.link(src, dest)
    except FileExistsError:
        raise
    except OSError:
        # Cross-device or no hard-link support: fall back to a checked move
        if dest.exists():
            raise FileExistsError(f"Destination already exists: {dest}") from None
        shutil.move(str(src), str(dest))
        return
    try:
        os.unlink(src)
    except OSError:
        os.unlink(dest)
        raise


def backup_directory(src_dir: str | Path, backup_root: str | Path, pattern: str = "*") -> Path:
    """Copy files matching ``pattern`` from ``src_dir`` into a timestamped folder.

    Returns:
        The created backup directory.
    """
    src = Path(src_dir)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = Path(backup_root).expanduser() / f"{src.name or 'journal'}.backup.{timestamp}"
    backup_path.mkdir(parents=True, exist_ok=False)

    count = 0
    for file_path in sorted(src.glob(pattern)):
        if file_path.is_file():
            shutil.copy2(file_path, backup_path / file_path.name)
            count += 1

    logger.info(f"Backed up {count} file(s) from {src} to {backup_path}")
    return backup_path


def is_strict_subpath(path: str | Path, parent: str | Path) -> bool:
    """True if ``path`` lies strictly inside ``parent`` (case-insensitive)."""
    child = os.path.normcase(os.path.abspath(os.path.expanduser(str(path)))).lower()
    base = os.path.normcase(os.path.abspath(os.path.expanduser(str(parent)))).lower()
    if child == base:
        return False
    return child.startswith(base.rstrip(os.sep) + os.sep)


def same_path(a: str | Path, b: str | Path) -> bool:
    """Case-insensitive path equality after normalisation."""
    norm_a = os.path.normcase(os.path.abspath(os.path.expanduser(str(a)))).lower()
    norm_b = os.path.normcase(os.path.abspath(os.path.expanduser(str(b)))).lower()
    return norm_a.rstrip(os.sep) == norm_b.rstrip(os.sep)
