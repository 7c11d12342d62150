"""Shared setup logic for CLI commands."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import NoReturn

import click

from inkvault.core.config import Config
from inkvault.core.crypto import DEFAULT_ITERATIONS, EncryptionCodec
from inkvault.core.exceptions import ConfigurationError, InkvaultError
from inkvault.journal.calendar import get_calendar
from inkvault.journal.settings import JournalSettings
from inkvault.journal.store import EncryptedJournalStore

INKVAULT_DIR = Path.home() / ".inkvault"
DEFAULT_CONFIG_PATH = INKVAULT_DIR / "config.yaml"

password_option = click.option(
    "--password",
    envvar="INKVAULT_PASSWORD",
    prompt=True,
    hide_input=True,
    help="Journal password (or set INKVAULT_PASSWORD).",
)


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def load_settings(config: Config) -> JournalSettings:
    """Load the persisted journal directory setting."""
    return JournalSettings(
        settings_file=config.get_path("paths.settings_file"),
        default_journal_dir=config.get_path("journal.dir"),
    )


def build_codec(config: Config) -> EncryptionCodec:
    raw = config.get("crypto.kdf_iterations", DEFAULT_ITERATIONS)
    try:
        return EncryptionCodec(iterations=int(raw))
    except (TypeError, ValueError):
        fail(f"crypto.kdf_iterations must be a positive integer, got '{raw}'")


def open_store(config: Config, settings: JournalSettings | None = None) -> EncryptedJournalStore:
    """Build the store for the configured directory and calendar."""
    settings = settings or load_settings(config)
    try:
        calendar = get_calendar(config.get("journal.calendar", "persian"))
    except ConfigurationError as e:
        fail(str(e))
    return EncryptedJournalStore.from_settings(settings, codec=build_codec(config), calendar=calendar)


def entry_file_name(name: str) -> str:
    """Accept ``1403-01-01`` or ``1403-01-01.txt``."""
    return name if name.endswith(".txt") else f"{name}.txt"


def require_password(store: EncryptedJournalStore, password: str) -> None:
    """Refuse to continue with a password that does not open the store."""
    try:
        valid = store.verify_password(password)
    except InkvaultError as e:
        fail(str(e))
    if not valid:
        fail("Invalid password.")
