"""Shared test fixtures for inkvault."""

import os
import tempfile

import pytest

from inkvault.core.crypto import EncryptionCodec
from inkvault.journal.calendar import GregorianCalendar, PersianCalendar
from inkvault.journal.store import EncryptedJournalStore

# Blobs written with this count are only readable by a codec using the same
# count; it keeps key derivation cheap for the suite.
FAST_ITERATIONS = 1_000


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def codec():
    return EncryptionCodec(iterations=FAST_ITERATIONS)


@pytest.fixture
def store(tmp_path, codec):
    """Gregorian-calendar store in a fresh directory."""
    return EncryptedJournalStore(tmp_path / "journals", codec=codec, calendar=GregorianCalendar())


@pytest.fixture
def persian_store(tmp_path, codec):
    return EncryptedJournalStore(tmp_path / "journals", codec=codec, calendar=PersianCalendar())


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file pointing all state at tmp_dir."""
    import yaml

    config_data = {
        "paths": {
            "data_dir": os.path.join(tmp_dir, "data"),
            "settings_file": os.path.join(tmp_dir, "data", "settings.yaml"),
        },
        "journal": {
            "dir": os.path.join(tmp_dir, "journals"),
            "calendar": "gregorian",
        },
        "crypto": {"kdf_iterations": FAST_ITERATIONS},
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path
