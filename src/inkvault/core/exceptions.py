"""
inkvault exception hierarchy.

All inkvault exceptions inherit from InkvaultError, making it easy for callers
to catch engine-level errors while still distinguishing specific failure modes.
Each class carries an ``ErrorKind`` so that results of multi-file procedures
(re-key, migration) can report the same taxonomy without raising.
"""

from enum import Enum


class ErrorKind(Enum):
    """Failure categories surfaced across the engine's public boundary."""

    NOT_FOUND = "not_found"
    AUTHENTICATION_FAILED = "authentication_failed"
    IO_ERROR = "io_error"
    ALREADY_EXISTS = "already_exists"
    INVALID_TARGET = "invalid_target"
    PARTIAL_FAILURE = "partial_failure"
    SETTINGS_NOT_PERSISTED = "settings_not_persisted"
    CONFIGURATION = "configuration"


# Wrong password and tampered data are reported with the same text.
DECRYPT_FAILED_MESSAGE = "could not decrypt — check password or file integrity"


class InkvaultError(Exception):
    """Base exception class for all inkvault errors."""

    kind: ErrorKind = ErrorKind.IO_ERROR


class ConfigurationError(InkvaultError):
    """Raised for configuration errors (unknown calendar, invalid values)."""

    kind = ErrorKind.CONFIGURATION


class EntryNotFoundError(InkvaultError):
    """Raised when a journal entry file does not exist."""

    kind = ErrorKind.NOT_FOUND


class AuthenticationFailedError(InkvaultError):
    """Raised when a blob cannot be authenticated (wrong password or corruption)."""

    kind = ErrorKind.AUTHENTICATION_FAILED

    def __init__(self, message: str = DECRYPT_FAILED_MESSAGE):
        super().__init__(message)


class JournalIOError(InkvaultError):
    """Raised for filesystem failures (permissions, disk full, invalid path)."""

    kind = ErrorKind.IO_ERROR


class EntryExistsError(InkvaultError):
    """Raised when creating an entry for a day that already has one."""

    kind = ErrorKind.ALREADY_EXISTS


class InvalidTargetError(InkvaultError):
    """Raised when a migration target contains, or is contained by, the source."""

    kind = ErrorKind.INVALID_TARGET


class SettingsError(InkvaultError):
    """Raised when the settings file cannot be written."""

    kind = ErrorKind.SETTINGS_NOT_PERSISTED
