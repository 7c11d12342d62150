"""
Logging configuration using loguru.

The CLI calls setup_logging() at startup; library code just uses loguru's logger.

Both sinks run with ``diagnose=False``. With loguru's default, tracebacks
print the values of local variables, which here means passwords and
decrypted entry text.
"""

import sys
from pathlib import Path

from loguru import logger

from inkvault.core.exceptions import ConfigurationError


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    fmt: str = "<level>[{level.name}]</level> {message}",
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Configure loguru with console and optional file output.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Path to log file, ``~`` allowed. Missing parent
            directories are created. If None, only logs to stderr.
        fmt: Loguru format string for the console sink.
        rotation: Log file rotation size.
        retention: How long to keep rotated logs.

    Raises:
        ConfigurationError: Unknown level, or the log file's directory
            cannot be created.
    """
    level = str(level).upper()
    try:
        logger.level(level)
    except ValueError as e:
        raise ConfigurationError(f"Unknown log level '{level}'") from e

    log_path = None
    if log_file:
        log_path = Path(log_file).expanduser()
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigurationError(f"Cannot create log directory '{log_path.parent}': {e}") from e

    logger.remove()
    logger.add(sys.stderr, level=level, format=fmt, diagnose=False)

    if log_path:
        logger.add(
            log_path,
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function} | {message}",
            rotation=rotation,
            retention=retention,
            diagnose=False,
        )
