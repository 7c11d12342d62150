"""inkvault — an encrypted, file-per-day journal engine."""

__version__ = "0.1.0"
