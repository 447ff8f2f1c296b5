from __future__ import annotations

from pathlib import Path


class ContactDedupeError(Exception):
    """Base class for errors raised by contact_dedupe."""


class ConfigurationError(ContactDedupeError):
    """Raised when match settings are out of range."""


class RecordLoadError(ContactDedupeError):
    """Raised by loaders when a source cannot be turned into contact records."""

    def __init__(self, path: Path | str, message: str, row: int | None = None) -> None:
        self.path = Path(path)
        self.row = row
        location = f"{self.path}:{row}" if row is not None else str(self.path)
        super().__init__(f"{location}: {message}")
