"""File formats understood by the order codecs.

The format of a data file is selected by its extension. Keeping the mapping in
the domain layer lets the store, the codecs and the CLI share one source of
truth for what ".json", ".xml" and ".csv" mean.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from core.errors import UnsupportedFormatError


class FileFormat(str, Enum):
    """Supported on-disk representations of an order list."""

    JSON = ".json"
    XML = ".xml"
    CSV = ".csv"

    @classmethod
    def from_extension(cls, extension: str) -> "FileFormat":
        """Resolve an extension (``".json"``, ``"JSON"``, ``"csv"``...) to a format."""

        normalized = (extension or "").strip().lower()
        if normalized and not normalized.startswith("."):
            normalized = "." + normalized
        try:
            return cls(normalized)
        except ValueError:
            raise UnsupportedFormatError(extension) from None

    @classmethod
    def from_path(cls, path: str | Path) -> "FileFormat":
        """Resolve the format of a file path from its suffix."""

        return cls.from_extension(Path(path).suffix)

    def label(self) -> str:
        """Short upper-case name for tables and messages."""

        return self.value.lstrip(".").upper()
