"""Exceptions raised by the order core.

Every hard failure derives from `OrderDeskError`, so the CLI can catch one
type; each class also derives from the matching builtin so callers that only
know about `FileNotFoundError` or `ValueError` still work.
"""

from __future__ import annotations

from pathlib import Path


class OrderDeskError(Exception):
    """Base class for order-desk failures."""


class OrderFileNotFoundError(OrderDeskError, FileNotFoundError):
    """The data file to load does not exist."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"File {self.path} not found.")


class UnsupportedFormatError(OrderDeskError, ValueError):
    """The file extension does not map to a known codec."""

    def __init__(self, extension: str) -> None:
        self.extension = extension
        shown = extension or "<none>"
        super().__init__(f"File format {shown} is not supported.")


class OrderParseError(OrderDeskError, ValueError):
    """A field value could not be decoded; the whole decode is aborted."""

    def __init__(self, message: str, *, location: str | None = None) -> None:
        self.location = location
        text = f"{location}: {message}" if location else message
        super().__init__(text)
