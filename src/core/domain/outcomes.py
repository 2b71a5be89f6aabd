"""Outcomes of store operations that can legitimately do nothing."""

from __future__ import annotations

from enum import Enum


class Outcome(str, Enum):
    """Result of a store mutation.

    Hard failures (missing file, unsupported format, bad data) are exceptions;
    these values cover the expected "nothing happened" cases callers must
    handle explicitly.
    """

    OK = "ok"
    NOT_FOUND = "not_found"
    EMPTY = "empty"

    @property
    def ok(self) -> bool:
        return self is Outcome.OK
