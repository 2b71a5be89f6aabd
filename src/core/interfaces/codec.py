"""Contract for order-list codecs.

Each file format implements the same two operations. `Protocol` keeps the
contract structural: a codec does not need to inherit from anything to be
registered.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from core.domain.file_format import FileFormat
from core.domain.models import Order


@runtime_checkable
class OrderCodec(Protocol):
    """Bidirectional conversion between file text and a list of orders.

    Rules:
    - `decode` is all-or-nothing: a malformed value raises `OrderParseError`
      and no partial list is returned.
    - `encode(decode(text))` must be readable by `decode` again.
    """

    file_format: FileFormat

    def decode(self, text: str) -> list[Order]:
        """Parse the full file content into orders."""

        ...

    def encode(self, orders: Sequence[Order] | None) -> str:
        """Render orders as the full file content."""

        ...
