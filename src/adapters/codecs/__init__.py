"""File codecs for order lists.

One module per format; each class implements `core.interfaces.codec.OrderCodec`.
`decode`/`encode` dispatch on the file extension.
"""

from __future__ import annotations

from typing import Sequence

from adapters.codecs.csv_codec import CsvOrderCodec
from adapters.codecs.json_codec import JsonOrderCodec
from adapters.codecs.xml_codec import XmlOrderCodec
from core.domain.file_format import FileFormat
from core.domain.models import Order
from core.interfaces.codec import OrderCodec


def codec_for(extension: str | FileFormat, *, json_indent: int = 2) -> OrderCodec:
    """Return the codec registered for an extension.

    Raises `UnsupportedFormatError` for anything other than json/xml/csv.
    """

    fmt = extension if isinstance(extension, FileFormat) else FileFormat.from_extension(extension)
    if fmt is FileFormat.JSON:
        return JsonOrderCodec(indent=json_indent)
    if fmt is FileFormat.XML:
        return XmlOrderCodec()
    return CsvOrderCodec()


def supported_extensions() -> list[str]:
    return [fmt.value for fmt in FileFormat]


def decode(extension: str | FileFormat, text: str) -> list[Order]:
    return codec_for(extension).decode(text)


def encode(extension: str | FileFormat, orders: Sequence[Order] | None, *, json_indent: int = 2) -> str:
    return codec_for(extension, json_indent=json_indent).encode(orders)


__all__ = [
    "CsvOrderCodec",
    "JsonOrderCodec",
    "XmlOrderCodec",
    "codec_for",
    "decode",
    "encode",
    "supported_extensions",
]
