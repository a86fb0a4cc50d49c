"""MiniON encoder implementation."""

from collections.abc import Generator, Iterable
from typing import TYPE_CHECKING

from .names import LENGTH_DELIMITER, NAME_DELIMITER, validate_name

if TYPE_CHECKING:
    from .types import Record


def encode(record: "Record") -> str:
    """
    Encode a record to MiniON text.

    Args:
        record: The record to encode. Binary content must be valid UTF-8.

    Returns:
        The string ``name|length~content``.

    Raises:
        InvalidNameError: If the record name cannot be encoded.
        UnicodeDecodeError: If binary content is not UTF-8 (use encode_bytes).
    """
    return _format_header(record) + _content_text(record)


def encode_bytes(record: "Record") -> bytes:
    """
    Encode a record to MiniON bytes.

    Works for any content, including content that is not valid UTF-8.

    Args:
        record: The record to encode.

    Returns:
        The encoded bytes.
    """
    return _format_header(record).encode("utf-8") + record.content_bytes


def encode_all(records: Iterable["Record"]) -> str:
    """Encode records as a stream (concatenated, no separator)."""
    return "".join(iter_encode(records))


def encode_all_bytes(records: Iterable["Record"]) -> bytes:
    """Encode records as a byte stream (concatenated, no separator)."""
    return b"".join(encode_bytes(record) for record in records)


def iter_encode(records: Iterable["Record"]) -> Generator[str, None, None]:
    """
    Encode records one at a time, yielding each encoding in order.

    Args:
        records: Records to encode.

    Yields:
        The MiniON text of each record.
    """
    for record in records:
        yield encode(record)


def _format_header(record: "Record") -> str:
    """Build the ``name|length~`` prefix of a record."""
    name = validate_name(record.name)
    return f"{name}{NAME_DELIMITER}{record.length}{LENGTH_DELIMITER}"


def _content_text(record: "Record") -> str:
    content = record.content
    if content is None:
        return ""
    if isinstance(content, bytes):
        return content.decode("utf-8")
    return content
