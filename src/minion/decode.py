"""MiniON decoder implementation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .errors import (
    InvalidContentError,
    InvalidLengthError,
    MalformedHeaderError,
    ParseError,
    TruncatedContentError,
)
from .names import LENGTH_DELIMITER_BYTE, NAME_DELIMITER_BYTE, name_problem
from .types import Buffer, Content, Cursor, DecodeOptions, Record

if TYPE_CHECKING:
    from collections.abc import Generator

logger = logging.getLogger(__name__)


def parse_one(
    buffer: Buffer, cursor: Cursor | None = None, options: DecodeOptions | None = None
) -> Record:
    """
    Parse the record starting at the cursor and advance the cursor past it.

    Bytes after the record are left for the next call.

    Args:
        buffer: The MiniON data. Strings are UTF-8 encoded first, so the
            cursor is always a byte offset.
        cursor: Position to parse from. A new cursor at 0 if omitted.
        options: Decoding options.

    Returns:
        The parsed record. Its content is always set (possibly empty).

    Raises:
        MalformedHeaderError: No '|' before the end, or an empty/invalid name.
        InvalidLengthError: Length field empty, non-numeric or missing '~'.
        TruncatedContentError: Fewer content bytes left than declared.
        InvalidContentError: Content is not UTF-8 and options.raw is False.
        ValueError: The cursor position is negative.

    On error the cursor is not moved.

    bytes and bytearray buffers are scanned in place. str and memoryview
    buffers are converted to bytes on every call, so loop over those with
    iter_records or parse_all, which convert once.
    """
    if cursor is None:
        cursor = Cursor()
    record, end = parse_at(buffer, cursor.pos, options)
    cursor.pos = end
    return record


def parse_at(
    buffer: Buffer, pos: int = 0, options: DecodeOptions | None = None
) -> tuple[Record, int]:
    """
    Parse the record starting at a byte offset.

    Args:
        buffer: The MiniON data.
        pos: Byte offset of the record header. Must not be negative.
        options: Decoding options.

    Returns:
        The parsed record and the offset just past its content.
    """
    opts = options or DecodeOptions()
    data = _as_data(buffer)
    try:
        record, end = _parse_record(data, pos, opts)
    except ParseError as exc:
        logger.debug("Failed to parse record at byte %d: %s", pos, exc)
        raise
    logger.debug("Parsed record %r (%d bytes) at byte %d", record.name, end - pos, pos)
    return record, end


def parse_all(buffer: Buffer, options: DecodeOptions | None = None) -> list[Record]:
    """
    Parse a buffer holding zero or more concatenated records.

    Nested records inside a container's content are not parsed; call
    parse_children (or parse_all on the content) for that.

    Args:
        buffer: The MiniON stream.
        options: Decoding options.

    Returns:
        The top-level records in buffer order. Empty for an empty buffer.

    Raises:
        ParseError: The first error found. No partial result is returned.
    """
    return list(iter_records(buffer, options))


def iter_records(
    buffer: Buffer, options: DecodeOptions | None = None
) -> Generator[Record, None, None]:
    """
    Parse a stream lazily, yielding each top-level record in order.

    Args:
        buffer: The MiniON stream.
        options: Decoding options.

    Yields:
        Parsed records.
    """
    opts = options or DecodeOptions()
    data = _as_data(buffer)
    cursor = Cursor()
    while not cursor.at_end(data):
        yield parse_one(data, cursor, opts)


def parse_children(record: Record, options: DecodeOptions | None = None) -> list[Record]:
    """
    Parse a container record's content as a stream of records.

    Args:
        record: The container record.
        options: Decoding options for the children.

    Returns:
        The nested records (empty if the record has no content).
    """
    return parse_all(record.content_bytes, options)


def parse_name(buffer: Buffer, cursor: Cursor) -> str:
    """
    Parse the name of a record and move the cursor past its '|'.

    Example: on ``b"greeting|13~Hello, world!"`` from 0, returns
    ``"greeting"`` and leaves the cursor at 9.

    Args:
        buffer: The MiniON data.
        cursor: Position of the record header.

    Returns:
        The record name.

    Raises:
        MalformedHeaderError: No '|' before the end, or the name is empty,
            contains '~' or is not UTF-8.
    """
    data = _as_data(buffer)
    start = _position(cursor)
    if start >= len(data):
        raise MalformedHeaderError("No data left for a record header", start)

    bar = data.find(NAME_DELIMITER_BYTE, start)
    if bar == -1:
        raise MalformedHeaderError("No '|' delimiter after name", start)

    try:
        name = data[start:bar].decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedHeaderError("Name is not valid UTF-8", start) from exc

    problem = name_problem(name, printable=False)
    if problem is not None:
        raise MalformedHeaderError(f"Invalid header: {problem}", start)

    cursor.pos = bar + 1
    return name


def parse_length(buffer: Buffer, cursor: Cursor, name: str, *, offset: int | None = None) -> int:
    """
    Parse the length field after the name and move the cursor past its '~'.

    Example: on ``b"greeting|13~Hello, world!"`` from 9, returns 13 and
    leaves the cursor at 12.

    Args:
        buffer: The MiniON data.
        cursor: Position just after the '|'.
        name: Name of the record, for error messages.
        offset: Offset reported in errors. Defaults to the cursor position.

    Returns:
        The declared content length.

    Raises:
        InvalidLengthError: Field empty, not ASCII digits, or no '~'.
        TruncatedContentError: The length has more digits than any length
            that could fit in the buffer.
    """
    data = _as_data(buffer)
    start = _position(cursor)
    if offset is None:
        offset = start

    tilde = data.find(LENGTH_DELIMITER_BYTE, start)
    if tilde == -1:
        raise InvalidLengthError(
            "Unterminated length field (no '~')", offset, name, field=bytes(data[start:])
        )
    field = bytes(data[start:tilde])
    # bytes.isdigit() only accepts ASCII digits
    if not field.isdigit():
        raise InvalidLengthError(
            f"Could not parse the length field {field!r}", offset, name, field=field
        )

    # More digits than len(data) has can never fit, and int() caps digit count
    digits = field.lstrip(b"0") or b"0"
    if len(digits) > len(str(len(data))):
        raise TruncatedContentError(offset, name, None, len(data) - tilde - 1)

    cursor.pos = tilde + 1
    return int(digits)


def parse_content(
    buffer: Buffer,
    cursor: Cursor,
    name: str,
    length: int,
    options: DecodeOptions | None = None,
    *,
    offset: int | None = None,
) -> Content:
    """
    Take exactly `length` bytes of content and move the cursor past them.

    Example: on ``b"greeting|13~Hello, world!"`` from 12 with length 13,
    returns ``"Hello, world!"`` and leaves the cursor at 25.

    Args:
        buffer: The MiniON data.
        cursor: Position just after the '~'.
        name: Name of the record, for error messages.
        length: Declared content length.
        options: Decoding options.
        offset: Offset reported in errors. Defaults to the cursor position.

    Returns:
        The content, as text or (with options.raw) bytes.

    Raises:
        TruncatedContentError: Fewer than `length` bytes remain.
        InvalidContentError: Content is not UTF-8 and options.raw is False.
    """
    opts = options or DecodeOptions()
    data = _as_data(buffer)
    start = _position(cursor)
    if offset is None:
        offset = start
    if length < 0:
        raise ValueError(f"Content length must not be negative, got {length}")

    end = start + length
    if end > len(data):
        raise TruncatedContentError(offset, name, length, max(len(data) - start, 0))

    content = bytes(data[start:end])
    if not opts.raw:
        try:
            content = content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidContentError(
                f"Content is not valid UTF-8 ({exc.reason})", offset, name
            ) from exc

    cursor.pos = end
    return content


def _as_data(buffer: Buffer) -> bytes | bytearray:
    """Get a buffer that supports find(), encoding text as UTF-8."""
    if isinstance(buffer, (bytes, bytearray)):
        return buffer
    if isinstance(buffer, str):
        return buffer.encode("utf-8")
    if isinstance(buffer, memoryview):
        return buffer.tobytes()
    raise TypeError(f"Cannot parse MiniON from {type(buffer).__name__}")


def _position(cursor: Cursor) -> int:
    if cursor.pos < 0:
        raise ValueError(f"Cursor position must not be negative, got {cursor.pos}")
    return cursor.pos


def _parse_record(data: bytes | bytearray, start: int, opts: DecodeOptions) -> tuple[Record, int]:
    """Scan one record forward from start: name, length, then content."""
    cursor = Cursor(start)
    name = parse_name(data, cursor)
    length = parse_length(data, cursor, name, offset=start)
    content = parse_content(data, cursor, name, length, opts, offset=start)
    return Record._from_wire(name, content), cursor.pos
