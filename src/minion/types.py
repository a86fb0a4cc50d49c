"""Type definitions for MiniON encoder/decoder."""

from collections.abc import Iterable
from dataclasses import dataclass

from .encode import encode, encode_all, encode_all_bytes, encode_bytes
from .names import validate_name

# Content as held by a record: UTF-8 text or raw bytes
Content = str | bytes

# Anything the parser accepts as input
Buffer = bytes | bytearray | memoryview | str


def _own_content(content: "Content | bytearray | memoryview | None") -> Content | None:
    """Copy binary content into bytes so the record never shares caller memory."""
    if content is None or isinstance(content, (str, bytes)):
        return content
    if isinstance(content, (bytearray, memoryview)):
        return bytes(content)
    raise TypeError(f"Record content must be str or bytes, not {type(content).__name__}")


@dataclass
class Record:
    """
    A named, length-prefixed unit of content.

    A record with no content set and a record with empty content encode the
    same way (``name|0~``). Parsed records always carry content.
    """

    name: str
    """Record name. Non-empty, printable, without '|' or '~'."""

    content: Content | None = None
    """Text or binary content, or None if never set."""

    def __post_init__(self):
        validate_name(self.name)
        self.content = _own_content(self.content)

    @classmethod
    def _from_wire(cls, name: str, content: Content) -> "Record":
        """Build a parsed record without the printable-name check."""
        record = cls.__new__(cls)
        record.name = name
        record.content = content
        return record

    def set_content(self, content: "Content | bytearray | memoryview") -> None:
        """Attach content to the record, replacing any previous content."""
        if content is None:
            raise TypeError("Record content cannot be set to None")
        self.content = _own_content(content)

    @property
    def has_content(self) -> bool:
        """Whether content was set (empty content counts)."""
        return self.content is not None

    @property
    def content_bytes(self) -> bytes:
        """The content as bytes, empty if not set."""
        if self.content is None:
            return b""
        if isinstance(self.content, str):
            return self.content.encode("utf-8")
        return self.content

    @property
    def length(self) -> int:
        """Byte length of the content, as written in the length field."""
        return len(self.content_bytes)

    @classmethod
    def container(cls, name: str, children: Iterable["Record"]) -> "Record":
        """
        Build a record whose content is the stream encoding of other records.

        The content is text unless one of the children carries binary content.

        Args:
            name: Name of the container record.
            children: Records to nest, in order.

        Returns:
            The container record.
        """
        children = list(children)
        if any(isinstance(child.content, bytes) for child in children):
            return cls(name, encode_all_bytes(children))
        return cls(name, encode_all(children))

    def to_text(self) -> str:
        """Return the record encoded as a string."""
        return encode(self)

    def to_bytes(self) -> bytes:
        """Return the record encoded as bytes."""
        return encode_bytes(self)


@dataclass
class DecodeOptions:
    """Options for MiniON decoding."""

    raw: bool = False
    """Return content as bytes instead of decoding it as UTF-8 text."""


@dataclass
class Cursor:
    """Caller-owned position in a buffer, advanced by successful parses."""

    pos: int = 0
    """Byte offset of the next record."""

    def at_end(self, buffer: Buffer) -> bool:
        """Whether every byte of the buffer has been consumed."""
        size = len(buffer.encode("utf-8")) if isinstance(buffer, str) else len(buffer)
        return self.pos >= size
