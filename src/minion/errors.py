"""Errors raised by the MiniON encoder/decoder."""


class MinionError(Exception):
    """Base error for this package."""


class InvalidNameError(MinionError, ValueError):
    """Raised when a record name cannot be encoded (empty, '|', '~', non-printable)."""


class ParseError(MinionError, ValueError):
    """
    Raised when a buffer does not hold a well-formed record.

    Attributes:
        offset: Byte offset where the failing record starts.
        name: Name of the failing record, if the header got that far.
    """

    explanation = "The data does not follow the MiniON structure."

    def __init__(self, message: str, offset: int, name: str | None = None):
        self.offset = offset
        self.name = name
        location = f"at byte {offset}"
        if name is not None:
            location = f"{location} (name: {name})"
        super().__init__(f"{message} {location}")

    def explain(self) -> str:
        """Return the error with a longer explanation of what went wrong."""
        return f"{type(self).__name__}: {self.explanation} {self}"


class MalformedHeaderError(ParseError):
    """No '|' delimiter was found, or the name before it is empty or invalid."""

    explanation = "Expected a record header of the form 'name|length~'."


class InvalidLengthError(ParseError):
    """The length field is empty, not made of ASCII digits, or not closed by '~'."""

    explanation = "The length field must be decimal digits terminated by '~'."

    def __init__(self, message: str, offset: int, name: str | None = None, field: bytes = b""):
        self.field = field
        super().__init__(message, offset, name)


class TruncatedContentError(ParseError):
    """The buffer ends before the declared number of content bytes."""

    explanation = "The buffer ends before the declared content length."

    def __init__(self, offset: int, name: str, expected: int | None, available: int):
        self.expected = expected
        self.available = available
        if expected is None:
            message = f"Incomplete content: declared length exceeds the {available} bytes left"
        else:
            message = f"Incomplete content: expected {expected} bytes, {self.missing} missing"
        super().__init__(message, offset, name)

    @property
    def missing(self) -> int | None:
        """Number of content bytes the buffer is short by (None if the length was too large to read)."""
        if self.expected is None:
            return None
        return self.expected - self.available


class InvalidContentError(ParseError):
    """Content could not be decoded as UTF-8 text (decode with raw=True for bytes)."""

    explanation = "Text content must be valid UTF-8."
