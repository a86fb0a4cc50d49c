"""
MiniON (Minimal Object Notation) - Python Implementation

A length-prefixed, self-delimiting encoding for named records:

    name|length~content

where length is the byte length of content. Records can be concatenated into
a stream, and a record's content can itself be a stream (a container).

Usage:
    import minion

    # Build and encode a record
    record = minion.Record("greeting")
    record.set_content("Hello, world!")
    encoded = record.to_text()  # "greeting|13~Hello, world!"

    # Decode a stream
    records = minion.parse_all(b"greeting|13~Hello, world!container|23~first|3~ONEsecond|3~TWO")

    # Containers are expanded on request
    children = minion.parse_children(records[1])

    # Raw bytes content
    from minion import DecodeOptions

    records = minion.parse_all(data, DecodeOptions(raw=True))
"""

import logging

__version__ = "0.1.0"

from .decode import (
    iter_records,
    parse_all,
    parse_at,
    parse_children,
    parse_content,
    parse_length,
    parse_name,
    parse_one,
)
from .encode import encode, encode_all, encode_all_bytes, encode_bytes, iter_encode
from .errors import (
    InvalidContentError,
    InvalidLengthError,
    InvalidNameError,
    MalformedHeaderError,
    MinionError,
    ParseError,
    TruncatedContentError,
)
from .names import is_valid_name, validate_name
from .types import Cursor, DecodeOptions, Record

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Main API
    "Record",
    "encode",
    "encode_bytes",
    "encode_all",
    "encode_all_bytes",
    "iter_encode",
    "parse_one",
    "parse_at",
    "parse_all",
    "iter_records",
    "parse_children",
    # Step parsers
    "parse_name",
    "parse_length",
    "parse_content",
    # Options
    "DecodeOptions",
    "Cursor",
    # Names
    "is_valid_name",
    "validate_name",
    # Errors
    "MinionError",
    "InvalidNameError",
    "ParseError",
    "MalformedHeaderError",
    "InvalidLengthError",
    "TruncatedContentError",
    "InvalidContentError",
]
