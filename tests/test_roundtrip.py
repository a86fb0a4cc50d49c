"""Round-trip tests for MiniON encode/decode."""

import sys
from pathlib import Path

import pytest

# Add src to path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minion import (
    Cursor,
    DecodeOptions,
    Record,
    encode,
    encode_all,
    encode_all_bytes,
    encode_bytes,
    parse_all,
    parse_at,
    parse_children,
    parse_one,
)


def roundtrip(record):
    """Encode then parse, returning the record and end offset."""
    return parse_at(encode(record))


class TestRoundtripRecords:
    """Test round-trip for single records."""

    @pytest.mark.parametrize(
        "record",
        [
            Record("greeting", "Hello, world!"),
            Record("empty", ""),
            Record("expr", "a|b~c|0~"),
            Record("word", "héllo wörld"),
            Record("text", "line1\nline2\r\n\ttabbed"),
            Record("spaced name", " padded "),
        ],
    )
    def test_roundtrip(self, record):
        assert roundtrip(record) == (record, len(encode_bytes(record)))

    def test_absent_content_parses_as_empty(self):
        parsed, _ = roundtrip(Record("box"))
        assert parsed == Record("box", "")

    def test_binary_content(self):
        record = Record("bin", bytes(range(256)))
        parsed, end = parse_at(encode_bytes(record), options=DecodeOptions(raw=True))
        assert parsed == record
        assert end == len(encode_bytes(record))

    def test_length_field_matches_content(self):
        record = Record("word", "naïve café")
        text = encode(record)
        field = text[text.index("|") + 1 : text.index("~")]
        assert int(field) == len("naïve café".encode("utf-8")) == record.length


class TestRoundtripStreams:
    """Test round-trip for concatenated records."""

    def test_two_records(self):
        r1 = Record("first", "ONE")
        r2 = Record("second", "TWO")
        assert parse_all(encode(r1) + encode(r2)) == [r1, r2]

    def test_many_records(self):
        records = [Record(f"item{i}", "x" * i) for i in range(20)]
        assert parse_all(encode_all(records)) == records

    def test_binary_stream(self):
        records = [Record("a", b"\x00|~"), Record("b", b"\xff" * 3)]
        assert parse_all(encode_all_bytes(records), DecodeOptions(raw=True)) == records

    def test_cursor_advancement(self):
        records = [Record("greeting", "Hello, world!"), Record("n", ""), Record("x", "y" * 120)]
        data = encode_all(records)
        cursor = Cursor()
        for record in records:
            start = cursor.pos
            assert parse_one(data, cursor) == record
            assert cursor.pos == (
                start + len(record.name) + 1 + len(str(record.length)) + 1 + record.length
            )
        assert cursor.at_end(data)


class TestRoundtripContainers:
    """Test round-trip for nested records."""

    def test_container(self):
        children = [Record("first", "ONE"), Record("second", "TWO")]
        [parsed] = parse_all(encode(Record.container("container", children)))
        assert parse_children(parsed) == children

    def test_deep_nesting(self):
        leaf = Record("leaf", "value")
        tree = Record.container("root", [Record.container("branch", [leaf]), Record("sibling", "s")])
        [root] = parse_all(tree.to_text())
        branch, sibling = parse_children(root)
        assert sibling == Record("sibling", "s")
        assert parse_children(branch) == [leaf]
