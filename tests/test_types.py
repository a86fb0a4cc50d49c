"""Tests for the MiniON record model and name validation."""

import sys
from pathlib import Path

import pytest

# Add src to path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minion import InvalidNameError, Record, is_valid_name, validate_name


class TestRecord:
    """Test record construction and content."""

    def test_new_record_has_no_content(self):
        record = Record("greeting")
        assert record.content is None
        assert not record.has_content
        assert record.length == 0
        assert record.content_bytes == b""

    def test_set_content(self):
        record = Record("greeting")
        record.set_content("Hello, world!")
        assert record.content == "Hello, world!"
        assert record.has_content
        assert record.length == 13

    def test_set_empty_content(self):
        record = Record("greeting")
        record.set_content("")
        assert record.has_content
        assert record.length == 0

    def test_set_content_replaces(self):
        record = Record("greeting", "Hi")
        record.set_content("Hello")
        assert record.content == "Hello"

    def test_set_content_none(self):
        with pytest.raises(TypeError):
            Record("greeting").set_content(None)

    def test_binary_content_is_copied(self):
        buffer = bytearray(b"abc")
        record = Record("bin")
        record.set_content(buffer)
        buffer[0] = ord("z")
        assert record.content == b"abc"
        assert isinstance(record.content, bytes)

    def test_memoryview_content(self):
        assert Record("bin", memoryview(b"abc")).content == b"abc"

    def test_unsupported_content(self):
        with pytest.raises(TypeError, match="must be str or bytes"):
            Record("num", 42)

    def test_length_in_bytes(self):
        assert Record("word", "日本").length == 6

    def test_equality(self):
        assert Record("a", "x") == Record("a", "x")
        assert Record("a", "x") != Record("a", b"x")
        assert Record("a") != Record("a", "")


class TestNames:
    """Test name validation."""

    @pytest.mark.parametrize("name", ["greeting", "with space", "grüße", "a.b-c_d", "0"])
    def test_valid(self, name):
        assert is_valid_name(name)
        assert validate_name(name) == name

    @pytest.mark.parametrize(
        "name,reason",
        [
            ("", "empty"),
            ("a|b", "reserved character '\\|'"),
            ("a~b", "reserved character '~'"),
            ("tab\there", "non-printable"),
            ("new\nline", "non-printable"),
        ],
    )
    def test_invalid(self, name, reason):
        assert not is_valid_name(name)
        with pytest.raises(InvalidNameError, match=reason):
            Record(name)

    def test_not_a_string(self):
        assert not is_valid_name(b"bytes")
        with pytest.raises(InvalidNameError, match="must be str"):
            Record(b"bytes")

    def test_invalid_name_is_value_error(self):
        with pytest.raises(ValueError):
            validate_name("bad~name")
