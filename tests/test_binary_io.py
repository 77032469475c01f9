"""Tests for little-endian binary primitives."""

from io import BytesIO

import pytest

from opennbs.errors import InputError, SizeLimitError
from opennbs.utils.binary_io import (
    MAX_STRING_LENGTH,
    read_bool,
    read_byte,
    read_int,
    read_short,
    read_signed_short,
    read_string,
    write_bool,
    write_byte,
    write_int,
    write_short,
    write_signed_short,
    write_string,
)


class ChunkedStream:
    """Stream that returns at most `chunk` bytes per read."""

    def __init__(self, data: bytes, chunk: int = 1):
        self._stream = BytesIO(data)
        self.chunk = chunk

    def read(self, size: int = -1) -> bytes:
        if size < 0:
            size = self.chunk
        return self._stream.read(min(size, self.chunk))


class TestReaders:
    """Test cases for primitive readers."""

    def test_byte_unsigned(self):
        assert read_byte(BytesIO(b"\xff")) == 255

    def test_short_little_endian(self):
        assert read_short(BytesIO(b"\x34\x12")) == 0x1234
        assert read_short(BytesIO(b"\xff\xff")) == 0xFFFF

    def test_signed_short(self):
        assert read_signed_short(BytesIO(b"\xa8\xfd")) == -600

    def test_int_little_endian_signed(self):
        assert read_int(BytesIO(b"\x78\x56\x34\x12")) == 0x12345678
        assert read_int(BytesIO(b"\xff\xff\xff\xff")) == -1

    def test_bool_nonzero_is_true(self):
        assert read_bool(BytesIO(b"\x00")) is False
        assert read_bool(BytesIO(b"\x01")) is True
        assert read_bool(BytesIO(b"\x7f")) is True

    def test_string(self):
        data = b"\x05\x00\x00\x00hello"
        assert read_string(BytesIO(data)) == "hello"

    def test_string_utf8(self):
        encoded = "Nyan ♪".encode("utf-8")
        data = len(encoded).to_bytes(4, "little") + encoded
        assert read_string(BytesIO(data)) == "Nyan ♪"

    @pytest.mark.parametrize("length", [0, -1])
    def test_string_non_positive_length_is_empty(self, length):
        stream = BytesIO(length.to_bytes(4, "little", signed=True) + b"rest")
        assert read_string(stream) == ""
        assert stream.read() == b"rest"

    def test_string_size_cap_checked_before_read(self):
        """Test that an oversized prefix fails without consuming the body."""
        stream = BytesIO((20000).to_bytes(4, "little") + bytes(20000))
        with pytest.raises(SizeLimitError):
            read_string(stream)
        assert stream.tell() == 4

    def test_string_at_cap_accepted(self):
        data = MAX_STRING_LENGTH.to_bytes(4, "little") + b"a" * MAX_STRING_LENGTH
        assert len(read_string(BytesIO(data))) == MAX_STRING_LENGTH

    def test_short_reads_are_joined(self):
        """Test reading through a stream that returns one byte at a time."""
        stream = ChunkedStream(b"\x03\x00\x00\x00abc\x34\x12")
        assert read_string(stream) == "abc"
        assert read_short(stream) == 0x1234

    @pytest.mark.parametrize(
        "reader,data",
        [
            (read_byte, b""),
            (read_short, b"\x01"),
            (read_int, b"\x01\x02\x03"),
        ],
    )
    def test_truncated_fixed_width(self, reader, data):
        with pytest.raises(InputError, match="Unexpected end of input"):
            reader(BytesIO(data))

    def test_truncated_string_body_is_strict(self):
        """Test that a string shorter than its prefix fails like other fields."""
        with pytest.raises(InputError):
            read_string(BytesIO(b"\x0a\x00\x00\x00abc"))


class TestWriters:
    """Test cases for primitive writers."""

    def _written(self, writer, value) -> bytes:
        stream = BytesIO()
        writer(stream, value)
        return stream.getvalue()

    def test_short_layout(self):
        assert self._written(write_short, 0x1234) == b"\x34\x12"

    def test_int_layout(self):
        assert self._written(write_int, 0x12345678) == b"\x78\x56\x34\x12"
        assert self._written(write_int, -1) == b"\xff\xff\xff\xff"

    def test_signed_short_layout(self):
        assert self._written(write_signed_short, -600) == b"\xa8\xfd"

    def test_bool_layout(self):
        assert self._written(write_bool, True) == b"\x01"
        assert self._written(write_bool, False) == b"\x00"

    def test_values_masked_to_width(self):
        """Test that oversized values are truncated, not rejected."""
        assert self._written(write_byte, 0x1FF) == b"\xff"
        assert self._written(write_short, 0x12345) == b"\x45\x23"
        assert self._written(write_int, 0x1_0000_0001) == b"\x01\x00\x00\x00"

    def test_string_layout(self):
        assert self._written(write_string, "ab") == b"\x02\x00\x00\x00ab"
        assert self._written(write_string, "") == b"\x00\x00\x00\x00"

    def test_string_length_counts_bytes(self):
        data = self._written(write_string, "♪")
        assert data[:4] == b"\x03\x00\x00\x00"
