"""
Little-endian binary primitives for the NBS format.

Every multi-byte value in a .nbs file is stored least significant byte first:

    Type      Size    Encoding
    byte      1       unsigned 0-255
    short     2       unsigned 0-65535
    pitch     2       signed -32768..32767 (two's complement)
    int       4       signed 32-bit
    bool      1       0 = False, anything else = True
    string    4 + n   int length, then n bytes of UTF-8

A string length of zero or less means an empty string. Lengths above
MAX_STRING_LENGTH are rejected before any of the body is read.

Writers mask values to the field width, so out-of-range integers are
truncated the same way the original editor does instead of raising.
"""

import struct
from typing import BinaryIO

from opennbs.errors import InputError, SizeLimitError

MAX_STRING_LENGTH = 16384

_SHORT = struct.Struct("<H")
_SIGNED_SHORT = struct.Struct("<h")
_INT = struct.Struct("<i")


def read_exact(stream: BinaryIO, size: int, what: str = "field") -> bytes:
    """
    Read exactly `size` bytes, looping over short reads.

    Args:
        stream: Binary stream to read from
        size: Number of bytes required
        what: Field description for error messages

    Returns:
        The bytes read

    Raises:
        InputError: If the stream ends first
    """
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            got = size - remaining
            raise InputError(f"Unexpected end of input reading {what}: needed {size} bytes, got {got}")
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def read_byte(stream: BinaryIO) -> int:
    return read_exact(stream, 1, "byte")[0]


def read_short(stream: BinaryIO) -> int:
    return _SHORT.unpack(read_exact(stream, 2, "short"))[0]


def read_signed_short(stream: BinaryIO) -> int:
    return _SIGNED_SHORT.unpack(read_exact(stream, 2, "short"))[0]


def read_int(stream: BinaryIO) -> int:
    return _INT.unpack(read_exact(stream, 4, "int"))[0]


def read_bool(stream: BinaryIO) -> bool:
    return read_byte(stream) != 0


def read_string(stream: BinaryIO) -> str:
    """
    Read a length-prefixed UTF-8 string.

    Raises:
        SizeLimitError: If the declared length exceeds MAX_STRING_LENGTH
        InputError: If the stream ends inside the length or the body
    """
    length = read_int(stream)
    if length <= 0:
        return ""
    if length > MAX_STRING_LENGTH:
        raise SizeLimitError(f"String too long: {length} bytes (limit {MAX_STRING_LENGTH})")
    return read_exact(stream, length, "string").decode("utf-8", errors="replace")


def write_byte(stream: BinaryIO, value: int) -> None:
    stream.write(bytes([value & 0xFF]))


def write_short(stream: BinaryIO, value: int) -> None:
    stream.write(_SHORT.pack(value & 0xFFFF))


def write_signed_short(stream: BinaryIO, value: int) -> None:
    # Same bytes as the unsigned form once masked to 16 bits
    write_short(stream, value)


def write_int(stream: BinaryIO, value: int) -> None:
    value &= 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    stream.write(_INT.pack(value))


def write_bool(stream: BinaryIO, value: bool) -> None:
    write_byte(stream, 1 if value else 0)


def write_string(stream: BinaryIO, value: str) -> None:
    data = value.encode("utf-8")
    write_int(stream, len(data))
    stream.write(data)
