"""
Top-level decode/encode entry points.

Both functions accept either a binary stream or a filesystem path. Paths
are opened and closed by the call; streams are used as given and left open.
"""

import os
from pathlib import Path
from typing import BinaryIO, Optional, Union

from opennbs.errors import InputError
from opennbs.formats.nbs.reader import NBSReader
from opennbs.formats.nbs.writer import NBSWriter
from opennbs.models.song import Song
from opennbs.models.version import Version

Source = Union[str, bytes, "os.PathLike[str]", BinaryIO]


def _as_path(value) -> Optional[Path]:
    if isinstance(value, (str, bytes, os.PathLike)):
        return Path(os.fsdecode(value))
    return None


def _require_stream(value, method: str) -> None:
    if not callable(getattr(value, method, None)):
        raise InputError(f"Expected a path or a binary stream, got {type(value).__name__}")


def decode(source: Source) -> Song:
    """
    Decode a song from a path or a readable binary stream.

    Raises:
        InputError: If a path is not a regular file, the source is neither a
            path nor a stream, or the stream is truncated
        FormatError: If the version byte is unsupported
        SizeLimitError: If a string exceeds the safety cap
        ValidationError: If a decoded value is out of range
    """
    path = _as_path(source)
    if path is not None:
        return NBSReader.read(path)
    _require_stream(source, "read")
    return NBSReader().parse_stream(source)


def encode(song: Song, target: Source, version: Optional[Version] = None) -> None:
    """
    Encode a song to a path or a writable binary stream.

    Args:
        song: Song to encode
        target: Output path (created or truncated) or stream
        version: Target version, defaults to song.version

    Raises:
        InputError: If a path exists and is not a regular file, or the target
            is neither a path nor a stream
    """
    path = _as_path(target)
    if path is not None:
        NBSWriter.write(song, path, version)
    else:
        _require_stream(target, "write")
        NBSWriter().write_stream(song, target, version)


def decode_bytes(data: bytes) -> Song:
    """Decode a song held in memory."""
    return NBSReader().parse_bytes(data)


def encode_bytes(song: Song, version: Optional[Version] = None) -> bytes:
    """Encode a song to bytes."""
    return NBSWriter().to_bytes(song, version)
