"""
opennbs - Bidirectional codec for Note Block Song (.nbs) files.

This library provides tools to:
- Read every .nbs revision (Classic and versions 1-5) into an immutable Song
- Write songs back at any revision, dropping fields older versions lack
- Analyze songs and report what a version downgrade would lose

Example usage:
    import opennbs
    from opennbs import Version

    song = opennbs.decode("song.nbs")
    print(f"{song.name}: {song.layer_count} layers, {song.note_count} notes")

    # Write a copy readable by older editors
    opennbs.encode(song, "song_v3.nbs", Version.V3)
"""

__version__ = "1.0.0"
__author__ = "opennbs Contributors"

from opennbs.codec import decode, decode_bytes, encode, encode_bytes
from opennbs.errors import FormatError, InputError, NBSError, SizeLimitError
from opennbs.formats.nbs.reader import NBSReader
from opennbs.formats.nbs.writer import NBSWriter
from opennbs.models.instrument import Instrument
from opennbs.models.layer import Layer
from opennbs.models.note import Note
from opennbs.models.song import Song
from opennbs.models.version import Version
from opennbs.utils.validation import ValidationError

__all__ = [
    "decode",
    "decode_bytes",
    "encode",
    "encode_bytes",
    "NBSReader",
    "NBSWriter",
    "Instrument",
    "Layer",
    "Note",
    "Song",
    "Version",
    "NBSError",
    "FormatError",
    "InputError",
    "SizeLimitError",
    "ValidationError",
]
