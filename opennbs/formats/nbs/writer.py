"""
NBS file writer.

Writes Song objects to the .nbs binary format at any supported version.

Writing at a version older than the song's own drops every field the
target version does not have. Nothing is rejected: decoding the result
gives the documented defaults for the dropped fields.
"""

import logging
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Dict, List, Optional, Tuple, Union

from opennbs.errors import InputError
from opennbs.models.note import Note
from opennbs.models.song import Song
from opennbs.models.version import Version
from opennbs.utils.binary_io import (
    write_bool,
    write_byte,
    write_int,
    write_short,
    write_signed_short,
    write_string,
)

logger = logging.getLogger(__name__)


class NBSWriter:
    """
    Writer for Note Block Song files.

    Example:
        song = Song(name="My Song")
        NBSWriter.write(song, "mysong.nbs", Version.V4)
    """

    def __init__(self):
        self._stream: Optional[BinaryIO] = None
        self.skipped_notes: int = 0

    @classmethod
    def write(
        cls, song: Song, filepath: Union[str, Path], version: Optional[Version] = None
    ) -> None:
        """
        Write a Song to an .nbs file.

        The file is created or truncated.

        Args:
            song: Song to write
            filepath: Output file path
            version: Target version (defaults to the song's version)

        Raises:
            InputError: If the path exists and is not a regular file
        """
        filepath = Path(filepath)
        if filepath.exists() and not filepath.is_file():
            raise InputError(f"Not a regular file: {filepath}")

        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, "wb") as f:
            cls().write_stream(song, f, version)

    def to_bytes(self, song: Song, version: Optional[Version] = None) -> bytes:
        """
        Convert a Song to .nbs binary data.

        Args:
            song: Song to convert
            version: Target version (defaults to the song's version)

        Returns:
            Complete file contents
        """
        buffer = BytesIO()
        self.write_stream(song, buffer, version)
        return buffer.getvalue()

    def write_stream(
        self, song: Song, stream: BinaryIO, version: Optional[Version] = None
    ) -> None:
        """
        Write a Song to a binary stream.

        The stream is left open.

        Args:
            song: Song to write
            stream: Writable binary stream
            version: Target version (defaults to the song's version)
        """
        version = song.version if version is None else Version(version)
        if version < song.version:
            logger.warning(
                "Writing %s song %r as %s; newer fields are dropped",
                song.version.label,
                song.name,
                version.label,
            )

        self._stream = stream
        self.skipped_notes = 0

        self._write_header(song, version)
        self._write_notes(song, version)
        self._write_layers(song, version)
        self._write_custom_instruments(song)

        logger.debug(
            "Encoded %r as %s: %d layers, %d notes",
            song.name,
            version.label,
            song.layer_count,
            song.note_count - self.skipped_notes,
        )

    def _write_header(self, song: Song, version: Version) -> None:
        """Write the header up to the note blocks."""
        stream = self._stream

        if version >= Version.V1:
            write_short(stream, 0)
            write_byte(stream, version.as_int)
            write_byte(stream, song.vanilla_instrument_count)
            if version >= Version.V3:
                write_short(stream, song.length)
        else:
            # Classic: the first short is the length itself
            if song.length == 0:
                logger.warning("Classic song of length 0 reads back as a versioned header")
            write_short(stream, song.length)

        write_short(stream, song.layer_count)
        write_string(stream, song.name)
        write_string(stream, song.author)
        write_string(stream, song.original_author)
        write_string(stream, song.description)
        write_short(stream, song.tempo)
        write_bool(stream, song.auto_saving)
        write_byte(stream, song.auto_saving_duration)
        write_byte(stream, song.time_signature)
        write_int(stream, song.minutes_spent)
        write_int(stream, song.left_clicks)
        write_int(stream, song.right_clicks)
        write_int(stream, song.note_blocks_added)
        write_int(stream, song.note_blocks_removed)
        write_string(stream, song.source_file)

        if version >= Version.V4:
            write_bool(stream, song.looping)
            write_byte(stream, song.max_loop_count)
            write_short(stream, song.loop_start_tick)

    def _write_notes(self, song: Song, version: Version) -> None:
        """
        Write note blocks with jump encoding.

        Ticks 0..length are visited in order. The tick jump grows by one for
        every tick visited and is flushed on each tick that has notes; layer
        jumps are relative to the previous populated layer on the same tick,
        starting from -1.
        """
        stream = self._stream
        by_tick = self._group_by_tick(song)

        tick_jump = 0
        for tick in range(song.length + 1):
            tick_jump += 1
            cells = by_tick.get(tick)
            if not cells:
                continue

            write_short(stream, tick_jump)
            tick_jump = 0

            last_layer = -1
            for layer_index, note in cells:
                write_short(stream, layer_index - last_layer)
                last_layer = layer_index
                self._write_note(note, version)

            write_short(stream, 0)  # end of tick

        write_short(stream, 0)  # end of note blocks

    def _group_by_tick(self, song: Song) -> Dict[int, List[Tuple[int, Note]]]:
        """Collect notes per tick in ascending layer order, skipping ticks past the end."""
        by_tick: Dict[int, List[Tuple[int, Note]]] = {}
        for tick, layer_index, note in song.iter_notes():
            if tick > song.length:
                self.skipped_notes += 1
                continue
            by_tick.setdefault(tick, []).append((layer_index, note))

        if self.skipped_notes:
            logger.warning(
                "Skipped %d notes beyond song length %d", self.skipped_notes, song.length
            )
        return by_tick

    def _write_note(self, note: Note, version: Version) -> None:
        stream = self._stream
        write_byte(stream, note.instrument)
        write_byte(stream, note.key)
        if version >= Version.V4:
            write_byte(stream, note.volume)
            write_byte(stream, note.panning)
            write_signed_short(stream, note.pitch)

    def _write_layers(self, song: Song, version: Version) -> None:
        stream = self._stream
        if list(song.layers) != list(range(song.layer_count)):
            logger.warning(
                "Layer indices of %r are not contiguous from 0; they renumber on decode",
                song.name,
            )
        for layer in song.layers.values():
            write_string(stream, layer.name)
            if version >= Version.V4:
                write_bool(stream, layer.is_locked)
            write_byte(stream, layer.volume)
            if version >= Version.V2:
                write_byte(stream, layer.panning)

    def _write_custom_instruments(self, song: Song) -> None:
        stream = self._stream
        if song.custom_instrument_count == 0:
            return

        write_byte(stream, song.custom_instrument_count)
        for instrument in song.custom_instruments:
            write_string(stream, instrument.name)
            write_string(stream, instrument.file)
            write_byte(stream, instrument.key)
            write_bool(stream, instrument.press_piano_key)


def create_empty_nbs(version: Version = Version.V5) -> bytes:
    """
    Create an empty .nbs file.

    Returns:
        File data for a song with no layers, notes or instruments
    """
    return NBSWriter().to_bytes(Song(version=version))
