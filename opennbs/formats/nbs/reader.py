"""
NBS file reader.

Reads .nbs files (Classic and versions 1-5) into the Song model.

File layout (fields marked with a version only exist from that version on):
    short   0 (versioned files) or song length (Classic)
    byte    version                                 V1+
    byte    vanilla instrument count                V1+
    short   song length                             V3+
    short   layer count
    string  name, author, original author, description
    short   tempo
    bool    auto-saving
    byte    auto-saving duration
    byte    time signature
    int     minutes spent, left clicks, right clicks,
            note blocks added, note blocks removed
    string  source file
    bool    looping                                 V4+
    byte    max loop count                          V4+
    short   loop start tick                         V4+
    ...     note blocks (jump encoded, see _read_notes)
    ...     layer records
    ...     custom instruments (optional)
"""

import logging
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Callable, Dict, List, Optional, Tuple, TypeVar, Union

from opennbs.errors import FormatError, InputError, NBSError
from opennbs.models.instrument import Instrument
from opennbs.models.layer import Layer
from opennbs.models.note import Note
from opennbs.models.song import DEFAULT_VANILLA_INSTRUMENT_COUNT, Song
from opennbs.models.version import Version
from opennbs.utils.binary_io import (
    read_bool,
    read_byte,
    read_int,
    read_short,
    read_signed_short,
    read_string,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

LayerNotes = Dict[int, Dict[int, Note]]


@dataclass
class FieldSpan:
    """Location of one header field or file section in the file."""

    name: str
    start: int
    end: int
    value: object

    @property
    def size(self) -> int:
        return self.end - self.start


@dataclass
class NBSHeader:
    """
    Decoded NBS header.

    Fields absent from older versions hold their documented defaults.
    """

    version: Version
    vanilla_instrument_count: int
    length: int
    layer_count: int
    name: str
    author: str
    original_author: str
    description: str
    tempo: int
    auto_saving: bool
    auto_saving_duration: int
    time_signature: int
    minutes_spent: int
    left_clicks: int
    right_clicks: int
    note_blocks_added: int
    note_blocks_removed: int
    source_file: str
    looping: bool = False
    max_loop_count: int = 0
    loop_start_tick: int = 0
    fields: List[FieldSpan] = field(default_factory=list, repr=False)


class _TrackedStream:
    """Binary stream wrapper that counts consumed bytes."""

    def __init__(self, stream: BinaryIO):
        self._stream = stream
        self.position = 0

    def read(self, size: int = -1) -> bytes:
        data = self._stream.read(size)
        self.position += len(data)
        return data


class NBSReader:
    """
    Reader for Note Block Song files.

    A reader instance handles one decode; the classmethods create a fresh
    one per call.

    Example:
        song = NBSReader.read("song.nbs")
        print(f"Song: {song.name}, {song.layer_count} layers")
    """

    def __init__(self):
        self._stream: Optional[_TrackedStream] = None
        self.header: Optional[NBSHeader] = None
        self.dropped_notes: int = 0
        self.synthesized_layers: List[int] = []
        self.sections: List[FieldSpan] = []

    @classmethod
    def read(cls, filepath: Union[str, Path]) -> Song:
        """
        Read an .nbs file and return a Song.

        Args:
            filepath: Path to .nbs file

        Returns:
            Parsed Song object
        """
        reader = cls()
        return reader.parse_file(filepath)

    def parse_file(self, filepath: Union[str, Path]) -> Song:
        """
        Parse an .nbs file.

        Raises:
            InputError: If the path is not a regular file
        """
        filepath = _require_file(filepath)

        with open(filepath, "rb") as f:
            return self.parse_stream(f)

    def parse_bytes(self, data: bytes) -> Song:
        """Parse .nbs data from bytes."""
        return self.parse_stream(BytesIO(data))

    def parse_stream(self, stream: BinaryIO) -> Song:
        """
        Parse .nbs data from a binary stream.

        The stream is read sequentially and is left open.

        Args:
            stream: Readable binary stream positioned at the start of the song

        Returns:
            Parsed Song object
        """
        self._stream = _TrackedStream(stream)
        self.dropped_notes = 0
        self.synthesized_layers = []
        self.sections = []

        header = self.parse_header()
        self._mark_section("header", 0, len(header.fields))

        start = self._stream.position
        layer_notes, last_tick = self._read_notes(header.version)
        self._mark_section("note_blocks", start, sum(len(n) for n in layer_notes.values()))

        length = header.length
        # Versions 1 and 2 have no length field; the song ends on its last note
        if Version.CLASSIC < header.version < Version.V3:
            length = max(last_tick, 0)

        start = self._stream.position
        layers = self._read_layers(header.version, header.layer_count, layer_notes)
        self._mark_section("layers", start, header.layer_count)

        start = self._stream.position
        custom_instruments = self._read_custom_instruments()
        if custom_instruments:
            self._mark_section("custom_instruments", start, len(custom_instruments))

        logger.debug(
            "Decoded %s song %r: %d layers, %d custom instruments, %d bytes",
            header.version.label,
            header.name,
            len(layers),
            len(custom_instruments),
            self._stream.position,
        )

        return Song(
            name=header.name,
            version=header.version,
            author=header.author,
            original_author=header.original_author,
            description=header.description,
            length=length,
            tempo=header.tempo,
            vanilla_instrument_count=header.vanilla_instrument_count,
            auto_saving=header.auto_saving,
            auto_saving_duration=header.auto_saving_duration,
            time_signature=header.time_signature,
            minutes_spent=header.minutes_spent,
            left_clicks=header.left_clicks,
            right_clicks=header.right_clicks,
            note_blocks_added=header.note_blocks_added,
            note_blocks_removed=header.note_blocks_removed,
            source_file=header.source_file,
            looping=header.looping,
            max_loop_count=header.max_loop_count,
            loop_start_tick=header.loop_start_tick,
            layers=layers,
            custom_instruments=custom_instruments,
        )

    def _mark_section(self, name: str, start: int, count: int) -> None:
        self.sections.append(FieldSpan(name, start, self._stream.position, count))

    def parse_header(self, stream: Optional[BinaryIO] = None) -> NBSHeader:
        """
        Parse the song header, leaving the stream at the first note block.

        Args:
            stream: Stream to read; defaults to the stream being parsed

        Raises:
            FormatError: If the version byte is not a known revision
        """
        if stream is not None:
            self._stream = _TrackedStream(stream)
        fields: List[FieldSpan] = []

        def read(name: str, func: Callable[[BinaryIO], T]) -> T:
            start = self._stream.position
            value = func(self._stream)
            fields.append(FieldSpan(name, start, self._stream.position, value))
            return value

        first_short = read("classic_length_or_zero", read_short)

        if first_short == 0:
            raw_version = read("version", read_byte)
            version = Version.from_int(raw_version)
            if version is None:
                raise FormatError(f"Invalid or unsupported NBS version: {raw_version}")
        else:
            version = Version.CLASSIC

        if version >= Version.V1:
            vanilla_count = read("vanilla_instrument_count", read_byte)
        else:
            vanilla_count = DEFAULT_VANILLA_INSTRUMENT_COUNT

        # Before V3 the leading short doubles as the length (Classic only;
        # V1/V2 derive it from the note data later)
        length = read("length", read_short) if version >= Version.V3 else first_short

        header = NBSHeader(
            version=version,
            vanilla_instrument_count=vanilla_count,
            length=length,
            layer_count=read("layer_count", read_short),
            name=read("name", read_string),
            author=read("author", read_string),
            original_author=read("original_author", read_string),
            description=read("description", read_string),
            tempo=read("tempo", read_short),
            auto_saving=read("auto_saving", read_bool),
            auto_saving_duration=read("auto_saving_duration", read_byte),
            time_signature=read("time_signature", read_byte),
            minutes_spent=read("minutes_spent", read_int),
            left_clicks=read("left_clicks", read_int),
            right_clicks=read("right_clicks", read_int),
            note_blocks_added=read("note_blocks_added", read_int),
            note_blocks_removed=read("note_blocks_removed", read_int),
            source_file=read("source_file", read_string),
        )

        if version >= Version.V4:
            header.looping = read("looping", read_bool)
            header.max_loop_count = read("max_loop_count", read_byte)
            header.loop_start_tick = read("loop_start_tick", read_short)

        header.fields = fields
        self.header = header
        logger.debug("Header: %s, layer count %d", version.label, header.layer_count)
        return header

    def _read_notes(self, version: Version) -> Tuple[LayerNotes, int]:
        """
        Read the jump-encoded note blocks.

        Each populated tick is stored as the distance from the previous
        populated tick, followed by the notes on that tick as distances
        from the previous populated layer. A zero jump ends the layer list,
        and a zero tick jump ends the whole section. Both counters start at
        -1 so the first jump lands on the first index.

        Returns:
            (notes per layer index, last tick read or -1 if none)
        """
        stream = self._stream
        layer_notes: LayerNotes = {}
        tick = -1

        while True:
            tick_jump = read_short(stream)
            if tick_jump == 0:
                break
            tick += tick_jump

            layer = -1
            while True:
                layer_jump = read_short(stream)
                if layer_jump == 0:
                    break
                layer += layer_jump

                if version >= Version.V4:
                    note = Note(
                        instrument=read_byte(stream),
                        key=read_byte(stream),
                        volume=read_byte(stream),
                        panning=read_byte(stream),
                        pitch=read_signed_short(stream),
                    )
                else:
                    note = Note(instrument=read_byte(stream), key=read_byte(stream))

                layer_notes.setdefault(layer, {})[tick] = note

        return layer_notes, tick

    def _read_layers(
        self, version: Version, layer_count: int, layer_notes: LayerNotes
    ) -> Dict[int, Layer]:
        """Read layer records and attach the decoded notes."""
        stream = self._stream
        layers: Dict[int, Layer] = {}

        for index in range(layer_count):
            name = read_string(stream)
            is_locked = read_bool(stream) if version >= Version.V4 else False
            volume = read_byte(stream)
            panning = read_byte(stream) if version >= Version.V2 else 100
            layers[index] = Layer(
                name=name,
                is_locked=is_locked,
                volume=volume,
                panning=panning,
                notes=layer_notes.get(index, {}),
            )

        if layer_count == 0 and layer_notes:
            # No layer records but notes present: keep the notes on default layers
            self.synthesized_layers = sorted(layer_notes)
            logger.warning(
                "Header declares no layers; synthesized %d layers for orphaned notes",
                len(self.synthesized_layers),
            )
            for index in self.synthesized_layers:
                layers[index] = Layer(name="", notes=layer_notes[index])
        else:
            orphaned = [index for index in layer_notes if index >= layer_count]
            if orphaned:
                self.dropped_notes = sum(len(layer_notes[index]) for index in orphaned)
                logger.warning(
                    "Dropped %d notes on layers beyond the declared %d layers",
                    self.dropped_notes,
                    layer_count,
                )

        return layers

    def _read_custom_instruments(self) -> List[Instrument]:
        """Read the optional custom instrument block."""
        stream = self._stream
        count_byte = stream.read(1)
        if not count_byte:
            return []

        instruments = []
        for _ in range(count_byte[0]):
            instruments.append(
                Instrument(
                    name=read_string(stream),
                    file=read_string(stream),
                    key=read_byte(stream),
                    press_piano_key=read_bool(stream),
                )
            )
        return instruments

    @classmethod
    def can_read(cls, filepath: Union[str, Path]) -> bool:
        """
        Check if a file can be read as NBS.

        Only the header is inspected.

        Args:
            filepath: Path to check

        Returns:
            True if the header decodes
        """
        filepath = Path(filepath)

        if not filepath.is_file():
            return False

        try:
            with open(filepath, "rb") as f:
                cls().parse_header(f)
            return True
        except (OSError, NBSError):
            return False

    @classmethod
    def get_file_info(cls, filepath: Union[str, Path]) -> dict:
        """
        Get basic information about an .nbs file without decoding notes.

        Args:
            filepath: Path to .nbs file

        Returns:
            Dictionary with file info
        """
        filepath = _require_file(filepath)

        with open(filepath, "rb") as f:
            header = cls().parse_header(f)

        return {
            "size": filepath.stat().st_size,
            "version": header.version,
            "name": header.name,
            "author": header.author,
            "layer_count": header.layer_count,
            "tempo": header.tempo,
            "header_size": header.fields[-1].end if header.fields else 0,
        }


def _require_file(filepath: Union[str, Path]) -> Path:
    filepath = Path(filepath)
    if not filepath.is_file():
        raise InputError(f"Not a regular file: {filepath}")
    return filepath
