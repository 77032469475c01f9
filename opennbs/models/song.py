"""
Song data model - the top-level container for Note Block Song data.
"""

from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Sequence, Tuple

from opennbs.models.instrument import Instrument
from opennbs.models.layer import Layer
from opennbs.models.note import Note
from opennbs.models.version import LATEST_VERSION, Version
from opennbs.utils.validation import ValidationError, validate_non_negative

DEFAULT_VANILLA_INSTRUMENT_COUNT = 16
DEFAULT_TEMPO = 1000  # 10.00 ticks per second


@dataclass(frozen=True)
class Song:
    """
    Complete Note Block Song.

    Songs are immutable values; use dataclasses.replace() or with_version()
    to derive a modified copy. The layer and custom instrument counts are
    always taken from the collections themselves.

    Attributes:
        name: Song name
        version: Native format version of the song
        author: Author name
        original_author: Original author (for covers)
        description: Free-form description
        length: Song length in ticks
        tempo: Ticks per second multiplied by 100
        vanilla_instrument_count: Number of built-in instruments (version 1+)
        auto_saving: Whether editor auto-save is enabled
        auto_saving_duration: Auto-save interval in minutes
        time_signature: Beats per bar
        minutes_spent: Editing statistics
        left_clicks: Editing statistics
        right_clicks: Editing statistics
        note_blocks_added: Editing statistics
        note_blocks_removed: Editing statistics
        source_file: Name of the imported MIDI/schematic, if any
        looping: Whether playback loops (version 4+)
        max_loop_count: Loop limit, 0 = forever (version 4+)
        loop_start_tick: Tick to jump back to when looping (version 4+)
        layers: Layers keyed by index, ascending (read-only)
        custom_instruments: Custom instruments in id order
    """

    name: str = ""
    version: Version = LATEST_VERSION
    author: str = ""
    original_author: str = ""
    description: str = ""
    length: int = 0
    tempo: int = DEFAULT_TEMPO
    vanilla_instrument_count: int = DEFAULT_VANILLA_INSTRUMENT_COUNT
    auto_saving: bool = False
    auto_saving_duration: int = 10
    time_signature: int = 4
    minutes_spent: int = 0
    left_clicks: int = 0
    right_clicks: int = 0
    note_blocks_added: int = 0
    note_blocks_removed: int = 0
    source_file: str = ""
    looping: bool = False
    max_loop_count: int = 0
    loop_start_tick: int = 0
    layers: Mapping[int, Layer] = field(default_factory=dict)
    custom_instruments: Sequence[Instrument] = field(default_factory=tuple)

    def __post_init__(self):
        validate_non_negative(self.length, "Song length")
        validate_non_negative(self.loop_start_tick, "Loop start tick")
        for index in self.layers:
            validate_non_negative(index, "Layer index")
        version = Version.from_int(int(self.version))
        if version is None:
            raise ValidationError(f"Unknown song version: {self.version}")
        object.__setattr__(self, "version", version)
        object.__setattr__(self, "layers", MappingProxyType(dict(sorted(self.layers.items()))))
        object.__setattr__(self, "custom_instruments", tuple(self.custom_instruments))

    def __hash__(self) -> int:
        values = tuple(getattr(self, f.name) for f in fields(self) if f.name != "layers")
        return hash((values, tuple(self.layers.items())))

    @property
    def layer_count(self) -> int:
        return len(self.layers)

    @property
    def custom_instrument_count(self) -> int:
        return len(self.custom_instruments)

    @property
    def note_count(self) -> int:
        """Total number of notes across all layers."""
        return sum(layer.note_count for layer in self.layers.values())

    @property
    def tempo_tps(self) -> float:
        """Tempo in ticks per second."""
        return self.tempo / 100.0

    def iter_notes(self) -> Iterator[Tuple[int, int, Note]]:
        """
        Iterate all notes in the order they are stored on disk.

        Yields:
            (tick, layer_index, note) tuples sorted by tick, then layer
        """
        cells = [
            (tick, index, note)
            for index, layer in self.layers.items()
            for tick, note in layer.notes.items()
        ]
        cells.sort(key=lambda cell: (cell[0], cell[1]))
        return iter(cells)

    def get_custom_instrument(self, note: Note) -> Optional[Instrument]:
        """
        Get the custom instrument a note plays.

        Returns:
            The Instrument, or None for vanilla instruments and dangling ids
        """
        offset = note.instrument - self.vanilla_instrument_count
        if 0 <= offset < len(self.custom_instruments):
            return self.custom_instruments[offset]
        return None

    def with_version(self, version: Version) -> "Song":
        """Return a copy tagged with another native version."""
        return replace(self, version=version)
